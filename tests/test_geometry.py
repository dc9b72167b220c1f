"""Tests for glyph geometry: label-sized extents, declared extents, and
coupled integrals.

Text is measured with a deterministic stand-in so the expected sizes can
be written down; the real Qt measurement is covered at the end.
"""
from __future__ import annotations

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from canvas import slider
from canvas.geometry import ItemGeometry, item_geometry, operation_geometry, variable_geometry
from canvas.metrics import QtTextMetrics, measure, measurement_context
from canvas.slider import NumericFormattingError
from models import (
    ConstantOp,
    DataOp,
    GenericOp,
    IntegrateOp,
    OperationItem,
    VariableItem,
    VariableType,
)
from settings import SettingsManager, set_settings


class FixedMetrics:
    """Each character is 6 px wide; every label is 10 px tall, top offset 1."""

    def __init__(self, char_width=6.0, fixed_width=None):
        self.char_width = char_width
        self.fixed_width = fixed_width
        self.font_sizes = []
        self.markups = []

    def set_font_size(self, px):
        self.font_sizes.append(px)

    def set_markup(self, markup):
        self.markups.append(markup)

    def width(self):
        if self.fixed_width is not None:
            return self.fixed_width
        return self.char_width * len(self.markups[-1])

    def height(self):
        return 10.0

    def top(self):
        return 1.0


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def qapp():
    """Provide a single QApplication for the entire test session."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture()
def metrics():
    return FixedMetrics()


# ---------------------------------------------------------------------------
# Variables
# ---------------------------------------------------------------------------

class TestVariableGeometry:
    def test_named_variable_leaves_room_for_value(self, metrics):
        geom = variable_geometry(VariableItem(name="flow"), metrics)
        # "flow" -> 24 px wide
        assert geom.width == pytest.approx(0.5 * 24 + 12)
        assert geom.height == pytest.approx(0.5 * 10 + 4)
        assert geom.hoffs == 1.0

    def test_variable_font_size(self, metrics):
        variable_geometry(VariableItem(name="x", var_type=VariableType.STOCK), metrics)
        assert metrics.font_sizes == [12]

    def test_name_goes_through_markup(self, metrics):
        variable_geometry(VariableItem(name="x_1"), metrics)
        assert metrics.markups == ["x<sub>1</sub>"]

    def test_constant_shows_formatted_value(self, metrics):
        var = VariableItem(var_type=VariableType.CONSTANT, value=1234.0)
        geom = variable_geometry(var, metrics)
        assert metrics.markups == ["1.23×10<sup>3</sup>"]
        assert geom.width == pytest.approx(0.5 * 6 * len(metrics.markups[0]) + 2)
        assert geom.height == pytest.approx(9.0)

    def test_constant_uses_value_not_name(self, metrics):
        var = VariableItem(name="ignored", var_type=VariableType.CONSTANT, value=0.0)
        variable_geometry(var, metrics)
        assert metrics.markups == ["0.00"]

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_unformattable_constant_falls_back_to_zero(self, metrics, value):
        var = VariableItem(var_type=VariableType.CONSTANT, value=value)
        geom = variable_geometry(var, metrics)
        assert metrics.markups == ["0"]
        assert geom.width == pytest.approx(0.5 * 6 + 2)
        assert geom.height == pytest.approx(9.0)

    @pytest.mark.parametrize("value, label", [
        (1e-310, "100×10<sup>-312</sup>"),
        (5e-324, "4.94×10<sup>-324</sup>"),
    ])
    def test_subnormal_constant_is_formatted(self, metrics, value, label):
        var = VariableItem(var_type=VariableType.CONSTANT, value=value)
        geom = variable_geometry(var, metrics)
        assert metrics.markups == [label]
        assert geom.width == pytest.approx(0.5 * 6 * len(label) + 2)

    def test_forced_formatting_failure(self, metrics, monkeypatch):
        def boom(value):
            raise NumericFormattingError("forced")

        monkeypatch.setattr(slider, "format_constant", boom)
        var = VariableItem(var_type=VariableType.CONSTANT, value=3.0)
        first = variable_geometry(var, metrics)
        second = variable_geometry(var, metrics)
        assert metrics.markups == ["0", "0"]
        assert first == second

    def test_unknown_variable_type(self, metrics):
        with pytest.raises(TypeError):
            variable_geometry(VariableItem(var_type="gauge"), metrics)

    def test_padding_comes_from_settings(self, metrics, tmp_path, monkeypatch):
        monkeypatch.setattr("platformdirs.user_config_dir", lambda app: str(tmp_path))
        sm = SettingsManager()
        sm.settings.layout.padding.variable_name = 20.0
        set_settings(sm)
        try:
            geom = variable_geometry(VariableItem(name="ab"), metrics)
        finally:
            set_settings(None)
        assert geom.width == pytest.approx(0.5 * 12 + 20)


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

class TestOperationGeometry:
    def test_generic_operation_uses_declared_extents(self):
        op = OperationItem(GenericOp("add"), l=-8, r=12, h=6)
        geom = operation_geometry(op)
        assert geom.width == pytest.approx(10.0)
        assert geom.height == pytest.approx(6.0)
        assert geom.hoffs == 0.0
        assert geom.embedded is None

    def test_uncoupled_integral_uses_declared_extents(self):
        geom = operation_geometry(OperationItem(IntegrateOp(), l=-10, r=10, h=8))
        assert geom == ItemGeometry(10.0, 8.0)

    @pytest.mark.parametrize("kind", [ConstantOp("k"), DataOp("k")])
    def test_named_operation_sized_from_label(self, metrics, kind):
        geom = operation_geometry(OperationItem(kind), metrics)
        assert metrics.font_sizes == [10]
        assert geom.width == pytest.approx(0.5 * 6 + 2)
        assert geom.height == pytest.approx(0.5 * 10 + 4)
        assert geom.hoffs == 1.0

    def test_named_operation_markup(self, metrics):
        operation_geometry(OperationItem(ConstantOp("\\alpha")), metrics)
        assert metrics.markups == ["&alpha;"]

    def test_coupled_integral_composition(self):
        # embedded constant: 0.5 * 12 + 2 = 8
        var = VariableItem(var_type=VariableType.CONSTANT, value=1.0)
        op = OperationItem(IntegrateOp(var, offset=5), l=-10, r=10, h=8)
        geom = operation_geometry(op, FixedMetrics(fixed_width=12.0))
        assert geom.embedded.width == pytest.approx(8.0)
        assert geom.width == pytest.approx(23.0)
        assert geom.embed_offset == 5
        assert geom.height == pytest.approx(9.0)

    def test_coupled_integral_keeps_taller_base(self):
        var = VariableItem(name="v")
        op = OperationItem(IntegrateOp(var, offset=3), l=-10, r=10, h=20)
        geom = operation_geometry(op, FixedMetrics())
        assert geom.height == pytest.approx(20.0)

    def test_coupled_width_never_negative(self):
        var = VariableItem(var_type=VariableType.CONSTANT, value=1.0)
        op = OperationItem(IntegrateOp(var, offset=-100), l=-10, r=10, h=8)
        geom = operation_geometry(op, FixedMetrics(fixed_width=12.0))
        assert geom.width == 0.0

    def test_unknown_operation_kind(self):
        with pytest.raises(TypeError):
            operation_geometry(OperationItem(kind="sqrt"))

    def test_item_geometry_dispatch(self, metrics):
        assert item_geometry(VariableItem(name="ab"), metrics).width == pytest.approx(18.0)
        assert item_geometry(OperationItem(GenericOp())).width == pytest.approx(8.0)
        with pytest.raises(TypeError):
            item_geometry(object())


# ---------------------------------------------------------------------------
# Real Qt measurement
# ---------------------------------------------------------------------------

class TestQtMeasuredGeometry:
    def test_fallback_label_matches_rendered_zero(self, qapp):
        var = VariableItem(var_type=VariableType.CONSTANT, value=float("nan"))
        first = variable_geometry(var)
        second = variable_geometry(var)

        with measurement_context() as painter:
            zero = measure(QtTextMetrics(painter), "0", 12)

        assert first == second
        assert first.width == pytest.approx(0.5 * zero.width + 2)
        assert first.height == pytest.approx(0.5 * zero.height + 4)
        assert first.width > 0 and first.height > 0

    def test_geometry_with_supplied_painter(self, qapp):
        var = VariableItem(name="stock")
        with measurement_context() as painter:
            geom = variable_geometry(var, painter=painter)
            assert painter.isActive()
        assert geom == variable_geometry(var)
