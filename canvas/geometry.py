"""
canvas/geometry.py

Natural (unrotated, unzoomed) extents of operation and variable glyphs.

Labelled glyphs are sized from their rendered text; other operations use
their declared extents, and a coupled integral grows to hold the
variable drawn inside it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from PyQt6.QtGui import QPainter

from canvas.metrics import QtTextMetrics, measure, measurement_context
from canvas.slider import constant_label
from debug_trace import trace
from models import (
    ConstantOp,
    DataOp,
    DiagramItem,
    GenericOp,
    IntegrateOp,
    OperationItem,
    VariableItem,
    VariableType,
)
from settings import get_layout_settings
from utils import latex_to_markup


@dataclass(frozen=True)
class ItemGeometry:
    """Half-extents of a glyph and the vertical offset of its label.

    For a coupled integral, ``embedded`` is the geometry of the variable
    drawn inside it and ``embed_offset`` the gap before it.
    """
    width: float
    height: float
    hoffs: float = 0.0
    embedded: Optional["ItemGeometry"] = None
    embed_offset: float = 0.0


def operation_geometry(op: OperationItem, metrics=None,
                       painter: Optional[QPainter] = None) -> ItemGeometry:
    """Geometry of an operation glyph.

    Args:
        op: The operation.
        metrics: Text metrics provider; created on demand when omitted.
        painter: Painter to measure against when ``metrics`` is omitted.
    """
    if metrics is None and (isinstance(op.kind, (ConstantOp, DataOp)) or op.coupled()):
        with measurement_context(painter) as p:
            return _operation_geometry(op, QtTextMetrics(p))
    return _operation_geometry(op, metrics)


def _operation_geometry(op: OperationItem, metrics) -> ItemGeometry:
    settings = get_layout_settings()
    kind = op.kind
    w = max(0.0, 0.5 * (op.r - op.l))
    h = op.h

    if isinstance(kind, (ConstantOp, DataOp)):
        label = measure(metrics, latex_to_markup(kind.description), settings.text.operation_font_size)
        geom = ItemGeometry(
            width=0.5 * label.width + settings.padding.operation_label,
            height=0.5 * label.height + settings.padding.label_height,
            hoffs=label.top,
        )
    elif isinstance(kind, IntegrateOp):
        if kind.coupled:
            embedded = _variable_geometry(kind.variable, metrics)
            geom = ItemGeometry(
                width=max(0.0, w + kind.offset + embedded.width),
                height=max(h, embedded.height),
                embedded=embedded,
                embed_offset=kind.offset,
            )
        else:
            geom = ItemGeometry(w, h)
    elif isinstance(kind, GenericOp):
        geom = ItemGeometry(w, h)
    else:
        raise TypeError(f"unrecognised operation kind {type(kind).__name__}")

    trace(f"operation {type(kind).__name__}: {geom}", "GEOM")
    return geom


def variable_geometry(var: VariableItem, metrics=None,
                      painter: Optional[QPainter] = None) -> ItemGeometry:
    """Geometry of a variable glyph, sized from its rendered label.

    Args:
        var: The variable.
        metrics: Text metrics provider; created on demand when omitted.
        painter: Painter to measure against when ``metrics`` is omitted.
    """
    if metrics is None:
        with measurement_context(painter) as p:
            return _variable_geometry(var, QtTextMetrics(p))
    return _variable_geometry(var, metrics)


def _variable_geometry(var: VariableItem, metrics) -> ItemGeometry:
    settings = get_layout_settings()
    if not isinstance(var.var_type, VariableType):
        raise TypeError(f"unrecognised variable type {var.var_type!r}")

    if var.var_type is VariableType.CONSTANT:
        markup = constant_label(var.value)
        padding = settings.padding.constant_label
    else:
        markup = latex_to_markup(var.name)
        padding = settings.padding.variable_name

    label = measure(metrics, markup, settings.text.variable_font_size)
    geom = ItemGeometry(
        width=0.5 * label.width + padding,
        height=0.5 * label.height + settings.padding.label_height,
        hoffs=label.top,
    )
    trace(f"variable {var.name!r}: {geom}", "GEOM")
    return geom


def item_geometry(item: DiagramItem, metrics=None,
                  painter: Optional[QPainter] = None) -> ItemGeometry:
    if isinstance(item, VariableItem):
        return variable_geometry(item, metrics, painter)
    if isinstance(item, OperationItem):
        return operation_geometry(item, metrics, painter)
    raise TypeError(f"unrecognised item {type(item).__name__}")
