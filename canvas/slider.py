"""
canvas/slider.py

Value display and slider handle mapping for variables.

Constants show their value in engineering notation; the slider maps a
value within ``[slider_min, slider_max]`` to a handle offset along the
variable's half-width, measured from the middle of the range.
"""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_EVEN, Context, Decimal
from typing import TYPE_CHECKING, NamedTuple, Optional, Union

from debug_trace import trace_exception
from models import VariableItem
from settings import get_layout_settings

if TYPE_CHECKING:
    from canvas.geometry import ItemGeometry

log = logging.getLogger(__name__)

FALLBACK_LABEL = "0"


class NumericFormattingError(ValueError):
    """A value could not be written in engineering notation."""


class EngNotation(NamedTuple):
    sci_exp: int
    eng_exp: int


def _notation(sci: int) -> EngNotation:
    return EngNotation(sci, 3 * (sci // 3))


def eng_exp(value: float) -> EngNotation:
    """Split ``value`` into its decimal exponent and the multiple of three below it."""
    if not math.isfinite(value):
        raise NumericFormattingError(f"cannot format {value!r}")
    if value == 0:
        return EngNotation(0, 0)
    return _notation(Decimal(value).adjusted())


def mantissa(value: Union[float, Decimal], e: EngNotation, digits: Optional[int] = None) -> str:
    if digits is None:
        digits = get_layout_settings().slider.mantissa_digits
    decimals = max(0, digits - 1 - (e.sci_exp - e.eng_exp))
    # exact, including subnormal values
    return f"{Decimal(value).scaleb(-e.eng_exp):.{decimals}f}"


def exp_multiplier(exp: int) -> str:
    return f"×10<sup>{exp}</sup>" if exp != 0 else ""


def format_constant(value: float) -> str:
    """Engineering notation markup for a constant's value.

    The value is rounded to the configured number of significant digits
    before its exponent is chosen, so 999.95 reads ``1.00×10<sup>3</sup>``.
    Values in [0.001, 1.0) are written as plain decimals.

    Raises:
        NumericFormattingError: if the value is not finite or the digit
            setting is unusable.
    """
    digits = get_layout_settings().slider.mantissa_digits
    e = eng_exp(value)
    try:
        rounded = Decimal(value)
        if value != 0:
            rounded = Context(prec=digits, rounding=ROUND_HALF_EVEN).plus(rounded)
            e = _notation(rounded.adjusted())
        if e.eng_exp == -3:
            e = EngNotation(e.sci_exp, 0)
        return mantissa(rounded, e, digits) + exp_multiplier(e.eng_exp)
    except (ArithmeticError, ValueError) as exc:
        raise NumericFormattingError(f"cannot format {value!r}") from exc


def constant_label(value: float) -> str:
    """Display label for a constant, ``"0"`` when the value can't be formatted."""
    try:
        return format_constant(value)
    except NumericFormattingError:
        log.debug("Could not format constant value %r, showing %r", value, FALLBACK_LABEL)
        trace_exception("constant_label")
        return FALLBACK_LABEL


def handle_pos(var: VariableItem, geom: "ItemGeometry") -> float:
    """Offset of the slider handle from the variable's centre.

    The variable's slider bounds are initialised and widened to contain
    its value first.
    """
    var.init_slider_bounds()
    var.adjust_slider_bounds()
    span = var.slider_max - var.slider_min
    if span == 0:
        return 0.0
    return geom.width * (var.value - 0.5 * (var.slider_min + var.slider_max)) / span


def value_from_handle(var: VariableItem, geom: "ItemGeometry", offset: float) -> float:
    """Value for a handle dragged to ``offset``, clamped to the slider range."""
    var.init_slider_bounds()
    var.adjust_slider_bounds()
    mid = 0.5 * (var.slider_min + var.slider_max)
    if geom.width == 0:
        return mid
    value = mid + offset * (var.slider_max - var.slider_min) / geom.width
    return min(max(value, var.slider_min), var.slider_max)
