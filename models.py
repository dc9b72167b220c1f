"""
models.py

Data models for diagram items: poses, ports, variables and operations.

The geometry engine in ``canvas`` only reads these objects, except for
port coordinates (written by ``canvas.ports``) and the slider bounds,
which the variable maintains itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from settings import get_layout_settings


# ----------------------------
# Pose
# ----------------------------

@dataclass(frozen=True)
class Pose:
    """Placement of an item: anchor position, rotation in degrees, zoom."""
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    zoom: float = 1.0

    def __post_init__(self):
        if not self.zoom > 0:
            raise ValueError(f"zoom factor must be positive, got {self.zoom!r}")


# ----------------------------
# Ports
# ----------------------------

@dataclass
class Port:
    """Attachment point for a wire, stored in world coordinates."""
    x: float = 0.0
    y: float = 0.0

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y


def _port_pair() -> Tuple[Port, Port]:
    return (Port(), Port())


# ----------------------------
# Variables
# ----------------------------

class VariableType(Enum):
    """Variable subtypes."""
    CONSTANT = "constant"
    FLOW = "flow"
    STOCK = "stock"
    PARAMETER = "parameter"


@dataclass(eq=False)
class VariableItem:
    """A variable glyph on the canvas.

    ``ports[0]`` is the output side (right edge), ``ports[1]`` the input
    side (left edge), both in world coordinates.
    """
    name: str = ""
    var_type: VariableType = VariableType.FLOW
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    zoom_factor: float = 1.0
    value: float = 0.0
    slider_min: float = 0.0
    slider_max: float = 0.0
    slider_step: float = 0.0
    slider_bounds_set: bool = False
    ports: Tuple[Port, Port] = field(default_factory=_port_pair)

    def pose(self) -> Pose:
        return Pose(self.x, self.y, self.rotation, self.zoom_factor)

    def init_slider_bounds(self) -> None:
        """Give the slider a range around the current value, once."""
        if self.slider_bounds_set:
            return
        if self.value == 0:
            self.slider_min = -1.0
            self.slider_max = 1.0
        else:
            span = get_layout_settings().slider.initial_span_factor * abs(self.value)
            self.slider_min = -span
            self.slider_max = span
        self.slider_step = 0.1 * (self.slider_max - self.slider_min)
        self.slider_bounds_set = True

    def adjust_slider_bounds(self) -> None:
        """Widen the slider range so it contains the current value."""
        if self.slider_max < self.value:
            self.slider_max = self.value
        if self.slider_min > self.value:
            self.slider_min = self.value


# ----------------------------
# Operation kinds
# ----------------------------

@dataclass(frozen=True)
class ConstantOp:
    """Named constant operation, drawn as its description."""
    description: str = ""


@dataclass(frozen=True)
class DataOp:
    """Data (lookup table) operation, drawn as its description."""
    description: str = ""


@dataclass(frozen=True)
class IntegrateOp:
    """Integration operation.

    When ``variable`` is set the integral is coupled: its output variable
    is drawn inside the operation glyph, ``offset`` pixels to the right.
    """
    variable: Optional[VariableItem] = None
    offset: float = 0.0

    @property
    def coupled(self) -> bool:
        return self.variable is not None


@dataclass(frozen=True)
class GenericOp:
    """Any other n-ary operation, drawn at its declared extents."""
    name: str = ""
    arity: int = 2


OperationKind = Union[ConstantOp, DataOp, IntegrateOp, GenericOp]
OPERATION_KINDS = (ConstantOp, DataOp, IntegrateOp, GenericOp)


@dataclass(eq=False)
class OperationItem:
    """An operation glyph on the canvas.

    ``l``, ``r`` and ``h`` are the triangle extents relative to the anchor:
    left edge, apex, and half the height of the left edge.
    """
    kind: OperationKind = field(default_factory=GenericOp)
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    zoom_factor: float = 1.0
    l: float = -8.0
    r: float = 8.0
    h: float = 8.0

    def pose(self) -> Pose:
        return Pose(self.x, self.y, self.rotation, self.zoom_factor)

    def coupled(self) -> bool:
        return isinstance(self.kind, IntegrateOp) and self.kind.coupled


DiagramItem = Union[VariableItem, OperationItem]
