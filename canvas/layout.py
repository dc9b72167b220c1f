"""
canvas/layout.py

Per-frame layout of a single glyph.

A layout object measures its item once when constructed; build a new
one whenever the item's label, value or kind changes.  Pose is read from
the item on every call, so moving, rotating or zooming needs no rebuild.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtGui import QPainter, QPolygonF

from canvas.geometry import ItemGeometry, operation_geometry, variable_geometry
from canvas.polygon import operation_polygon, variable_polygon
from canvas.ports import in_image, update_port_locs
from canvas.slider import handle_pos, value_from_handle
from models import OperationItem, VariableItem


class OperationLayout:
    """Layout of an operation glyph."""

    def __init__(self, op: OperationItem, metrics=None, painter: Optional[QPainter] = None):
        self.op = op
        self.geometry: ItemGeometry = operation_geometry(op, metrics, painter)

    def width(self) -> float:
        return self.geometry.width

    def height(self) -> float:
        return self.geometry.height

    def geom(self) -> QPolygonF:
        return operation_polygon(self.op)

    def embedded_geometry(self) -> Optional[ItemGeometry]:
        """Geometry of the variable drawn inside a coupled integral."""
        return self.geometry.embedded


class VariableLayout:
    """Layout of a variable glyph, its ports and its slider."""

    def __init__(self, var: VariableItem, metrics=None, painter: Optional[QPainter] = None):
        self.var = var
        self.geometry: ItemGeometry = variable_geometry(var, metrics, painter)

    def width(self) -> float:
        return self.geometry.width

    def height(self) -> float:
        return self.geometry.height

    def geom(self) -> QPolygonF:
        return variable_polygon(self.var, self.geometry)

    def update_port_locs(self) -> None:
        update_port_locs(self.var, self.geometry)

    def in_image(self, x: float, y: float) -> bool:
        return in_image(self.var, self.geometry, x, y)

    def handle_pos(self) -> float:
        return handle_pos(self.var, self.geometry)

    def value_at(self, offset: float) -> float:
        """Slider value for a handle at ``offset``."""
        return value_from_handle(self.var, self.geometry, offset)
