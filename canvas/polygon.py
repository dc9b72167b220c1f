"""
canvas/polygon.py

Bounding polygons of glyphs in world coordinates.

Variables are rectangles and operations triangles, built at the item's
zoom and rotated about its anchor.  Every polygon comes back closed and
with a negative shoelace area (clockwise in a y-up frame).
"""

from __future__ import annotations

from PyQt6.QtGui import QPolygonF

from canvas.geometry import ItemGeometry
from canvas.transform import Rotate
from models import DiagramItem, OperationItem, VariableItem


def signed_area(polygon: QPolygonF) -> float:
    """Shoelace area; closing vertex optional."""
    n = polygon.count()
    total = 0.0
    for i in range(n):
        a = polygon.at(i)
        b = polygon.at((i + 1) % n)
        total += a.x() * b.y() - b.x() * a.y()
    return 0.5 * total


def correct(polygon: QPolygonF) -> QPolygonF:
    """Return a closed copy of ``polygon`` with clockwise winding."""
    points = [polygon.at(i) for i in range(polygon.count())]
    if len(points) > 1 and points[0] == points[-1]:
        points.pop()
    if signed_area(QPolygonF(points)) > 0:
        points.reverse()
    if points:
        points.append(points[0])
    return QPolygonF(points)


def variable_polygon(var: VariableItem, geom: ItemGeometry) -> QPolygonF:
    pose = var.pose()
    x, y = pose.x, pose.y
    wz = geom.width * pose.zoom
    hz = geom.height * pose.zoom
    rotate = Rotate(pose.rotation, x, y)
    return correct(QPolygonF([
        rotate(x - wz, y - hz),
        rotate(x - wz, y + hz),
        rotate(x + wz, y + hz),
        rotate(x + wz, y - hz),
    ]))


def operation_polygon(op: OperationItem) -> QPolygonF:
    """Triangle from the left edge at ``l`` (half-height ``h``) to the apex at ``r``."""
    pose = op.pose()
    x, y = pose.x, pose.y
    zl = op.l * pose.zoom
    zh = op.h * pose.zoom
    zr = op.r * pose.zoom
    rotate = Rotate(pose.rotation, x, y)
    return correct(QPolygonF([
        rotate(x + zl, y - zh),
        rotate(x + zl, y + zh),
        rotate(x + zr, y),
    ]))


def bounding_polygon(item: DiagramItem, geom: ItemGeometry) -> QPolygonF:
    if isinstance(item, VariableItem):
        return variable_polygon(item, geom)
    if isinstance(item, OperationItem):
        return operation_polygon(item)
    raise TypeError(f"unrecognised item {type(item).__name__}")
