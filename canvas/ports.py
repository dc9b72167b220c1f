"""
canvas/ports.py

Port placement and hit-testing for variables.
"""

from __future__ import annotations

import math

from canvas.geometry import ItemGeometry
from canvas.transform import Rotate
from debug_trace import trace_call
from models import VariableItem
from settings import get_layout_settings


def port_locations(var: VariableItem, geom: ItemGeometry):
    """World positions of the output (right) and input (left) ports."""
    pose = var.pose()
    angle = math.radians(pose.rotation)
    ca = math.cos(angle)
    sa = math.sin(angle)
    z = pose.zoom
    locs = []
    for x0, y0 in ((geom.width, 0.0), (-geom.width + get_layout_settings().ports.inset, 0.0)):
        locs.append((pose.x + z * (x0 * ca - y0 * sa),
                     pose.y + z * (y0 * ca + x0 * sa)))
    return locs


@trace_call("LAYOUT")
def update_port_locs(var: VariableItem, geom: ItemGeometry) -> None:
    """Move the variable's two ports to the edges of its glyph.

    Only call from the thread that owns ``var``.
    """
    for port, (x, y) in zip(var.ports, port_locations(var, geom)):
        port.move_to(x, y)


def in_image(var: VariableItem, geom: ItemGeometry, x: float, y: float) -> bool:
    """Whether world point ``(x, y)`` lies on the variable's glyph.

    The point is rotated back into the glyph's frame and compared with
    its natural half-extents; zoom is not applied.
    """
    pose = var.pose()
    p = Rotate(pose.rotation, pose.x, pose.y).unrotate(x, y)
    rx = p.x() - pose.x
    ry = p.y() - pose.y
    return -geom.width <= rx <= geom.width and -geom.height <= ry <= geom.height
