"""
canvas/drawing.py

Small decorative drawing primitives used alongside glyphs.
"""

from __future__ import annotations

import math
from typing import Optional

from PyQt6.QtCore import Qt, QPointF
from PyQt6.QtGui import QBrush, QColor, QPainter, QPolygonF

from settings import get_layout_settings
from utils import hex_to_qcolor


def indicator_color() -> QColor:
    """Configured indicator colour. Default: #FF0000 (red)."""
    return hex_to_qcolor(get_layout_settings().indicator.color, QColor(Qt.GlobalColor.red))


def draw_triangle(painter: QPainter, x: float, y: float,
                  color: Optional[QColor] = None, angle: float = 0.0) -> None:
    """Fill an indicator triangle pointing along ``angle`` (radians) from ``(x, y)``."""
    settings = get_layout_settings().indicator
    if color is None:
        color = indicator_color()
    painter.save()
    try:
        painter.translate(x, y)
        painter.rotate(math.degrees(angle))
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(color))
        painter.drawPolygon(QPolygonF([
            QPointF(settings.length, 0),
            QPointF(0, -settings.half_base),
            QPointF(0, settings.half_base),
        ]))
    finally:
        painter.restore()
