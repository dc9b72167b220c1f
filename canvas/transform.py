"""
canvas/transform.py

Rotation about an item's anchor point.
"""

from __future__ import annotations

from PyQt6.QtCore import QPointF
from PyQt6.QtGui import QTransform


class Rotate:
    """Rotate points by ``angle`` degrees about the pivot ``(x0, y0)``.

    Positive angles turn +x towards +y, which on a y-down canvas is
    clockwise on screen.
    """

    def __init__(self, angle: float, x0: float = 0.0, y0: float = 0.0):
        self.angle = angle
        self.x0 = x0
        self.y0 = y0
        t = QTransform()
        t.translate(x0, y0)
        t.rotate(angle)
        t.translate(-x0, -y0)
        self._transform = t

    def __call__(self, x: float, y: float) -> QPointF:
        return self._transform.map(QPointF(x, y))

    def transform(self) -> QTransform:
        return QTransform(self._transform)

    def inverse(self) -> QTransform:
        """The transform undoing this rotation.

        Raises:
            ValueError: if the transform is singular.
        """
        inverted, invertible = self._transform.inverted()
        if not invertible:
            raise ValueError(f"rotation by {self.angle!r} degrees cannot be inverted")
        return inverted

    def unrotate(self, x: float, y: float) -> QPointF:
        """Map a rotated point back to the unrotated frame."""
        return self.inverse().map(QPointF(x, y))
