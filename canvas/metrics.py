"""
canvas/metrics.py

Rendered-text measurement for labels.

``QtTextMetrics`` lays rich text out with ``QTextDocument`` against a
painter's device.  ``measurement_context`` supplies that painter: the
caller's own one, or a throwaway off-screen one that lives exactly as long
as the ``with`` block.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from PyQt6.QtGui import QFont, QImage, QPainter, QTextDocument

from settings import get_layout_settings

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LabelMetrics:
    """Extents of a rendered label."""
    width: float
    height: float
    top: float


class QtTextMetrics:
    """Measures markup at a given font size.

    Usage mirrors a text layout object: set the font size and the markup,
    then read ``width()``, ``height()`` and ``top()``.  Results depend only
    on the (markup, font size) pair and the paint device resolution.
    """

    def __init__(self, painter: QPainter, family: Optional[str] = None):
        if family is None:
            family = get_layout_settings().text.family
        self._font = QFont(family) if family else QFont()
        self._doc = QTextDocument()
        self._doc.setDocumentMargin(0)
        self._doc.documentLayout().setPaintDevice(painter.device())
        self._doc.setDefaultFont(self._font)

    def set_font_size(self, px: float) -> None:
        self._font.setPixelSize(max(1, int(round(px))))
        self._doc.setDefaultFont(self._font)

    def set_markup(self, markup: str) -> None:
        self._doc.setHtml(markup)

    def width(self) -> float:
        return self._doc.idealWidth()

    def height(self) -> float:
        return self._doc.size().height()

    def top(self) -> float:
        return self._doc.documentLayout().blockBoundingRect(self._doc.begin()).top()


def measure(metrics, markup: str, font_size: float) -> LabelMetrics:
    """Measure ``markup`` at ``font_size`` with any text metrics provider."""
    metrics.set_font_size(font_size)
    metrics.set_markup(markup)
    return LabelMetrics(metrics.width(), metrics.height(), metrics.top())


@contextmanager
def measurement_context(painter: Optional[QPainter] = None) -> Iterator[QPainter]:
    """Yield a painter to measure text against.

    A supplied painter is passed through and left active.  Otherwise an
    off-screen surface is created for the duration of the block and its
    painter is ended on every exit path.
    """
    if painter is not None:
        yield painter
        return

    size = get_layout_settings().measurement.surface_size
    surface = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    temp = QPainter()
    if not temp.begin(surface):
        raise RuntimeError("could not open a painter on the measurement surface")
    log.debug("Opened %dx%d measurement surface", size, size)
    try:
        yield temp
    finally:
        temp.end()
        log.debug("Released measurement surface")
