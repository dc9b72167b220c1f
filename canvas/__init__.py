"""
canvas package

Layout, port placement and hit-testing for operation and variable glyphs.
"""

from canvas.geometry import ItemGeometry, item_geometry, operation_geometry, variable_geometry
from canvas.layout import OperationLayout, VariableLayout
from canvas.metrics import LabelMetrics, QtTextMetrics, measurement_context
from canvas.polygon import bounding_polygon, correct
from canvas.ports import in_image, update_port_locs
from canvas.slider import NumericFormattingError, constant_label, handle_pos
from canvas.transform import Rotate

__all__ = [
    "ItemGeometry",
    "item_geometry",
    "operation_geometry",
    "variable_geometry",
    "OperationLayout",
    "VariableLayout",
    "LabelMetrics",
    "QtTextMetrics",
    "measurement_context",
    "bounding_polygon",
    "correct",
    "in_image",
    "update_port_locs",
    "NumericFormattingError",
    "constant_label",
    "handle_pos",
    "Rotate",
]
