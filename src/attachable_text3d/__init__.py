"""
Attachable 3D text: bounding boxes, anchors and layout computed from font
metrics, for joining text blocks to each other and to other shapes.
"""

from .anchors import ANCHOR_NAMES, Anchor, anchors_from_boundary
from .boundary import Box, block_boundary, line_boundary, reduce_max_sum_max, section_boundary
from .config import DEFAULTS, Alignment, TextDefaults
from .errors import PreconditionViolation
from .font_metrics import FontId, FontMetricsTable, load_font_metrics
from .layout import Placement, place_elements, place_lines, place_sections, stack_shift

__version__ = "0.1.0"

__all__ = [
    "ANCHOR_NAMES",
    "Alignment",
    "Anchor",
    "Box",
    "DEFAULTS",
    "FontId",
    "FontMetricsTable",
    "Placement",
    "PreconditionViolation",
    "TextDefaults",
    "anchors_from_boundary",
    "block_boundary",
    "line_boundary",
    "load_font_metrics",
    "place_elements",
    "place_lines",
    "place_sections",
    "reduce_max_sum_max",
    "section_boundary",
    "stack_shift",
]
