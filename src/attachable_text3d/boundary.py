"""
Text Boundaries

This module turns measured glyph extents into 3D bounding boxes:
- one line of text
- a block of lines at one font size
- a stack of sections, each block at its own font size

Stacked elements share a horizontal lane and take distinct rows, so boxes
combine as max width, summed depth, max height.
"""

import logging
from typing import List, NamedTuple, Optional, Sequence, Tuple, Union

from .config import DEFAULTS
from .errors import PreconditionViolation, require_non_negative, require_positive
from .font_metrics import FontMetricsTable

logger = logging.getLogger(__name__)

TextLines = Union[str, Sequence[str]]


class Box(NamedTuple):
    """Extents of a bounding volume along x (width), y (depth) and z (height)."""

    width: float
    depth: float
    height: float


def as_lines(text: TextLines, parameter: str = "text") -> List[str]:
    """
    Normalize text to a non-empty list of lines.

    Args:
        text: A single string or a sequence of strings
        parameter: Name used in error messages

    Returns:
        List of line strings
    """
    if isinstance(text, str):
        return [text]
    if not isinstance(text, (list, tuple)):
        raise PreconditionViolation(parameter, "must be a string or a list of strings", text)
    if not text:
        raise PreconditionViolation(parameter, "must contain at least one line", text)
    for line in text:
        if not isinstance(line, str):
            raise PreconditionViolation(parameter, "every line must be a string", line)
    return list(text)


def line_boundary(
    metrics: FontMetricsTable,
    text: str,
    *,
    font: Optional[str] = None,
    size: Optional[float] = None,
    height: Optional[float] = None,
    pad: Optional[float] = None,
    spacing: Optional[float] = None,
) -> Box:
    """
    Compute the box of a single line of text.

    Both the ink origin and the ink extent count towards the box, since
    glyphs can start off the nominal origin.

    Args:
        metrics: Font metrics table
        text: The line to measure
        font: Font identifier
        size: Font size
        height: Extrusion thickness
        pad: Padding added to every dimension
        spacing: Character spacing multiplier

    Returns:
        The line's Box
    """
    if not isinstance(text, str):
        raise PreconditionViolation("text", "must be a string", text)
    options = DEFAULTS.with_overrides(font=font, size=size, height=height, pad=pad, spacing=spacing)
    size = require_positive("size", options.size)
    height = require_positive("height", options.height)
    pad = require_non_negative("pad", options.pad)
    spacing = require_non_negative("spacing", options.spacing)

    (origin_x, origin_y), (extent_x, extent_y) = metrics.measure(
        text, options.font, size, spacing
    )
    # Ink lying wholly below the baseline or left of the origin counts as empty.
    box = Box(
        max(0.0, extent_x + origin_x) + pad,
        max(0.0, extent_y + origin_y) + pad,
        height + pad,
    )
    logger.debug("line_boundary(%r, size=%s) -> %s", text, size, box)
    return box


def reduce_max_sum_max(boxes: Sequence[Box]) -> Box:
    """
    Combine stacked boxes: max width, summed depth, max height.

    Args:
        boxes: Non-empty sequence of boxes

    Returns:
        The combined Box
    """
    boxes = list(boxes)
    if not boxes:
        raise PreconditionViolation("boxes", "must not be empty", boxes)
    return Box(
        max(b.width for b in boxes),
        sum(b.depth for b in boxes),
        max(b.height for b in boxes),
    )


def line_boundaries(
    metrics: FontMetricsTable,
    text: TextLines,
    *,
    font: Optional[str] = None,
    size: Optional[float] = None,
    height: Optional[float] = None,
    pad: Optional[float] = None,
    spacing: Optional[float] = None,
) -> List[Box]:
    """Compute the Box of every line in a block, in order."""
    return [
        line_boundary(metrics, line, font=font, size=size, height=height, pad=pad, spacing=spacing)
        for line in as_lines(text)
    ]


def stack_boundary(boxes: Sequence[Box], line_spacing: float) -> Box:
    """Reduce boxes and add ``line_spacing`` between each pair of rows."""
    total = reduce_max_sum_max(boxes)
    return total._replace(depth=total.depth + line_spacing * (len(boxes) - 1))


def block_boundary(
    metrics: FontMetricsTable,
    text: TextLines,
    *,
    font: Optional[str] = None,
    size: Optional[float] = None,
    height: Optional[float] = None,
    line_spacing: Optional[float] = None,
    pad: Optional[float] = None,
    spacing: Optional[float] = None,
) -> Box:
    """
    Compute the box of a block of lines sharing one font size.

    A single-line block is exactly that line's box.

    Args:
        metrics: Font metrics table
        text: A string or a non-empty list of strings
        font: Font identifier
        size: Font size
        height: Extrusion thickness
        line_spacing: Gap between lines
        pad: Padding
        spacing: Character spacing multiplier

    Returns:
        The block's Box
    """
    lines = as_lines(text)
    line_spacing = require_non_negative(
        "line_spacing", DEFAULTS.line_spacing if line_spacing is None else line_spacing
    )
    boxes = line_boundaries(
        metrics, lines, font=font, size=size, height=height, pad=pad, spacing=spacing
    )
    return stack_boundary(boxes, line_spacing)


def as_sections(sections) -> List[Tuple[List[str], float]]:
    """
    Normalize (text, size) pairs, validating every size.

    Args:
        sections: Non-empty sequence of (text or lines, size) pairs

    Returns:
        List of (lines, size) tuples
    """
    if not isinstance(sections, (list, tuple)) or not sections:
        raise PreconditionViolation("sections", "must be a non-empty list of (text, size) pairs", sections)
    normalized = []
    for section in sections:
        if not isinstance(section, (list, tuple)) or len(section) != 2:
            raise PreconditionViolation("sections", "every section must be a (text, size) pair", section)
        text, size = section
        normalized.append((as_lines(text, "sections"), require_positive("size", size)))
    return normalized


def section_boundary(
    metrics: FontMetricsTable,
    sections,
    *,
    font: Optional[str] = None,
    height: Optional[float] = None,
    line_spacing: Optional[float] = None,
    pad: Optional[float] = None,
    spacing: Optional[float] = None,
) -> Tuple[Box, List[Box]]:
    """
    Compute the box of a stack of sections, each at its own font size.

    Args:
        metrics: Font metrics table
        sections: Non-empty sequence of (text, size) pairs
        font: Font identifier
        height: Extrusion thickness
        line_spacing: Gap between lines and between sections
        pad: Padding
        spacing: Character spacing multiplier

    Returns:
        Tuple of (aggregate Box, list of each section's Box)
    """
    normalized = as_sections(sections)
    line_spacing = require_non_negative(
        "line_spacing", DEFAULTS.line_spacing if line_spacing is None else line_spacing
    )
    section_boxes = [
        block_boundary(
            metrics,
            lines,
            font=font,
            size=size,
            height=height,
            line_spacing=line_spacing,
            pad=pad,
            spacing=spacing,
        )
        for lines, size in normalized
    ]
    total = stack_boundary(section_boxes, line_spacing)
    logger.debug("section_boundary(%d sections) -> %s", len(section_boxes), total)
    return total, section_boxes
