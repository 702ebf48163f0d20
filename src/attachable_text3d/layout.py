"""
Layout Placement

Computes where each line (or section) of a text block goes relative to the
center of the block's Box. Rows are stacked top to bottom. Each row is first
placed relative to the first row, which depends only on the rows before it,
then the whole stack is shifted onto the block's center.
"""

import logging
from itertools import accumulate
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .anchors import Vec3
from .boundary import (
    Box,
    TextLines,
    as_lines,
    as_sections,
    line_boundaries,
    stack_boundary,
)
from .config import DEFAULTS, Alignment
from .errors import PreconditionViolation, require_non_negative
from .font_metrics import FontMetricsTable

logger = logging.getLogger(__name__)


class Placement(NamedTuple):
    """One placed line of text."""

    section: int
    line: int
    text: str
    size: float
    box: Box
    offset: Vec3


def prefix_depths(boxes: Sequence[Box], spacing: float) -> List[float]:
    """
    Depth taken by the rows before each row, including the gaps.

    Args:
        boxes: Row boxes, top to bottom
        spacing: Gap between rows

    Returns:
        One value per row; zero for the first
    """
    depths = [b.depth + spacing for b in boxes[:-1]]
    return list(accumulate(depths, initial=0.0))


def horizontal_offset(total: Box, align: Alignment) -> float:
    """X shift applied to every row for the given alignment."""
    if align is Alignment.LEFT:
        return -total.width / 2
    if align is Alignment.RIGHT:
        return total.width / 2
    return 0.0


def place_elements(boxes: Sequence[Box], spacing: float = 0.0) -> List[Vec3]:
    """
    Compute the offset of each stacked row from the first row.

    The first row is the top one; each later row moves forward (-Y) by the
    depth of every row above it plus the gaps. A row's offset depends only
    on the rows before it.

    Args:
        boxes: Non-empty sequence of row boxes
        spacing: Gap between rows

    Returns:
        One (x, y, z) offset per row
    """
    boxes = list(boxes)
    if not boxes:
        raise PreconditionViolation("elements", "must not be empty", boxes)
    spacing = require_non_negative("spacing", spacing)
    return [(0.0, -prefix, 0.0) for prefix in prefix_depths(boxes, spacing)]


def stack_shift(total: Box, first: Box, align=Alignment.LEFT) -> Vec3:
    """
    Shift from first-row coordinates to the center of the stack.

    Vertically the first row's center goes half its own depth below the
    stack's top edge; horizontally the alignment edge of the widest row.

    Args:
        total: Box of the whole stack
        first: Box of the first row
        align: Horizontal alignment

    Returns:
        (x, y, z) shift added to every row offset
    """
    align = Alignment.parse(align)
    return (horizontal_offset(total, align), total.depth / 2 - first.depth / 2, 0.0)


def _shifted(offset: Vec3, shift: Vec3) -> Vec3:
    return tuple(o + s for o, s in zip(offset, shift))


def place_lines(
    metrics: FontMetricsTable,
    text: TextLines,
    *,
    font: Optional[str] = None,
    size: Optional[float] = None,
    height: Optional[float] = None,
    line_spacing: Optional[float] = None,
    pad: Optional[float] = None,
    spacing: Optional[float] = None,
    align=None,
) -> Tuple[Box, List[Placement]]:
    """
    Lay out a block of lines at one font size.

    Args:
        metrics: Font metrics table
        text: A string or a non-empty list of strings
        font: Font identifier
        size: Font size
        height: Extrusion thickness
        line_spacing: Gap between lines
        pad: Padding
        spacing: Character spacing multiplier
        align: Horizontal alignment

    Returns:
        Tuple of (block Box, placements)
    """
    lines = as_lines(text)
    options = DEFAULTS.with_overrides(size=size, line_spacing=line_spacing, align=align)
    line_spacing = require_non_negative("line_spacing", options.line_spacing)
    boxes = line_boundaries(
        metrics, lines, font=font, size=options.size, height=height, pad=pad, spacing=spacing
    )
    total = stack_boundary(boxes, line_spacing)
    shift = stack_shift(total, boxes[0], options.align)
    offsets = [_shifted(offset, shift) for offset in place_elements(boxes, line_spacing)]

    placements = [
        Placement(0, i, line, options.size, box, offset)
        for i, (line, box, offset) in enumerate(zip(lines, boxes, offsets))
    ]
    logger.debug("Placed %d lines in %s", len(placements), total)
    return total, placements


def place_sections(
    metrics: FontMetricsTable,
    sections,
    *,
    font: Optional[str] = None,
    height: Optional[float] = None,
    line_spacing: Optional[float] = None,
    pad: Optional[float] = None,
    spacing: Optional[float] = None,
    align=None,
) -> Tuple[Box, List[Placement]]:
    """
    Lay out a stack of sections, each a block at its own font size.

    Sections are stacked like lines. Lines inside a section are placed
    around the section's center, then moved with it.

    Args:
        metrics: Font metrics table
        sections: Non-empty sequence of (text, size) pairs
        font: Font identifier
        height: Extrusion thickness
        line_spacing: Gap between lines and between sections
        pad: Padding
        spacing: Character spacing multiplier
        align: Horizontal alignment

    Returns:
        Tuple of (aggregate Box, placements of every line)
    """
    normalized = as_sections(sections)
    options = DEFAULTS.with_overrides(line_spacing=line_spacing, align=align)

    blocks = [
        place_lines(
            metrics,
            lines,
            font=font,
            size=size,
            height=height,
            line_spacing=options.line_spacing,
            pad=pad,
            spacing=spacing,
            align=options.align,
        )
        for lines, size in normalized
    ]
    section_boxes = [box for box, _ in blocks]
    total = stack_boundary(section_boxes, options.line_spacing)
    shift = stack_shift(total, section_boxes[0], options.align)
    section_offsets = [
        _shifted(offset, shift) for offset in place_elements(section_boxes, options.line_spacing)
    ]
    x = shift[0]

    placements = []
    for index, ((_, lines), (_, section_y, _)) in enumerate(zip(blocks, section_offsets)):
        for placement in lines:
            _, line_y, line_z = placement.offset
            placements.append(
                placement._replace(section=index, offset=(x, section_y + line_y, line_z))
            )
    return total, placements
