"""
Text Geometry Creation

This module renders one line of text to a 3D solid with build123d. The
glyphs are laid out from the font's nominal origin, then moved so that the
line's Box is vertically centered on the origin and its left edge, center
or right edge sits at x=0. The solid is extruded symmetrically about z=0.
"""

import logging
from typing import Optional, Tuple

from build123d import Align, FontStyle, Location, Part, Text, extrude

from .boundary import Box
from .config import DIRECTIONS, Alignment
from .errors import PreconditionViolation
from .font_metrics import FontId

logger = logging.getLogger(__name__)


class LineText:
    """Creates the 3D solid for a single line of text."""

    def __init__(
        self,
        text: str,
        font: FontId,
        size: float,
        height: float,
        box: Box,
        pad: float = 0.0,
        align: Alignment = Alignment.LEFT,
        size_to_em: float = 4.0 / 3.0,
        direction: str = "ltr",
        language: str = "en",
        script: str = "latin",
    ):
        """
        Initialize LineText.

        Args:
            text: The line to render
            font: Font to render with
            size: Font size, as used by the metrics table
            height: Extrusion thickness
            box: The line's Box, as computed from the metrics table
            pad: Padding included in the Box
            align: Which edge of the line sits at the origin
            size_to_em: Em square size per unit of font size
            direction: Writing direction, passed through
            language: Language tag, passed through
            script: Script tag, passed through
        """
        if direction not in DIRECTIONS:
            raise PreconditionViolation("direction", f"must be one of {', '.join(DIRECTIONS)}", direction)
        self.text = text
        self.font = font
        self.size = size
        self.height = height
        self.box = box
        self.pad = pad
        self.align = Alignment.parse(align)
        self.size_to_em = size_to_em
        self.direction = direction
        self.language = language
        self.script = script
        self.solid: Optional[Part] = None

    @property
    def font_style(self) -> FontStyle:
        if self.font.is_bold and self.font.is_italic:
            return FontStyle.BOLDITALIC
        if self.font.is_bold:
            return FontStyle.BOLD
        if self.font.is_italic:
            return FontStyle.ITALIC
        return FontStyle.REGULAR

    def origin_shift(self) -> Tuple[float, float]:
        """
        Where the font's nominal origin goes in line coordinates.

        The Box spans the nominal origin to the far ink edges, with half the
        padding on each side.

        Returns:
            (x, y) position of the nominal origin
        """
        ink_width = self.box.width - self.pad
        ink_depth = self.box.depth - self.pad
        half_pad = self.pad / 2

        if self.align is Alignment.LEFT:
            x = half_pad
        elif self.align is Alignment.RIGHT:
            x = -(ink_width + half_pad)
        else:
            x = -ink_width / 2
        return x, -ink_depth / 2

    def create_solid(self) -> Optional[Part]:
        """
        Generate the extruded text.

        Returns:
            The text solid, or None when the line has nothing to draw
        """
        if not self.text.strip():
            logger.debug("Skipping blank line %r", self.text)
            return None

        sketch = Text(
            self.text,
            font_size=self.size * self.size_to_em,
            font=self.font.family,
            font_style=self.font_style,
            align=(Align.NONE, Align.NONE),
        )
        x, y = self.origin_shift()
        self.solid = extrude(sketch, amount=self.height / 2, both=True).moved(Location((x, y, 0)))
        return self.solid
