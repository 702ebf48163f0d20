"""
Attachable Text Assembly

This module builds the 3D part for a block of text:
- Computing the block's Box and line placements from font metrics
- Rendering every line and moving it into place
- Fusing the lines with optional host geometry
- Exposing the six text anchors as build123d rigid joints
- Final anchor / spin / orient placement
"""

import logging
from typing import Dict, List, Optional

from build123d import Box as BoxSolid, Color, Compound, Location, Part, Plane, RigidJoint

from .anchors import FORWARD, Anchor, Vec3, anchor_map
from .boundary import Box
from .config import DEFAULTS
from .errors import PreconditionViolation
from .font_metrics import FontMetricsTable, load_font_metrics
from .layout import Placement, place_lines, place_sections
from .text_geometry import LineText

logger = logging.getLogger(__name__)


def anchor_location(anchor: Anchor) -> Location:
    """
    Convert an anchor to a build123d Location.

    The location's Z axis points along the anchor's facing direction and is
    spun about it by the anchor's spin.
    """
    tilt = 90.0 if anchor.direction == FORWARD else -90.0
    return Location(anchor.offset, (tilt, 0.0, anchor.spin))


class AttachableText:
    """Assembles text into an attachable 3D part."""

    def __init__(
        self,
        text=None,
        *,
        sections=None,
        metrics: Optional[FontMetricsTable] = None,
        host: Optional[Part] = None,
        **options,
    ):
        """
        Initialize AttachableText.

        Args:
            text: A string or list of strings at one font size
            sections: (text, size) pairs, instead of text, to mix font sizes
            metrics: Font metrics table; the bundled one when omitted
            host: Existing geometry to fuse the text with
            **options: Overrides for TextDefaults (font, size, height, pad,
                line_spacing, spacing, align, direction, language, script,
                debug_bounding)
        """
        if (text is None) == (sections is None):
            raise PreconditionViolation("text", "give either text or sections", None)

        if sections is not None and options.get("size") is not None:
            raise PreconditionViolation("size", "is set per section when sections are given", options["size"])

        self.text = text
        self.sections = sections
        self.metrics = metrics if metrics is not None else load_font_metrics()
        self.host = host
        self.options = DEFAULTS.with_overrides(**options)

        self.boundary: Optional[Box] = None
        self.placements: List[Placement] = []
        self.anchors: Dict[str, Anchor] = {}
        self.part: Optional[Part] = None
        self.debug_frame: Optional[Compound] = None

    def layout(self) -> "AttachableText":
        """
        Compute the Box, line placements and anchors.

        Returns:
            Self for method chaining
        """
        opts = self.options
        common = dict(
            font=opts.font,
            height=opts.height,
            line_spacing=opts.line_spacing,
            pad=opts.pad,
            spacing=opts.spacing,
            align=opts.align,
        )
        if self.sections is not None:
            self.boundary, self.placements = place_sections(self.metrics, self.sections, **common)
        else:
            self.boundary, self.placements = place_lines(
                self.metrics, self.text, size=opts.size, **common
            )
        self.anchors = anchor_map(self.boundary)
        return self

    def build_text(self) -> "AttachableText":
        """
        Render every line, move it into place and fuse everything.

        Returns:
            Self for method chaining
        """
        if self.boundary is None:
            self.layout()

        opts = self.options
        font = self.metrics.entry(opts.font).font

        solids = []
        for placement in self.placements:
            line = LineText(
                placement.text,
                font,
                placement.size,
                opts.height,
                box=placement.box,
                pad=opts.pad,
                align=opts.align,
                size_to_em=self.metrics.size_to_em,
                direction=opts.direction,
                language=opts.language,
                script=opts.script,
            )
            solid = line.create_solid()
            if solid is not None:
                solids.append(solid.moved(Location(placement.offset)))

        if not solids and self.host is None:
            raise PreconditionViolation(
                "text", "has no visible characters to render", self.text or self.sections
            )

        shapes = ([self.host] if self.host is not None else []) + solids
        fused = shapes[0].fuse(*shapes[1:]) if len(shapes) > 1 else shapes[0]

        self.part = Part(fused.solids())
        self.part.label = "attachable_text"
        logger.debug("Built %d lines into %s", len(self.placements), self.boundary)
        return self

    def add_joints(self) -> "AttachableText":
        """
        Attach one rigid joint per text anchor to the part.

        Returns:
            Self for method chaining
        """
        if self.part is None:
            self.build_text()
        for name, anchor in self.anchors.items():
            RigidJoint(name, to_part=self.part, joint_location=anchor_location(anchor))
        return self

    def add_debug_bounding(self) -> "AttachableText":
        """
        Create a translucent wireframe of the computed Box.

        The frame is kept apart from the part; it changes neither the Box
        nor the anchors.

        Returns:
            Self for method chaining
        """
        if self.boundary is None:
            self.layout()
        frame = BoxSolid(*self.boundary)
        self.debug_frame = Compound(frame.edges())
        self.debug_frame.label = "debug_bounding"
        self.debug_frame.color = Color(1.0, 0.0, 0.0, 0.3)
        return self

    def build(self) -> "AttachableText":
        """Run every build step. Returns self for method chaining."""
        self.layout().build_text().add_joints()
        if self.options.debug_bounding:
            self.add_debug_bounding()
        return self

    def joint(self, name: str) -> RigidJoint:
        """Return the joint for a text anchor."""
        if self.part is None:
            self.build()
        try:
            return self.part.joints[name]
        except KeyError:
            raise PreconditionViolation(
                "anchor", f"must be one of {', '.join(self.anchors)}", name
            ) from None

    def placement_location(self, anchor: str = "center", spin: float = 0.0, orient: Vec3 = (0, 0, 1)) -> Location:
        """
        Location that puts ``anchor`` at the origin, spins the part about Z,
        then turns Z towards ``orient``.
        """
        if self.boundary is None:
            self.layout()
        if anchor == "center":
            point = (0.0, 0.0, 0.0)
        elif anchor in self.anchors:
            point = self.anchors[anchor].offset
        else:
            raise PreconditionViolation(
                "anchor", f"must be 'center' or one of {', '.join(self.anchors)}", anchor
            )
        if tuple(orient) == (0, 0, 0):
            raise PreconditionViolation("orient", "must be a non-zero vector", orient)

        if tuple(orient) == (0, 0, 1):
            orientation = Location()
        else:
            orientation = Location(Plane(origin=(0, 0, 0), z_dir=orient))
        turn = Location((0, 0, 0), (0, 0, spin))
        shift = Location(tuple(-c for c in point))
        return orientation * turn * shift

    def place(self, anchor: str = "center", spin: float = 0.0, orient: Vec3 = (0, 0, 1)) -> "AttachableText":
        """
        Locate the part (and debug frame) by anchor, spin and orient.

        Locating is absolute: calling place() again replaces the previous
        placement. Joints follow the part.

        Returns:
            Self for method chaining
        """
        if self.part is None:
            self.build()
        location = self.placement_location(anchor, spin, orient)
        self.part.locate(location)
        if self.debug_frame is not None:
            self.debug_frame.locate(location)
        return self

    @property
    def shape(self):
        """The part, grouped with the debug frame when there is one."""
        if self.part is None:
            self.build()
        if self.debug_frame is None:
            return self.part
        return Compound(label="attachable_text3d", children=[self.part, self.debug_frame])
