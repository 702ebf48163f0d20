"""
Text Anchors

Six named attachment frames derived from a text Box: the left, center and
right of the back (+Y) and forward (-Y) faces, all at half height. Offsets
are measured from the center of the box.
"""

from typing import Dict, List, NamedTuple, Tuple

from .boundary import Box

Vec3 = Tuple[float, float, float]

FORWARD: Vec3 = (0.0, -1.0, 0.0)
BACKWARD: Vec3 = (0.0, 1.0, 0.0)

ANCHOR_NAMES: Tuple[str, ...] = (
    "text-left-back",
    "text-left-fwd",
    "text-center-back",
    "text-center-fwd",
    "text-right-back",
    "text-right-fwd",
)


class Anchor(NamedTuple):
    """A named attachment frame: position, facing direction and spin in degrees."""

    name: str
    offset: Vec3
    direction: Vec3
    spin: float


def anchors_from_boundary(box: Box) -> List[Anchor]:
    """
    Derive the six text anchors of a box.

    Args:
        box: The text Box

    Returns:
        Anchors in the order of ANCHOR_NAMES
    """
    half_width = box.width / 2
    half_depth = box.depth / 2

    anchors = []
    for side, x in (("left", -half_width), ("center", 0.0), ("right", half_width)):
        anchors.append(Anchor(f"text-{side}-back", (x, half_depth, 0.0), BACKWARD, 180.0))
        anchors.append(Anchor(f"text-{side}-fwd", (x, -half_depth, 0.0), FORWARD, 0.0))
    return anchors


def anchor_map(box: Box) -> Dict[str, Anchor]:
    """Anchors of a box keyed by name."""
    return {anchor.name: anchor for anchor in anchors_from_boundary(box)}
