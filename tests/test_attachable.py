import pytest
from build123d import Box as BoxSolid, Location, Plane

from attachable_text3d.anchors import ANCHOR_NAMES, anchor_map
from attachable_text3d.attachable import AttachableText, anchor_location
from attachable_text3d.boundary import Box, block_boundary, section_boundary
from attachable_text3d.errors import PreconditionViolation


def _xyz(vector):
    return (vector.X, vector.Y, vector.Z)


def test_layout_matches_boundaries(metrics):
    text = AttachableText(["Lorem", "ipsum"], metrics=metrics, size=8).layout()
    assert text.boundary == block_boundary(metrics, ["Lorem", "ipsum"], size=8)
    assert set(text.anchors) == set(ANCHOR_NAMES)
    assert [p.text for p in text.placements] == ["Lorem", "ipsum"]


def test_layout_sections(metrics):
    sections = [("Title", 12), (["small", "print"], 6)]
    text = AttachableText(sections=sections, metrics=metrics, line_spacing=1).layout()
    total, _ = section_boundary(metrics, sections, line_spacing=1)
    assert text.boundary == total
    assert len(text.placements) == 3


def test_text_or_sections_required():
    with pytest.raises(PreconditionViolation):
        AttachableText()
    with pytest.raises(PreconditionViolation):
        AttachableText("a", sections=[("b", 10)])


def test_unknown_option_rejected():
    with pytest.raises(PreconditionViolation):
        AttachableText("a", colour="red")


def test_anchor_location_faces_along_anchor():
    anchors = anchor_map(Box(10, 4, 1))

    fwd = anchor_location(anchors["text-right-fwd"])
    assert _xyz(fwd.position) == pytest.approx((5, -2, 0))
    assert _xyz(Plane(fwd).z_dir) == pytest.approx((0, -1, 0), abs=1e-9)

    back = anchor_location(anchors["text-left-back"])
    assert _xyz(back.position) == pytest.approx((-5, 2, 0))
    assert _xyz(Plane(back).z_dir) == pytest.approx((0, 1, 0), abs=1e-9)


def test_placement_location_moves_anchor_to_origin(metrics):
    text = AttachableText("Ipsum", metrics=metrics).layout()
    anchor = text.anchors["text-left-fwd"]

    location = text.placement_location("text-left-fwd")
    moved = location * Location(anchor.offset)
    assert _xyz(moved.position) == pytest.approx((0, 0, 0), abs=1e-9)

    spun = text.placement_location("center", spin=90)
    corner = spun * Location(text.anchors["text-right-fwd"].offset)
    assert _xyz(corner.position) == pytest.approx(
        (text.boundary.depth / 2, text.boundary.width / 2, 0), abs=1e-9
    )


def test_placement_location_rejects_bad_arguments(metrics):
    text = AttachableText("Ipsum", metrics=metrics)
    with pytest.raises(PreconditionViolation):
        text.placement_location("text-top")
    with pytest.raises(PreconditionViolation):
        text.placement_location(orient=(0, 0, 0))


def test_build_adds_joints(metrics):
    text = AttachableText(["Lorem", "ipsum"], metrics=metrics).build()
    assert set(text.part.joints) == set(ANCHOR_NAMES)
    assert text.part.volume > 0

    joint = text.joint("text-center-back")
    assert _xyz(joint.location.position) == pytest.approx(text.anchors["text-center-back"].offset)

    with pytest.raises(PreconditionViolation):
        text.joint("text-top")


def test_debug_bounding_keeps_box_and_anchors(metrics):
    plain = AttachableText("Ipsum", metrics=metrics).build()
    debug = AttachableText("Ipsum", metrics=metrics, debug_bounding=True).build()

    assert debug.boundary == plain.boundary
    assert debug.anchors == plain.anchors
    assert plain.debug_frame is None
    assert debug.debug_frame is not None
    assert len(debug.debug_frame.edges()) == 12


def test_place_moves_joints(metrics):
    text = AttachableText("Ipsum", metrics=metrics).build().place("text-left-fwd")
    joint = text.joint("text-left-fwd")
    assert _xyz(joint.location.position) == pytest.approx((0, 0, 0), abs=1e-6)


def test_host_geometry_is_fused(metrics):
    host = BoxSolid(60, 20, 2).moved(Location((0, 0, -1)))
    text = AttachableText("Ipsum", metrics=metrics, host=host).build()
    assert text.part.volume >= host.volume - 1e-6


def test_blank_text_has_nothing_to_render(metrics):
    text = AttachableText("   ", metrics=metrics).layout()
    assert text.boundary == Box(0, 0, 1)
    with pytest.raises(PreconditionViolation):
        text.build_text()


@pytest.mark.parametrize("align", ["left", "center", "right"])
def test_rendered_text_fills_its_box(metrics, align):
    text = AttachableText("HIE", metrics=metrics, align=align).build()
    width, depth, _ = text.boundary
    bb = text.part.bounding_box()

    assert bb.min.Y == pytest.approx(-depth / 2, abs=0.01)
    assert bb.max.Y == pytest.approx(depth / 2, abs=0.15 * depth)
    assert bb.min.X == pytest.approx(-width / 2, abs=0.15 * width)
    assert bb.max.X == pytest.approx(width / 2, abs=0.15 * width)
    assert bb.size.X == pytest.approx(width, rel=0.15)


def test_padding_stays_inside_box(metrics):
    text = AttachableText("HIE", metrics=metrics, pad=2).build()
    width, depth, _ = text.boundary
    bb = text.part.bounding_box()
    assert bb.min.Y == pytest.approx(-depth / 2 + 1, abs=0.01)
    assert bb.min.X >= -width / 2 + 1 - 1e-6


def test_build_emits_no_deprecation_warning(metrics, recwarn):
    host = BoxSolid(60, 20, 2).moved(Location((0, 0, -1)))
    AttachableText(["Lorem", "ipsum"], metrics=metrics, host=host).build()
    ours = [w for w in recwarn if "attachable_text3d" in w.filename]
    assert not [w for w in ours if issubclass(w.category, DeprecationWarning)]


def test_size_with_sections_rejected(metrics):
    with pytest.raises(PreconditionViolation, match="size"):
        AttachableText(sections=[("Title", 12)], metrics=metrics, size=8)
