import json

import pytest

from attachable_text3d.errors import PreconditionViolation
from attachable_text3d.font_metrics import FontId, FontMetricsTable, load_font_metrics

# Scale of the bundled table at size 10: em = 10 / 0.75 over 1000 units.
SCALE_10 = 10 * (4.0 / 3.0) / 1000


def test_parse_font_id():
    assert FontId.parse("Liberation Sans") == FontId("Liberation Sans", 0)
    assert FontId.parse("Liberation Sans:style=Bold") == FontId("Liberation Sans", 1)
    assert FontId.parse("Liberation Sans:style=Bold Italic") == FontId("Liberation Sans", 3)
    assert FontId.parse("Liberation Sans:style=Regular").style == 0

    font = FontId.parse("Liberation Sans:style=Italic")
    assert font.is_italic and not font.is_bold
    assert str(font) == "Liberation Sans:style=Italic"
    assert str(FontId("Liberation Mono")) == "Liberation Mono"


@pytest.mark.parametrize("value", ["", "Sans:style=Heavy", "Sans:weight=Bold", 12, None])
def test_parse_font_id_rejects(value):
    with pytest.raises(PreconditionViolation) as info:
        FontId.parse(value)
    assert info.value.parameter == "font"


def test_measurable_fonts_are_sorted_and_skip_empty_entries(metrics):
    assert metrics.fonts == (
        "Liberation Mono",
        "Liberation Sans",
        "Liberation Sans:style=Bold",
    )
    assert "Liberation Sans" in metrics
    assert "Liberation Serif" not in metrics
    assert "NotARealFont" not in metrics


def test_bundled_table_is_loaded_once():
    assert load_font_metrics() is load_font_metrics()


def test_measure_ipsum(metrics):
    origin, extent = metrics.measure("Ipsum", "Liberation Sans", 10, 1)
    # Ink starts at the stem of the I and drops to the descender of the p.
    assert origin == pytest.approx((94 * SCALE_10, -207 * SCALE_10))
    assert extent == pytest.approx(((2721 - 94) * SCALE_10, (718 + 207) * SCALE_10))


def test_measure_scales_with_size(metrics):
    small = metrics.measure("Ipsum", "Liberation Sans", 5, 1)
    large = metrics.measure("Ipsum", "Liberation Sans", 10, 1)
    assert large.extent[0] == pytest.approx(2 * small.extent[0])
    assert large.origin[1] == pytest.approx(2 * small.origin[1])


def test_measure_character_spacing(grid_metrics):
    normal = grid_metrics.measure("AA", "Grid", 10, 1)
    wide = grid_metrics.measure("AA", "Grid", 10, 2)
    assert normal.extent == pytest.approx((20, 10))
    assert wide.extent == pytest.approx((30, 10))


def test_measure_blank_text(grid_metrics):
    assert grid_metrics.measure("", "Grid", 10) == ((0.0, 0.0), (0.0, 0.0))
    assert grid_metrics.measure("   ", "Grid", 10) == ((0.0, 0.0), (0.0, 0.0))


def test_measure_unknown_font_names_the_font(metrics):
    with pytest.raises(PreconditionViolation, match="NotARealFont"):
        metrics.measure("Ipsum", "NotARealFont", 10)


def test_measure_font_without_samples(grid_metrics):
    with pytest.raises(PreconditionViolation, match="Empty"):
        grid_metrics.measure("A", "Empty", 10)


def test_measure_unknown_character(grid_metrics, metrics):
    with pytest.raises(PreconditionViolation) as info:
        grid_metrics.measure("AZ", "Grid", 10)
    assert info.value.parameter == "text"

    # The bundled fonts fall back to their .notdef glyph.
    notdef = metrics.measure("☃", "Liberation Sans", 10)
    assert notdef.extent[0] > 0


def test_load_from_file(tmp_path):
    path = tmp_path / "metrics.json"
    path.write_text(
        json.dumps(
            {"fonts": [{"family": "Tiny", "units_per_em": 1000, "samples": {"x": [500, 0, 0, 500, 500]}}]}
        )
    )
    table = FontMetricsTable.load(path)
    assert table.fonts == ("Tiny",)
    assert table.size_to_em == pytest.approx(4.0 / 3.0)


def test_duplicate_entries_rejected():
    entry = {"family": "Tiny", "samples": {"x": [500]}}
    with pytest.raises(ValueError):
        FontMetricsTable.from_dict({"fonts": [entry, entry]})
