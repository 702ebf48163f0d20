import pytest

from attachable_text3d.font_metrics import FontMetricsTable, load_font_metrics


@pytest.fixture
def metrics() -> FontMetricsTable:
    return load_font_metrics()


@pytest.fixture
def grid_metrics() -> FontMetricsTable:
    """A made-up font where size 10 maps one font unit to one model unit."""
    return FontMetricsTable.from_dict(
        {
            "size_to_em": 1.0,
            "fonts": [
                {
                    "family": "Grid",
                    "style": 0,
                    "units_per_em": 10,
                    "samples": {
                        " ": [5],
                        "A": [10, 0, 0, 10, 10],
                        "B": [5, 1, -2, 4, 8],
                        "_": [5, 0, -3, 5, -1],
                    },
                },
                {"family": "Empty", "style": 0, "units_per_em": 10, "samples": {}},
            ],
        }
    )
