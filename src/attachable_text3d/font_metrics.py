"""
Font Metrics Table

This module is the metrics adapter: it measures strings from a static table
of per-glyph advances and ink boxes instead of rendering them. The table is
loaded once per process and shared read-only by every boundary computation.

Font identifiers are "<family>" or "<family>:style=<Bold|Italic|Bold Italic>".
Only table entries with at least one glyph sample are measurable.
"""

import json
import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, NamedTuple, Optional, Tuple, Union

from .errors import PreconditionViolation

logger = logging.getLogger(__name__)

STYLES: Tuple[str, ...] = ("Regular", "Bold", "Italic", "Bold Italic")
NOTDEF = ".notdef"


@dataclass(frozen=True, order=True)
class FontId:
    """A font family plus style index, validated at construction."""

    family: str
    style: int = 0

    def __post_init__(self):
        if not isinstance(self.family, str) or not self.family.strip():
            raise PreconditionViolation("font", "family name must be a non-empty string", self.family)
        if self.style not in range(len(STYLES)):
            raise PreconditionViolation("font", "unknown style index", self.style)

    @classmethod
    def parse(cls, value: Union[str, "FontId"]) -> "FontId":
        """
        Parse a font identifier string.

        Args:
            value: "<family>" or "<family>:style=<style>", or a FontId

        Returns:
            The FontId
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise PreconditionViolation("font", "must be a string", value)

        family, sep, options = value.partition(":")
        if not sep:
            return cls(family.strip())

        key, _, style_name = options.partition("=")
        if key.strip() != "style" or style_name.strip() not in STYLES:
            raise PreconditionViolation(
                "font", f"style must be one of {', '.join(STYLES)}", value
            )
        return cls(family.strip(), STYLES.index(style_name.strip()))

    @property
    def style_name(self) -> str:
        return STYLES[self.style]

    @property
    def is_bold(self) -> bool:
        return self.style in (1, 3)

    @property
    def is_italic(self) -> bool:
        return self.style in (2, 3)

    def __str__(self) -> str:
        if self.style == 0:
            return self.family
        return f"{self.family}:style={self.style_name}"


class GlyphSample(NamedTuple):
    """Advance and ink box of one glyph, in font units."""

    advance: float
    bbox: Optional[Tuple[float, float, float, float]] = None

    @classmethod
    def from_row(cls, row) -> "GlyphSample":
        if len(row) == 1:
            return cls(float(row[0]))
        if len(row) == 5:
            return cls(float(row[0]), tuple(float(v) for v in row[1:]))
        raise ValueError(f"Glyph sample must have 1 or 5 values, got {row!r}")


class Measurement(NamedTuple):
    """Raw extents of a measured string.

    ``origin`` is the offset from the nominal origin to the bottom-left corner
    of the ink, ``extent`` the ink width and height from there.
    """

    origin: Tuple[float, float]
    extent: Tuple[float, float]


class FontEntry(NamedTuple):
    font: FontId
    units_per_em: float
    samples: Mapping[str, GlyphSample]

    @property
    def sample_count(self) -> int:
        return len(self.samples)


class FontMetricsTable:
    """Read-only table of glyph metrics for a set of fonts."""

    def __init__(self, entries, size_to_em: float = 4.0 / 3.0):
        """
        Initialize FontMetricsTable.

        Args:
            entries: Iterable of FontEntry
            size_to_em: Em square size, in model units, per unit of font size
        """
        table: Dict[FontId, FontEntry] = {}
        for entry in entries:
            if entry.font in table:
                raise ValueError(f"Duplicate metrics entry for font {entry.font}")
            table[entry.font] = entry

        self._entries = MappingProxyType(table)
        self.size_to_em = float(size_to_em)
        self._measurable = MappingProxyType(
            {font: entry for font, entry in table.items() if entry.sample_count > 0}
        )
        self.fonts: Tuple[str, ...] = tuple(
            str(font) for font in sorted(self._measurable)
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FontMetricsTable":
        """Build a table from its decoded JSON form."""
        entries = []
        for raw in data["fonts"]:
            samples = {
                char: GlyphSample.from_row(row) for char, row in raw["samples"].items()
            }
            entries.append(
                FontEntry(
                    FontId(raw["family"], int(raw.get("style", 0))),
                    float(raw.get("units_per_em", 1000)),
                    MappingProxyType(samples),
                )
            )
        return cls(entries, size_to_em=data.get("size_to_em", 4.0 / 3.0))

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "FontMetricsTable":
        """
        Load a table from a JSON file.

        Args:
            path: JSON file; the bundled table when omitted

        Returns:
            The loaded table
        """
        if path is None:
            text = resources.files(__package__).joinpath("data", "font_metrics.json").read_text(
                encoding="utf-8"
            )
            source = "bundled table"
        else:
            text = Path(path).read_text(encoding="utf-8")
            source = str(path)

        table = cls.from_dict(json.loads(text))
        logger.debug("Loaded %d measurable fonts from %s", len(table.fonts), source)
        return table

    def __contains__(self, font) -> bool:
        try:
            return FontId.parse(font) in self._measurable
        except PreconditionViolation:
            return False

    def entry(self, font: Union[str, FontId]) -> FontEntry:
        """
        Look up the metrics of a measurable font.

        Raises:
            PreconditionViolation: if the font is unknown or has no samples
        """
        font_id = FontId.parse(font)
        try:
            return self._measurable[font_id]
        except KeyError:
            raise PreconditionViolation(
                "font", f"no measurable metrics for font '{font_id}'", str(font)
            ) from None

    def measure(
        self, text: str, font: Union[str, FontId], size: float, spacing: float = 1.0
    ) -> Measurement:
        """
        Measure a string without rendering it.

        Glyphs are laid out left to right, the pen advancing by each glyph's
        advance times ``spacing``. Text without any inked glyph measures as
        zero origin and zero extent.

        Args:
            text: The string to measure
            font: Font identifier
            size: Font size
            spacing: Character spacing multiplier

        Returns:
            Measurement with origin and extent in model units
        """
        if not isinstance(text, str):
            raise PreconditionViolation("text", "must be a string", text)
        entry = self.entry(font)
        scale = size * self.size_to_em / entry.units_per_em

        pen = 0.0
        x_min = y_min = math.inf
        x_max = y_max = -math.inf
        for char in text:
            sample = entry.samples.get(char) or entry.samples.get(NOTDEF)
            if sample is None:
                raise PreconditionViolation(
                    "text", f"character not covered by font '{entry.font}'", char
                )
            if sample.bbox is not None:
                gx_min, gy_min, gx_max, gy_max = sample.bbox
                x_min = min(x_min, pen + gx_min)
                y_min = min(y_min, gy_min)
                x_max = max(x_max, pen + gx_max)
                y_max = max(y_max, gy_max)
            pen += sample.advance * spacing

        if x_min == math.inf:
            return Measurement((0.0, 0.0), (0.0, 0.0))
        return Measurement(
            (x_min * scale, y_min * scale),
            ((x_max - x_min) * scale, (y_max - y_min) * scale),
        )


@lru_cache(maxsize=None)
def load_font_metrics() -> FontMetricsTable:
    """Return the bundled metrics table, loaded on first use."""
    return FontMetricsTable.load()
