"""
Text Defaults

Process-wide defaults for every text option. They are fixed at import time
and overridden per call by passing keyword arguments.
"""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Tuple

from .errors import PreconditionViolation


class Alignment(str, Enum):
    """Horizontal alignment of lines and sections within their block."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: Any) -> "Alignment":
        """Accept an Alignment or its lowercase name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(a.value for a in cls)
            raise PreconditionViolation("align", f"must be one of {choices}", value) from None


# Passed through to the rendering backend untouched; never affects a Box.
DIRECTIONS: Tuple[str, ...] = ("ltr", "rtl", "ttb", "btt")


@dataclass(frozen=True)
class TextDefaults:
    """Default values for text options."""

    font: str = "Liberation Sans"
    size: float = 10.0
    height: float = 1.0
    pad: float = 0.0
    line_spacing: float = 0.5
    spacing: float = 1.0
    align: Alignment = Alignment.LEFT
    direction: str = "ltr"
    language: str = "en"
    script: str = "latin"
    debug_bounding: bool = False

    def with_overrides(self, **overrides: Any) -> "TextDefaults":
        """
        Return a copy with the given options replaced.

        Options passed as None keep their default value.

        Args:
            **overrides: Option names and values

        Returns:
            New TextDefaults instance
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise PreconditionViolation("options", "unknown option", unknown)
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "align" in changes:
            changes["align"] = Alignment.parse(changes["align"])
        if "direction" in changes and changes["direction"] not in DIRECTIONS:
            raise PreconditionViolation(
                "direction", f"must be one of {', '.join(DIRECTIONS)}", changes["direction"]
            )
        return replace(self, **changes)


DEFAULTS = TextDefaults()
