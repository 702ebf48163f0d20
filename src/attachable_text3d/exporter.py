"""
Text Part Export

This module writes an assembled text part to STEP or STL. STEP keeps the
debug bounding frame as a separate body; STL only holds solids, so the frame
is left out.
"""

import logging
from pathlib import Path
from typing import Literal, Optional

from build123d import Color, Compound, Part, export_step, export_stl

logger = logging.getLogger(__name__)


class TextExporter:
    """Exports a text part in multiple formats."""

    def __init__(self, text_part: Part, debug_frame: Optional[Compound] = None):
        """
        Initialize TextExporter.

        Args:
            text_part: The fused text solid
            debug_frame: Optional wireframe of the text's bounding box
        """
        self.text_part = text_part
        self.debug_frame = debug_frame

        self.text_part.label = "text"
        self.text_part.color = Color(0.2, 0.2, 0.2)

    def export(self, output_path: Path, format: Literal["step", "stl"] = "step") -> None:
        """
        Export the text part in the specified format.

        Args:
            output_path: Path to output file
            format: Export format - "step" or "stl"
        """
        if format == "step":
            self._export_step(output_path)
        elif format == "stl":
            self._export_stl(output_path)
        else:
            raise ValueError(f"Unsupported format: {format}")

    def _export_step(self, output_path: Path) -> None:
        """Export as a single STEP file, with the debug frame as a second body."""
        children = [self.text_part]
        if self.debug_frame is not None:
            children.append(self.debug_frame)
        assembly = Compound(label="attachable_text3d", children=children)
        export_step(assembly, str(output_path))
        logger.debug("Exported STEP: %s", output_path)

    def _export_stl(self, output_path: Path) -> None:
        """Export the text solid as one STL file."""
        if self.debug_frame is not None:
            logger.debug("Debug frame has no solids; not written to STL")
        stl_path = output_path.with_suffix(".stl")
        export_stl(self.text_part, str(stl_path))
        logger.debug("Exported STL: %s", stl_path)
