"""
Command line front end: measure text boxes, list fonts, export parts.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional

import typer
from rich import print as rprint
from rich.logging import RichHandler
from rich.table import Table

from .anchors import anchors_from_boundary
from .boundary import block_boundary, section_boundary
from .config import DEFAULTS, Alignment
from .errors import PreconditionViolation
from .font_metrics import load_font_metrics

app = typer.Typer(add_completion=False, no_args_is_help=True)


def sanitize_filename(text: str) -> str:
    """Convert text to a safe filename (lowercase, snake_case)."""
    s = re.sub(r'[^a-zA-Z0-9]+', '_', text)
    s = s.lower().strip('_')
    return s if s else "text"


def _sections(lines: List[str], sizes: Optional[List[float]]):
    if not sizes:
        return None
    if len(sizes) != len(lines):
        raise PreconditionViolation("sizes", "need one --size-of per line", sizes)
    return [(line, size) for line, size in zip(lines, sizes)]


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")):
    """Attachable 3D text: bounding boxes, anchors and parts."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


@app.command()
def fonts():
    """List fonts with measurable metrics."""
    for name in load_font_metrics().fonts:
        rprint(name)


@app.command()
def measure(
    lines: List[str] = typer.Argument(..., help="Lines of text"),
    font: str = typer.Option(DEFAULTS.font, help="Font, e.g. 'Liberation Sans:style=Bold'"),
    size: float = typer.Option(DEFAULTS.size, help="Font size; --size-of replaces it per line"),
    sizes: Optional[List[float]] = typer.Option(None, "--size-of", help="Per-line font size (repeat once per line)"),
    height: float = typer.Option(DEFAULTS.height, help="Extrusion thickness"),
    pad: float = typer.Option(DEFAULTS.pad, help="Padding"),
    line_spacing: float = typer.Option(DEFAULTS.line_spacing, help="Gap between lines"),
    spacing: float = typer.Option(DEFAULTS.spacing, help="Character spacing multiplier"),
):
    """Print the bounding box and anchors of a block of text."""
    metrics = load_font_metrics()
    try:
        sections = _sections(lines, sizes)
        options = dict(font=font, height=height, line_spacing=line_spacing, pad=pad, spacing=spacing)
        if sections:
            box, _ = section_boundary(metrics, sections, **options)
        else:
            box = block_boundary(metrics, lines, size=size, **options)
    except PreconditionViolation as e:
        rprint(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    rprint(f"Box: width=[bold]{box.width:.3f}[/bold] depth=[bold]{box.depth:.3f}[/bold] height=[bold]{box.height:.3f}[/bold]")

    table = Table(title="Anchors")
    table.add_column("name")
    table.add_column("offset")
    table.add_column("direction")
    table.add_column("spin", justify="right")
    for anchor in anchors_from_boundary(box):
        offset = ", ".join(f"{v:.3f}" for v in anchor.offset)
        direction = ", ".join(f"{v:g}" for v in anchor.direction)
        table.add_row(anchor.name, offset, direction, f"{anchor.spin:g}")
    rprint(table)


@app.command()
def export(
    lines: List[str] = typer.Argument(..., help="Lines of text"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path (default: from the text)"),
    format: str = typer.Option("step", "--format", "-f", help="Output format: step or stl"),
    font: str = typer.Option(DEFAULTS.font, help="Font"),
    size: float = typer.Option(DEFAULTS.size, help="Font size; --size-of replaces it per line"),
    sizes: Optional[List[float]] = typer.Option(None, "--size-of", help="Per-line font size (repeat once per line)"),
    height: float = typer.Option(DEFAULTS.height, help="Extrusion thickness"),
    pad: float = typer.Option(DEFAULTS.pad, help="Padding"),
    line_spacing: float = typer.Option(DEFAULTS.line_spacing, help="Gap between lines"),
    spacing: float = typer.Option(DEFAULTS.spacing, help="Character spacing multiplier"),
    align: Alignment = typer.Option(DEFAULTS.align, help="Horizontal alignment"),
    anchor: str = typer.Option("center", help="Anchor placed at the origin"),
    spin: float = typer.Option(0.0, help="Spin about Z, degrees"),
    debug_bounding: bool = typer.Option(False, "--debug-bounding", help="Add a wireframe of the bounding box"),
):
    """Build the attachable text part and export it."""
    from .attachable import AttachableText
    from .exporter import TextExporter

    if output is None:
        output = Path(f"{sanitize_filename(' '.join(lines))}.{format}")

    rprint(f"Generating text: [bold cyan]\"{' / '.join(lines)}\"[/bold cyan]")
    try:
        sections = _sections(lines, sizes)
        text = AttachableText(
            None if sections else lines,
            sections=sections,
            font=font,
            size=None if sections else size,
            height=height,
            pad=pad,
            line_spacing=line_spacing,
            spacing=spacing,
            align=align,
            debug_bounding=debug_bounding,
        )
        text.build().place(anchor=anchor, spin=spin)
        TextExporter(text.part, text.debug_frame).export(output, format=format)
    except (PreconditionViolation, ValueError) as e:
        rprint(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    box = text.boundary
    rprint(f"  [green]✓[/green] Exported to: {output} ({box.width:.2f} x {box.depth:.2f} x {box.height:.2f})")


if __name__ == "__main__":
    app()
