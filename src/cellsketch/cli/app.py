"""Typer CLI application."""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from cellsketch.config import EditorSettings
from cellsketch.core.synth import GlyphSet
from cellsketch.errors import CellsketchError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

AsciiOption = Annotated[
    bool, typer.Option("--ascii", help="Use + - | instead of box-drawing characters")
]


def _configure_logging(log_file: Optional[Path], verbose: bool) -> None:
    """Send library logs to a file; the terminal is busy while editing."""
    if log_file is None:
        return
    handler = logging.FileHandler(log_file, encoding='utf-8')
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("cellsketch")
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


def _settings(ascii_glyphs: bool, max_history: Optional[int]) -> EditorSettings:
    settings = EditorSettings.load()
    if ascii_glyphs:
        settings.glyph_set = GlyphSet.ASCII
    if max_history is not None:
        settings.max_history = max_history
    settings.validate()
    return settings


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="cellsketch",
        help="Draw box-and-line diagrams in the terminal.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console()

    @app.callback()
    def main_options(
        log_file: Annotated[
            Optional[Path], typer.Option("--log-file", help="Write logs to this file")
        ] = None,
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug detail")] = False,
    ) -> None:
        """Draw box-and-line diagrams in the terminal."""
        _configure_logging(log_file, verbose)

    @app.command()
    def edit(
        path: Annotated[Optional[Path], typer.Argument(help="Diagram to open or create")] = None,
        ascii_glyphs: AsciiOption = False,
        max_history: Annotated[
            Optional[int], typer.Option("--max-history", min=1, help="Undo depth limit")
        ] = None,
    ) -> None:
        """Open the interactive editor."""
        from cellsketch.cli.studio.editor import run_editor

        try:
            settings = _settings(ascii_glyphs, max_history)
        except CellsketchError as e:
            console.print(f"[red]Invalid settings: {e}[/]")
            raise typer.Exit(1)
        run_editor(path, settings)

    @app.command()
    def show(
        path: Annotated[Path, typer.Argument(help="Diagram file")],
        ascii_glyphs: AsciiOption = False,
    ) -> None:
        """Print a diagram."""
        from cellsketch.io.reader import load
        from cellsketch.render.text import TextRenderer

        try:
            settings = _settings(ascii_glyphs, None)
            doc = load(path, settings.glyph_set, settings.fill_char, reconstruct_shapes=False)
        except CellsketchError as e:
            console.print(f"[red]{e}[/]")
            raise typer.Exit(1)
        print(TextRenderer().render(doc))

    @app.command()
    def shapes(
        path: Annotated[Path, typer.Argument(help="Diagram file")],
        ascii_glyphs: AsciiOption = False,
        json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    ) -> None:
        """List the boxes found in a diagram."""
        from cellsketch.io.reader import load

        try:
            settings = _settings(ascii_glyphs, None)
            doc = load(path, settings.glyph_set, settings.fill_char, reconstruct_shapes=True)
        except CellsketchError as e:
            console.print(f"[red]{e}[/]")
            raise typer.Exit(1)

        if json_output:
            data = [
                {
                    "id": s.shape_id,
                    "top": s.top,
                    "left": s.left,
                    "width": s.width,
                    "height": s.height,
                }
                for s in doc.shapes
            ]
            print(json.dumps(data, indent=2))
            return

        if not doc.shapes:
            console.print(f"[yellow]No boxes found in {path}[/]")
            return
        console.print(f"[bold cyan]{len(doc.shapes)} boxes in {path.name}[/]")
        for s in doc.shapes:
            console.print(
                f"  [bold]{s.shape_id}[/]  at ({s.top}, {s.left})  size {s.width}x{s.height}"
            )

    return app
