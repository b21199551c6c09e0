"""Main CLI application."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from epubmaker.errors import InvalidConfiguration
from epubmaker.logging_setup import configure_logging
from epubmaker.models.config import BuildConfig

app = typer.Typer(
    name="epubmaker",
    help="Build EPUB packages from a directory or zip archive of page files.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


@app.command()
def build(
    input_path: Annotated[
        Path,
        typer.Argument(
            help="Directory or .zip archive holding the source files",
        ),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output EPUB path (default: ./{input name}.epub)",
        ),
    ] = None,
    title: Annotated[
        Optional[str],
        typer.Option(
            "--title",
            "-t",
            help="Book title (default: input name)",
        ),
    ] = None,
    author: Annotated[
        Optional[str],
        typer.Option(
            "--author",
            "-a",
            help="Book author",
        ),
    ] = None,
    language: Annotated[
        Optional[str],
        typer.Option(
            "--language",
            "-l",
            help="Language tag (default: $EPUBMAKER_LANGUAGE or 'ja')",
        ),
    ] = None,
    size: Annotated[
        Optional[str],
        typer.Option(
            "--size",
            "-s",
            help="Fit JPEG images into WIDTHxHEIGHT, e.g. 600x800",
        ),
    ] = None,
    wrap_images: Annotated[
        bool,
        typer.Option(
            "--wrap-images",
            help="Wrap every image in an XHTML page, not only non-core ones",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress progress output",
        ),
    ] = False,
) -> None:
    """Build an EPUB from a directory or zip archive."""
    configure_logging(verbose, console=err_console)

    try:
        config = BuildConfig.from_options(
            input_path=input_path,
            output=output,
            title=title,
            author=author,
            language=language,
            size=size,
            wrap_images=wrap_images,
            verbose=verbose,
        )
    except InvalidConfiguration as e:
        err_console.print(f"[red]{escape(str(e))}[/]")
        raise typer.Exit(1)

    try:
        from epubmaker.commands.build import execute_build

        execute_build(config, console=console, quiet=quiet)
    except Exception as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/]")
        raise typer.Exit(1)


@app.command()
def info(
    epub_path: Annotated[
        Path,
        typer.Argument(
            help="Path to an EPUB file",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
) -> None:
    """Display metadata and reading order of an EPUB file."""
    try:
        from epubmaker.commands.info import execute_info

        execute_info(epub_path, console=console)
    except Exception as e:
        err_console.print(f"[red]Error reading file: {escape(str(e))}[/]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
