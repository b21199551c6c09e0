"""Info command implementation."""

from collections import Counter
from pathlib import Path

from ebooklib import epub
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from epubmaker.errors import EpubMakerError


def _first(book: epub.EpubBook, name: str) -> str | None:
    values = book.get_metadata("DC", name)
    return values[0][0] if values else None


def execute_info(epub_path: Path, console: Console) -> epub.EpubBook:
    """Display metadata, manifest summary and reading order of an EPUB."""
    try:
        book = epub.read_epub(str(epub_path), options={"ignore_ncx": False})
    except Exception as e:
        raise EpubMakerError(f"Cannot read {epub_path}: {e}") from e

    items = list(book.get_items())
    type_counts = Counter(item.media_type for item in items)

    info_lines = [
        f"[bold]{escape(_first(book, 'title') or 'Unknown Title')}[/]",
        "",
        f"[dim]Author:[/] {escape(_first(book, 'creator') or 'Unknown')}",
        f"[dim]Language:[/] {escape(_first(book, 'language') or 'Unknown')}",
        f"[dim]Identifier:[/] {escape(_first(book, 'identifier') or 'Unknown')}",
        f"[dim]Direction:[/] {getattr(book, 'direction', None) or 'default'}",
        f"[dim]Manifest items:[/] {len(items)}",
        f"[dim]Spine entries:[/] {len(book.spine)}",
        f"[dim]Navigation points:[/] {len(book.toc)}",
    ]

    console.print()
    console.print(Panel("\n".join(info_lines), title="Book Information", border_style="green"))

    console.print()
    types_table = Table(title="Media Types", show_header=True, header_style="bold cyan")
    types_table.add_column("Media Type", style="white")
    types_table.add_column("Items", justify="right", style="green")
    for media_type, count in sorted(type_counts.items()):
        types_table.add_row(media_type, str(count))
    console.print(types_table)

    console.print()
    spine_table = Table(title="Reading Order", show_header=True, header_style="bold cyan")
    spine_table.add_column("#", style="dim", width=4)
    spine_table.add_column("Item", style="white")
    spine_table.add_column("Href", style="dim")
    for index, (idref, _linear) in enumerate(book.spine, start=1):
        item = book.get_item_with_id(idref)
        spine_table.add_row(str(index), idref, item.get_name() if item else "—")
    console.print(spine_table)
    console.print()

    return book
