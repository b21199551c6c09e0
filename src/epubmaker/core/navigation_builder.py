"""Render the NCX navigation map."""

import re
from collections.abc import Callable
from pathlib import Path

from epubmaker.core.manifest_builder import NCX_FILE, escape
from epubmaker.models.package import (
    FALLBACK_SUFFIX,
    BookMetadata,
    NavigationPoint,
    SpineEntry,
)

NCX_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE ncx PUBLIC "-//NISO//DTD ncx 2005-1//EN" "http://www.daisy.org/z3986/2005/ncx-2005-1.dtd">
<ncx version="2005-1" xmlns="http://www.daisy.org/z3986/2005/ncx/" xml:lang="{language}">
<head>
<meta name="dtb:uid" content="{identifier}"/>
<meta name="dtb:depth" content="1"/>
<meta name="dtb:totalPageCount" content="0"/>
<meta name="dtb:maxPageNumber" content="0"/>
</head>

<docTitle><text>{title}</text></docTitle>
{author}
<navMap>
{nav_points}</navMap>
</ncx>
"""

NAV_POINT_TEMPLATE = """  <navPoint id="{id}" playOrder="{play_order}">
    <navLabel><text>{label}</text></navLabel>
    <content src="{src}" />
  </navPoint>
"""

_LEADING_NUMBER_RE = re.compile(r"^(\d+)")

TitleLookup = Callable[[SpineEntry], str | None]


def page_label(file_name: str) -> str:
    """Label derived from a staged file name: ``0012-1.xhtml`` -> ``Page 12``."""
    base = file_name.split(".", 1)[0]
    if base.endswith(FALLBACK_SUFFIX):
        base = base[: -len(FALLBACK_SUFFIX)]
    match = _LEADING_NUMBER_RE.match(base)
    if match:
        return f"Page {int(match.group(1))}"
    return base


class NavigationBuilder:
    """Build navigation points mirroring the spine and render toc.ncx."""

    def __init__(self, metadata: BookMetadata, title_lookup: TitleLookup | None = None):
        self.metadata = metadata
        self.title_lookup = title_lookup

    def label_for(self, entry: SpineEntry) -> str:
        title = self.title_lookup(entry) if self.title_lookup else None
        return title or page_label(entry.file_name)

    def build(self, spine: list[SpineEntry]) -> list[NavigationPoint]:
        return [
            NavigationPoint(
                id=entry.idref,
                play_order=order,
                label=self.label_for(entry),
                src=entry.href,
            )
            for order, entry in enumerate(spine, start=1)
        ]

    def render(self, points: list[NavigationPoint]) -> str:
        nav_points = "".join(
            NAV_POINT_TEMPLATE.format(
                id=escape(point.id),
                play_order=point.play_order,
                label=escape(point.label),
                src=escape(point.src),
            )
            for point in points
        )
        author = ""
        if self.metadata.author:
            author = f"<docAuthor><text>{escape(self.metadata.author)}</text></docAuthor>\n"

        return NCX_TEMPLATE.format(
            language=escape(self.metadata.language),
            identifier=escape(self.metadata.identifier),
            title=escape(self.metadata.title),
            author=author,
            nav_points=nav_points,
        )

    def write(self, contents_dir: Path, points: list[NavigationPoint]) -> Path:
        path = contents_dir / NCX_FILE
        path.write_text(self.render(points), encoding="utf-8")
        return path
