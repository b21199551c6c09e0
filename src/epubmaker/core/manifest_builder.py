"""Render the package document (metadata, manifest and spine)."""

import html
from pathlib import Path

from epubmaker.core.media_classifier import NCX_MEDIA_TYPE
from epubmaker.models.package import (
    BookMetadata,
    ManifestEntry,
    ResolvedItem,
    SpineEntry,
    StagedItem,
)

PACKAGE_FILE = "package.opf"
NCX_FILE = "toc.ncx"
NCX_ID = "ncx"
PAGE_PROGRESSION = "rtl"

OPF_TEMPLATE = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="BookId" xml:lang="{language}">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:identifier id="BookId">{identifier}</dc:identifier>
    <dc:title>{title}</dc:title>
{creator}    <dc:language>{language}</dc:language>
  </metadata>
  <manifest>
{items}  </manifest>
  <spine toc="{ncx_id}" page-progression-direction="{direction}">
{itemrefs}  </spine>
</package>
"""


def escape(value: str) -> str:
    """Escape &, <, >, " and ' for element text or attribute values."""
    return html.escape(value, quote=True)


def manifest_entry(item: StagedItem, fallback: StagedItem | None = None) -> ManifestEntry:
    return ManifestEntry(
        id=item.id,
        href=item.href,
        media_type=item.media_type.name,
        fallback=fallback.id if fallback is not None else None,
    )


class ManifestBuilder:
    """Build manifest entries and spine, and render package.opf."""

    def __init__(self, metadata: BookMetadata):
        self.metadata = metadata

    def build_manifest(self, resolved_items: list[ResolvedItem]) -> list[ManifestEntry]:
        """One entry per staged file, each original followed by its wrapper."""
        entries = []
        for resolved in resolved_items:
            entries.append(manifest_entry(resolved.original, resolved.fallback))
            if resolved.fallback is not None:
                entries.append(manifest_entry(resolved.fallback))
        return entries

    def build_spine(self, reading_order: list[StagedItem]) -> list[SpineEntry]:
        """Spine entries in reading order, stylesheets left out."""
        return [
            SpineEntry(idref=item.id, href=item.href, file_name=item.file_name)
            for item in reading_order
            if not item.media_type.is_stylesheet
        ]

    def render(self, manifest: list[ManifestEntry], spine: list[SpineEntry]) -> str:
        """Render the full package document."""
        items = [
            f'    <item id="{NCX_ID}" href="{NCX_FILE}" media-type="{NCX_MEDIA_TYPE}" />\n'
        ]
        for entry in manifest:
            fallback = f' fallback="{escape(entry.fallback)}"' if entry.fallback else ""
            items.append(
                f'    <item id="{escape(entry.id)}" href="{escape(entry.href)}" '
                f'media-type="{escape(entry.media_type)}"{fallback} />\n'
            )

        itemrefs = [f'    <itemref idref="{escape(ref.idref)}" />\n' for ref in spine]

        creator = ""
        if self.metadata.author:
            creator = f"    <dc:creator>{escape(self.metadata.author)}</dc:creator>\n"

        return OPF_TEMPLATE.format(
            language=escape(self.metadata.language),
            identifier=escape(self.metadata.identifier),
            title=escape(self.metadata.title),
            creator=creator,
            items="".join(items),
            ncx_id=NCX_ID,
            direction=PAGE_PROGRESSION,
            itemrefs="".join(itemrefs),
        )

    def write(
        self,
        contents_dir: Path,
        manifest: list[ManifestEntry],
        spine: list[SpineEntry],
    ) -> Path:
        """Write package.opf into the contents directory."""
        path = contents_dir / PACKAGE_FILE
        path.write_text(self.render(manifest, spine), encoding="utf-8")
        return path
