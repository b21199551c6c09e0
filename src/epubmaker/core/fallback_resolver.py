"""Synthesize XHTML fallback documents for non-core media types."""

import html
import logging
from pathlib import Path

from epubmaker.core.media_classifier import XHTML
from epubmaker.errors import UnsupportedFallbackType
from epubmaker.models.media import MediaKind
from epubmaker.models.package import FALLBACK_SUFFIX, ResolvedItem, StagedItem

log = logging.getLogger(__name__)

WRAPPER_HEAD = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN"
   "http://www.w3.org/TR/xhtml1/DTD/xhtml1-strict.dtd">
<html xmlns="http://www.w3.org/1999/xhtml" xml:lang="{language}" lang="{language}">
  <head>
    <title>{title}</title>
    <meta http-equiv="Content-Type" content="text/html; charset=utf-8" />
  </head>
  <body>
"""

WRAPPER_TAIL = """  </body>
</html>
"""

IMAGE_BODY = """    <img src="./{src}" alt="{alt}" />
"""

LINK_BODY = """    <p><a href="./{src}">{label}</a></p>
"""


def fallback_name(file_name: str) -> str:
    """Wrapper file name for a staged file: ``0003.tif`` -> ``0003-1.xhtml``."""
    base = file_name.split(".", 1)[0]
    return f"{base}{FALLBACK_SUFFIX}.xhtml"


def escape_bytes(data: bytes) -> bytes:
    """Escape markup characters without decoding the payload."""
    return data.replace(b"&", b"&amp;").replace(b"<", b"&lt;").replace(b">", b"&gt;")


class FallbackResolver:
    """Decide which staged items need a wrapper and write it."""

    def __init__(self, data_dir: Path, language: str = "ja", wrap_images: bool = False):
        """Initialize resolver.

        Args:
            data_dir: Directory holding the staged content files
            language: Language tag written into wrapper documents
            wrap_images: Also wrap core image types, for readers that
                render bare image pages poorly
        """
        self.data_dir = data_dir
        self.language = language
        self.wrap_images = wrap_images

    def needs_fallback(self, item: StagedItem) -> bool:
        if not item.media_type.is_core:
            return True
        return self.wrap_images and item.media_type.is_image

    def resolve(self, item: StagedItem) -> StagedItem | None:
        """Write a fallback wrapper for the item if one is required.

        Raises:
            UnsupportedFallbackType: If the item's kind has no wrapper strategy
        """
        if not self.needs_fallback(item):
            return None

        kind = item.media_type.kind
        if kind == MediaKind.IMAGE:
            body = self._image_body(item)
        elif kind == MediaKind.TEXT:
            body = self._text_body(item)
        elif kind == MediaKind.DOCUMENT:
            body = self._link_body(item)
        else:
            raise UnsupportedFallbackType(item.media_type.name, item.file_name)

        wrapper = StagedItem(
            file_name=fallback_name(item.file_name),
            media_type=XHTML,
            is_fallback=True,
        )
        head = WRAPPER_HEAD.format(
            language=html.escape(self.language),
            title=html.escape(item.id),
        )
        (self.data_dir / wrapper.file_name).write_bytes(
            head.encode("utf-8") + body + WRAPPER_TAIL.encode("utf-8")
        )
        log.debug(f"Wrote {kind.value} fallback {wrapper.file_name} for {item.file_name}")
        return wrapper

    def _image_body(self, item: StagedItem) -> bytes:
        src = html.escape(item.file_name)
        return IMAGE_BODY.format(src=src, alt=html.escape(item.id)).encode("utf-8")

    def _text_body(self, item: StagedItem) -> bytes:
        # Character encoding of the source is passed through untouched
        content = (self.data_dir / item.file_name).read_bytes()
        return b"    <pre>" + escape_bytes(content) + b"</pre>\n"

    def _link_body(self, item: StagedItem) -> bytes:
        src = html.escape(item.file_name)
        return LINK_BODY.format(src=src, label=src).encode("utf-8")

    def expand(self, items: list[StagedItem]) -> list[ResolvedItem]:
        """Pair each original staged item with its fallback, if any."""
        return [ResolvedItem(original=item, fallback=self.resolve(item)) for item in items]


def spine_item(resolved: ResolvedItem) -> StagedItem:
    """Member of a fallback pair that belongs in the reading order.

    Image wrappers are read instead of the raw image; any other original is
    read directly and its wrapper only completes the fallback chain.
    """
    if resolved.fallback is not None and resolved.original.media_type.is_image:
        return resolved.fallback
    return resolved.original


def reading_order(resolved_items: list[ResolvedItem]) -> list[StagedItem]:
    """Resolved reading order, stylesheets included."""
    return [spine_item(resolved) for resolved in resolved_items]
