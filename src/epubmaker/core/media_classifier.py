"""Map source file extensions to media types."""

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from epubmaker.errors import UnrecognizedSourceType
from epubmaker.models.media import MediaKind, MediaType

XHTML = MediaType(name="application/xhtml+xml", kind=MediaKind.MARKUP, is_core=True)
CSS = MediaType(name="text/css", kind=MediaKind.STYLESHEET, is_core=True)
JPEG = MediaType(name="image/jpeg", kind=MediaKind.IMAGE, is_core=True)
NCX_MEDIA_TYPE = "application/x-dtbncx+xml"


def _build_default_table() -> Mapping[str, MediaType]:
    # OPS core media types
    core = {
        ".gif": MediaType(name="image/gif", kind=MediaKind.IMAGE, is_core=True),
        ".jpg": JPEG,
        ".jpeg": JPEG,
        ".png": MediaType(name="image/png", kind=MediaKind.IMAGE, is_core=True),
        ".svg": MediaType(name="image/svg+xml", kind=MediaKind.IMAGE, is_core=True),
        ".htm": XHTML,
        ".html": XHTML,
        ".xhtml": XHTML,
        ".dtb": MediaType(
            name="application/x-dtbook+xml", kind=MediaKind.MARKUP, is_core=True
        ),
        ".css": CSS,
        ".xml": MediaType(name="application/xml", kind=MediaKind.MARKUP, is_core=True),
    }
    tiff = MediaType(name="image/tiff", kind=MediaKind.IMAGE, is_core=False)
    known = {
        ".tif": tiff,
        ".tiff": tiff,
        ".txt": MediaType(name="text/plain", kind=MediaKind.TEXT, is_core=False),
        ".pdf": MediaType(
            name="application/pdf", kind=MediaKind.DOCUMENT, is_core=False
        ),
    }
    return MappingProxyType({**known, **core})


DEFAULT_MEDIA_TABLE = _build_default_table()


class MediaClassifier:
    """Classify files by extension against a fixed media table."""

    def __init__(self, table: Mapping[str, MediaType] = DEFAULT_MEDIA_TABLE):
        self.table = MappingProxyType({k.lower(): v for k, v in table.items()})

    def classify(self, extension: str) -> MediaType:
        """Look up the media type for an extension (leading dot, any case).

        Raises:
            UnrecognizedSourceType: If the extension has no mapping
        """
        media_type = self.table.get(extension.lower())
        if media_type is None:
            raise UnrecognizedSourceType(extension)
        return media_type

    def classify_path(self, path: Path | str) -> MediaType:
        return self.classify(Path(path).suffix)

    def is_known(self, extension: str) -> bool:
        return extension.lower() in self.table

    def is_adaptable(self, extension: str) -> bool:
        """Only JPEG sources are re-encoded to fit a viewport."""
        return self.table.get(extension.lower()) == JPEG
