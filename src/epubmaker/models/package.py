"""Data models for the staged package structure."""

import uuid
from pathlib import Path

from pydantic import BaseModel, Field

from epubmaker.models.media import MediaType

DATA_DIR = "data"
FALLBACK_SUFFIX = "-1"


class SourceAsset(BaseModel, frozen=True):
    """A source file found during enumeration."""

    index: int
    path: Path
    extension: str

    def staged_name(self, width: int = 4) -> str:
        """Sequential, zero-padded staged file name (1-based)."""
        return f"{self.index + 1:0{width}d}{self.extension}"


class StagedItem(BaseModel, frozen=True):
    """A file placed in the content data directory."""

    file_name: str
    media_type: MediaType
    is_fallback: bool = False

    @property
    def id(self) -> str:
        return self.file_name.split(".", 1)[0]

    @property
    def href(self) -> str:
        return f"{DATA_DIR}/{self.file_name}"


class ResolvedItem(BaseModel, frozen=True):
    """An original staged item with its optional fallback wrapper."""

    original: StagedItem
    fallback: StagedItem | None = None


class ManifestEntry(BaseModel, frozen=True):
    """Single <item> of the package manifest."""

    id: str
    href: str
    media_type: str
    fallback: str | None = None


class SpineEntry(BaseModel, frozen=True):
    """Single <itemref> of the spine."""

    idref: str
    href: str
    file_name: str


class NavigationPoint(BaseModel, frozen=True):
    """Single <navPoint> of the NCX navigation map."""

    id: str
    play_order: int
    label: str
    src: str


class BookMetadata(BaseModel, frozen=True):
    """Book-level metadata, created once per run."""

    identifier: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    author: str | None = None
    language: str = "ja"
