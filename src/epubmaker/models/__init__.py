"""Data models."""

from epubmaker.models.config import BuildConfig, Viewport
from epubmaker.models.media import MediaKind, MediaType
from epubmaker.models.package import (
    BookMetadata,
    ManifestEntry,
    NavigationPoint,
    ResolvedItem,
    SourceAsset,
    SpineEntry,
    StagedItem,
)

__all__ = [
    # Config models
    "BuildConfig",
    "Viewport",
    # Media models
    "MediaKind",
    "MediaType",
    # Package models
    "SourceAsset",
    "StagedItem",
    "ResolvedItem",
    "ManifestEntry",
    "SpineEntry",
    "NavigationPoint",
    "BookMetadata",
]
