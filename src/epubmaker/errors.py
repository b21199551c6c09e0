"""Exceptions raised while building a package."""


class EpubMakerError(Exception):
    """Base class for all build errors."""


class UnrecognizedSourceType(EpubMakerError):
    """Source file extension has no media type mapping.

    Non-fatal: the assembler skips the file.
    """

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"No media type for extension: {extension or '(none)'}")


class UnsupportedFallbackType(EpubMakerError):
    """Media type is known but no fallback document can be synthesized."""

    def __init__(self, media_type: str, file_name: str):
        self.media_type = media_type
        self.file_name = file_name
        super().__init__(f"Unsupported type: {media_type} ({file_name})")


class ImageAdaptationFailure(EpubMakerError):
    """Raster image could not be decoded or re-encoded."""

    def __init__(self, file_name: str, reason: str):
        self.file_name = file_name
        self.reason = reason
        super().__init__(f"Image adaptation failed for {file_name}: {reason}")


class ArchiveToolFailure(EpubMakerError):
    """Extracting the input archive or packing the output failed."""


class InvalidConfiguration(EpubMakerError):
    """Command line or config values are malformed."""
