"""Media type models."""

from enum import Enum

from pydantic import BaseModel


class MediaKind(str, Enum):
    """General category of a media type.

    Decides how a fallback document is synthesized for non-core types.
    """

    IMAGE = "image"
    TEXT = "text"
    DOCUMENT = "document"
    MARKUP = "markup"
    STYLESHEET = "stylesheet"


class MediaType(BaseModel, frozen=True):
    """A media type with its kind and core-renderable flag."""

    name: str
    kind: MediaKind
    is_core: bool

    @property
    def is_image(self) -> bool:
        return self.kind == MediaKind.IMAGE

    @property
    def is_stylesheet(self) -> bool:
        return self.kind == MediaKind.STYLESHEET
