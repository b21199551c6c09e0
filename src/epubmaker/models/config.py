"""Build configuration models."""

import os
import re
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from epubmaker.errors import InvalidConfiguration

DEFAULT_LANGUAGE = "ja"
LANGUAGE_ENV_VAR = "EPUBMAKER_LANGUAGE"

_VIEWPORT_RE = re.compile(r"^\s*(\d+)\s*[xX]\s*(\d+)\s*$")


def default_language() -> str:
    return os.environ.get(LANGUAGE_ENV_VAR) or DEFAULT_LANGUAGE


class Viewport(BaseModel, frozen=True):
    """Target bounding box for adapted images."""

    width: int = Field(gt=0)
    height: int = Field(gt=0)

    @classmethod
    def parse(cls, value: str) -> "Viewport":
        """Parse a ``WIDTHxHEIGHT`` string.

        Raises:
            InvalidConfiguration: If the value is malformed or not positive
        """
        match = _VIEWPORT_RE.match(value)
        if not match:
            raise InvalidConfiguration(
                f"Invalid viewport '{value}'. Expected WIDTHxHEIGHT, e.g. 600x800"
            )
        try:
            return cls(width=int(match.group(1)), height=int(match.group(2)))
        except ValidationError:
            raise InvalidConfiguration(
                f"Invalid viewport '{value}'. Width and height must be positive"
            )

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class BuildConfig(BaseModel):
    """Everything one build run needs to know."""

    input_path: Path
    output_path: Path
    title: str
    author: str | None = None
    language: str = Field(default_factory=default_language)
    viewport: Viewport | None = None
    wrap_images: bool = False
    verbose: bool = False

    @property
    def is_archive(self) -> bool:
        return self.input_path.suffix.lower() == ".zip"

    @classmethod
    def from_options(
        cls,
        input_path: Path,
        output: Path | None = None,
        title: str | None = None,
        author: str | None = None,
        language: str | None = None,
        size: str | None = None,
        wrap_images: bool = False,
        verbose: bool = False,
        cwd: Path | None = None,
    ) -> "BuildConfig":
        """Validate raw command line values into a config.

        Nothing on disk is touched here.

        Raises:
            InvalidConfiguration: On a malformed viewport, a missing input
                or an input that is neither a zip archive nor a directory
        """
        is_archive = input_path.suffix.lower() == ".zip"
        if is_archive:
            if not input_path.is_file():
                raise InvalidConfiguration(f"Input archive not found: {input_path}")
        elif not input_path.is_dir():
            raise InvalidConfiguration(
                f"Input {input_path} is not a zip archive or a directory"
            )

        viewport = Viewport.parse(size) if size else None

        stem = input_path.stem if is_archive else input_path.resolve().name
        if output is None:
            output = (cwd or Path.cwd()) / f"{stem}.epub"
        elif output.suffix.lower() != ".epub":
            output = output.with_name(output.name + ".epub")

        if title is not None and not title.strip():
            raise InvalidConfiguration("Title must not be empty")

        return cls(
            input_path=input_path.resolve(),
            output_path=output.resolve(),
            title=title or stem,
            author=author or None,
            language=language or default_language(),
            viewport=viewport,
            wrap_images=wrap_images,
            verbose=verbose,
        )
