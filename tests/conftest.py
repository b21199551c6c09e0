"""Shared fixtures."""

from pathlib import Path

import pytest

from epubmaker.models.config import BuildConfig


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    path = tmp_path / "source"
    path.mkdir()
    return path


@pytest.fixture
def make_config(tmp_path: Path):
    """Build a BuildConfig for a source path with test-friendly defaults."""

    def _make(input_path: Path, **options) -> BuildConfig:
        options.setdefault("output", tmp_path / "out" / "book.epub")
        return BuildConfig.from_options(input_path=input_path, **options)

    return _make
