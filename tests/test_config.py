"""Tests for build configuration validation."""

import pytest

from epubmaker.errors import InvalidConfiguration
from epubmaker.models.config import LANGUAGE_ENV_VAR, BuildConfig, Viewport


@pytest.mark.parametrize("value,expected", [("600x800", (600, 800)), ("1072X1448", (1072, 1448))])
def test_viewport_parse(value, expected):
    viewport = Viewport.parse(value)
    assert (viewport.width, viewport.height) == expected
    assert str(viewport) == f"{expected[0]}x{expected[1]}"


@pytest.mark.parametrize("value", ["600", "600x", "x800", "600x800x3", "axb", "0x800", "-1x5"])
def test_viewport_parse_rejects_malformed(value):
    with pytest.raises(InvalidConfiguration):
        Viewport.parse(value)


def test_defaults_from_directory(source_dir, tmp_path):
    config = BuildConfig.from_options(input_path=source_dir, cwd=tmp_path)

    assert config.title == "source"
    assert config.output_path == (tmp_path / "source.epub").resolve()
    assert config.viewport is None
    assert not config.is_archive


def test_archive_input(tmp_path):
    archive = tmp_path / "Vol01.ZIP"
    archive.write_bytes(b"")
    config = BuildConfig.from_options(input_path=archive, cwd=tmp_path)

    assert config.is_archive
    assert config.title == "Vol01"
    assert config.output_path.name == "Vol01.epub"


def test_output_gets_epub_suffix(source_dir, tmp_path):
    config = BuildConfig.from_options(input_path=source_dir, output=tmp_path / "book")
    assert config.output_path.name == "book.epub"


def test_missing_input_is_rejected(tmp_path):
    with pytest.raises(InvalidConfiguration):
        BuildConfig.from_options(input_path=tmp_path / "nowhere")


def test_missing_archive_is_rejected(tmp_path):
    with pytest.raises(InvalidConfiguration):
        BuildConfig.from_options(input_path=tmp_path / "nowhere.zip")


def test_plain_file_is_rejected(tmp_path):
    path = tmp_path / "page.png"
    path.write_bytes(b"")
    with pytest.raises(InvalidConfiguration):
        BuildConfig.from_options(input_path=path)


def test_bad_viewport_touches_nothing(source_dir, tmp_path):
    out = tmp_path / "out" / "book.epub"
    with pytest.raises(InvalidConfiguration):
        BuildConfig.from_options(input_path=source_dir, output=out, size="big")
    assert not out.parent.exists()


def test_language_from_environment(source_dir, monkeypatch):
    monkeypatch.setenv(LANGUAGE_ENV_VAR, "en")
    assert BuildConfig.from_options(input_path=source_dir).language == "en"
    assert BuildConfig.from_options(input_path=source_dir, language="fr").language == "fr"
