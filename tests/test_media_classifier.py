"""Tests for media type classification."""

import pytest

from epubmaker.core.media_classifier import DEFAULT_MEDIA_TABLE, MediaClassifier
from epubmaker.errors import UnrecognizedSourceType
from epubmaker.models.media import MediaKind, MediaType


@pytest.fixture
def classifier() -> MediaClassifier:
    return MediaClassifier()


@pytest.mark.parametrize(
    "extension,name",
    [
        (".png", "image/png"),
        (".gif", "image/gif"),
        (".jpg", "image/jpeg"),
        (".jpeg", "image/jpeg"),
        (".svg", "image/svg+xml"),
        (".xhtml", "application/xhtml+xml"),
        (".html", "application/xhtml+xml"),
        (".css", "text/css"),
        (".xml", "application/xml"),
        (".dtb", "application/x-dtbook+xml"),
    ],
)
def test_core_types(classifier, extension, name):
    media_type = classifier.classify(extension)
    assert media_type.name == name
    assert media_type.is_core


@pytest.mark.parametrize(
    "extension,name,kind",
    [
        (".tif", "image/tiff", MediaKind.IMAGE),
        (".tiff", "image/tiff", MediaKind.IMAGE),
        (".txt", "text/plain", MediaKind.TEXT),
        (".pdf", "application/pdf", MediaKind.DOCUMENT),
    ],
)
def test_known_non_core_types(classifier, extension, name, kind):
    media_type = classifier.classify(extension)
    assert media_type.name == name
    assert media_type.kind == kind
    assert not media_type.is_core


def test_extension_case_is_ignored(classifier):
    assert classifier.classify(".JPG") == classifier.classify(".jpg")


@pytest.mark.parametrize("extension", [".docx", ".zip", ""])
def test_unknown_extension_raises(classifier, extension):
    with pytest.raises(UnrecognizedSourceType):
        classifier.classify(extension)
    assert not classifier.is_known(extension)


def test_classification_is_idempotent(classifier):
    for extension in DEFAULT_MEDIA_TABLE:
        first = classifier.classify(extension)
        second = classifier.classify(extension)
        assert first == second
        assert first.is_core == second.is_core


def test_only_jpeg_is_adaptable(classifier):
    assert classifier.is_adaptable(".jpg")
    assert classifier.is_adaptable(".JPEG")
    assert not classifier.is_adaptable(".png")
    assert not classifier.is_adaptable(".tif")


def test_alternate_table():
    webp = MediaType(name="image/webp", kind=MediaKind.IMAGE, is_core=False)
    classifier = MediaClassifier({".WEBP": webp})
    assert classifier.classify(".webp") == webp
    with pytest.raises(UnrecognizedSourceType):
        classifier.classify(".png")


def test_table_is_read_only(classifier):
    with pytest.raises(TypeError):
        classifier.table[".bmp"] = DEFAULT_MEDIA_TABLE[".png"]  # type: ignore[index]
