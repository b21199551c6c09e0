"""Assemble a staged EPUB tree from source files and pack it."""

import logging
import shutil
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from epubmaker.core.archiver import EPUB_MIMETYPE, MIMETYPE_FILE, extract_archive, pack_epub
from epubmaker.core.fallback_resolver import FallbackResolver, reading_order
from epubmaker.core.image_adapter import ImageAdapter
from epubmaker.core.manifest_builder import PACKAGE_FILE, ManifestBuilder
from epubmaker.core.media_classifier import MediaClassifier
from epubmaker.core.navigation_builder import NavigationBuilder
from epubmaker.models.config import BuildConfig
from epubmaker.models.package import (
    DATA_DIR,
    BookMetadata,
    ManifestEntry,
    NavigationPoint,
    SourceAsset,
    SpineEntry,
    StagedItem,
)

log = logging.getLogger(__name__)

META_DIR = "META-INF"
CONTENTS_DIR = "OEBPS"

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
<rootfiles>
<rootfile media-type="application/oebps-package+xml" full-path="{path}" />
</rootfiles>
</container>
"""


@dataclass
class BuildResult:
    """Summary of a finished build."""

    output_path: Path
    metadata: BookMetadata
    manifest: list[ManifestEntry]
    spine: list[SpineEntry]
    navigation: list[NavigationPoint]
    adapted: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def enumerate_sources(
    source_dir: Path, classifier: MediaClassifier
) -> tuple[list[SourceAsset], list[str]]:
    """List source files in name order, dropping unrecognized types.

    Hidden files and sub-directories are ignored. Returns the assets and the
    names of skipped files.
    """
    assets: list[SourceAsset] = []
    skipped: list[str] = []
    candidates = sorted(
        (p for p in source_dir.iterdir() if p.is_file() and not p.name.startswith(".")),
        key=lambda p: p.name,
    )
    for path in candidates:
        if not classifier.is_known(path.suffix):
            log.debug(f"Skipping {path.name}: unrecognized type")
            skipped.append(path.name)
            continue
        assets.append(SourceAsset(index=len(assets), path=path, extension=path.suffix))
    return assets, skipped


class PackageAssembler:
    """Run the whole source -> EPUB pipeline for one configuration."""

    def __init__(
        self,
        config: BuildConfig,
        classifier: MediaClassifier | None = None,
        on_step: Callable[[str], None] | None = None,
    ):
        self.config = config
        self.classifier = classifier or MediaClassifier()
        self.on_step = on_step
        self.adapter: ImageAdapter | None = None
        if config.viewport is not None:
            self.adapter = ImageAdapter(config.viewport.width, config.viewport.height)

    def _step(self, message: str) -> None:
        log.info(message)
        if self.on_step:
            self.on_step(message)

    def build(self) -> BuildResult:
        """Build the EPUB at the configured output path.

        The scratch tree is removed on every exit path.
        """
        metadata = BookMetadata(
            title=self.config.title,
            author=self.config.author,
            language=self.config.language,
        )
        with tempfile.TemporaryDirectory(prefix="epubmaker-") as scratch:
            scratch_dir = Path(scratch)
            source_dir = self.config.input_path
            if self.config.is_archive:
                self._step(f"Extracting {self.config.input_path.name}")
                extract_dir = scratch_dir / "source"
                extract_dir.mkdir()
                source_dir = extract_archive(self.config.input_path, extract_dir)

            book_dir = scratch_dir / "book"
            return self.assemble(source_dir, book_dir, metadata)

    def assemble(self, source_dir: Path, book_dir: Path, metadata: BookMetadata) -> BuildResult:
        """Stage ``source_dir`` into ``book_dir`` and pack it."""
        contents_dir = book_dir / CONTENTS_DIR
        data_dir = contents_dir / DATA_DIR
        data_dir.mkdir(parents=True)

        self._write_mimetype(book_dir)
        self._write_container(book_dir)

        self._step("Collecting source files")
        assets, skipped = enumerate_sources(source_dir, self.classifier)

        self._step(f"Staging {len(assets)} file(s)")
        items, adapted = self.stage(assets, data_dir)

        self._step("Writing fallback documents")
        resolver = FallbackResolver(
            data_dir, language=metadata.language, wrap_images=self.config.wrap_images
        )
        resolved = resolver.expand(items)
        order = reading_order(resolved)

        self._step("Writing package document")
        manifest_builder = ManifestBuilder(metadata)
        manifest = manifest_builder.build_manifest(resolved)
        spine = manifest_builder.build_spine(order)
        manifest_builder.write(contents_dir, manifest, spine)

        self._step("Writing navigation")
        navigation_builder = NavigationBuilder(metadata)
        navigation = navigation_builder.build(spine)
        navigation_builder.write(contents_dir, navigation)

        self._step(f"Packing {self.config.output_path.name}")
        pack_epub(book_dir, self.config.output_path, [META_DIR, CONTENTS_DIR])

        return BuildResult(
            output_path=self.config.output_path,
            metadata=metadata,
            manifest=manifest,
            spine=spine,
            navigation=navigation,
            adapted=adapted,
            skipped=skipped,
        )

    def stage(self, assets: list[SourceAsset], data_dir: Path) -> tuple[list[StagedItem], list[str]]:
        """Copy sources into the data directory under sequential names.

        JPEG sources are adapted to the viewport when one is configured.
        """
        items: list[StagedItem] = []
        adapted: list[str] = []
        for asset in assets:
            target = data_dir / asset.staged_name()
            shutil.copyfile(asset.path, target)
            if self.adapter is not None and self.classifier.is_adaptable(asset.extension):
                result = self.adapter.adapt_file(target)
                log.debug(
                    f"Adapted {asset.path.name}: {result.original_size} -> {result.size}"
                )
                adapted.append(asset.path.name)
            items.append(
                StagedItem(
                    file_name=target.name,
                    media_type=self.classifier.classify(asset.extension),
                )
            )
        return items, adapted

    def _write_mimetype(self, book_dir: Path) -> None:
        (book_dir / MIMETYPE_FILE).write_text(EPUB_MIMETYPE, encoding="ascii")

    def _write_container(self, book_dir: Path) -> None:
        meta_dir = book_dir / META_DIR
        meta_dir.mkdir()
        (meta_dir / "container.xml").write_text(
            CONTAINER_XML.format(path=f"{CONTENTS_DIR}/{PACKAGE_FILE}"), encoding="utf-8"
        )
