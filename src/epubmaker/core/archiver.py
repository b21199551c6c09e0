"""Zip archive extraction and EPUB packing."""

import logging
import zipfile
from pathlib import Path

from epubmaker.errors import ArchiveToolFailure

log = logging.getLogger(__name__)

MIMETYPE_FILE = "mimetype"
EPUB_MIMETYPE = "application/epub+zip"
# Resource-fork folder added by the macOS archive utility
MACOS_METADATA_DIR = "__MACOSX"


def extract_archive(archive_path: Path, dest_dir: Path) -> Path:
    """Extract a zip archive and return the directory holding its files.

    An archive whose only top-level entry is a directory yields that
    directory.

    Raises:
        ArchiveToolFailure: If the archive cannot be read or extracted
    """
    # Unsupported compression methods raise NotImplementedError, encrypted
    # members RuntimeError
    try:
        with zipfile.ZipFile(archive_path) as zf:
            zf.extractall(dest_dir)
    except (zipfile.BadZipFile, OSError, NotImplementedError, RuntimeError) as e:
        raise ArchiveToolFailure(f"Failed to extract {archive_path}: {e}") from e

    entries = [
        p
        for p in dest_dir.iterdir()
        if not p.name.startswith(".") and p.name != MACOS_METADATA_DIR
    ]
    if len(entries) == 1 and entries[0].is_dir():
        log.debug(f"Using nested directory {entries[0].name} as source root")
        return entries[0]
    return dest_dir


def _iter_files(root: Path, top_dirs: list[str]) -> list[tuple[Path, str]]:
    files = []
    for name in top_dirs:
        for path in sorted((root / name).rglob("*")):
            if path.is_file():
                files.append((path, path.relative_to(root).as_posix()))
    return files


def pack_epub(staged_root: Path, out_file: Path, top_dirs: list[str]) -> Path:
    """Pack a staged tree into an EPUB file.

    ``mimetype`` is written first and stored uncompressed; everything under
    ``top_dirs`` follows, deflated. An existing file at ``out_file`` is
    removed before packing, and a partially written file is removed on
    failure.

    Raises:
        ArchiveToolFailure: If writing fails or the result is malformed
    """
    mimetype_path = staged_root / MIMETYPE_FILE
    if not mimetype_path.is_file():
        raise ArchiveToolFailure(f"Missing required file: {mimetype_path}")

    out_file.parent.mkdir(parents=True, exist_ok=True)
    if out_file.exists():
        out_file.unlink()

    try:
        with zipfile.ZipFile(
            out_file, mode="w", compression=zipfile.ZIP_DEFLATED, compresslevel=9
        ) as zf:
            zf.write(mimetype_path, arcname=MIMETYPE_FILE, compress_type=zipfile.ZIP_STORED)
            for path, rel in _iter_files(staged_root, top_dirs):
                zf.write(path, arcname=rel)

        with zipfile.ZipFile(out_file) as zf:
            infos = zf.infolist()
            if not infos or infos[0].filename != MIMETYPE_FILE:
                raise ArchiveToolFailure("'mimetype' is not the first archive entry")
            if infos[0].compress_type != zipfile.ZIP_STORED:
                raise ArchiveToolFailure("'mimetype' entry is compressed")
    except ArchiveToolFailure:
        out_file.unlink(missing_ok=True)
        raise
    except (zipfile.BadZipFile, OSError) as e:
        out_file.unlink(missing_ok=True)
        raise ArchiveToolFailure(f"Failed to write {out_file}: {e}") from e

    log.debug(f"Packed {out_file}")
    return out_file
