"""Filesystem traversal utilities for scanning directories."""

import logging
import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from fileark.models import ParsedFilename

logger = logging.getLogger(__name__)


@dataclass
class FileInfo:
    path: Path
    parsed_filename: ParsedFilename
    size: int


@dataclass
class DirectoryBatch:
    directory: Path
    files: list[FileInfo]
    skipped_subdirectories: int = 0


def parse_filename(filename: str) -> ParsedFilename:
    """Split a name at its last dot; the extension is lowercased for matching.

    Dotfiles (``.psd``) and names ending in a dot have no extension.
    """
    stem, dot, suffix = filename.rpartition(".")
    if not dot or not stem or not suffix:
        return ParsedFilename(full=filename, base=filename.rstrip("."), extension=None)
    return ParsedFilename(full=filename, base=stem, extension=suffix.lower())


def walk_directory(
    source_root: Path,
    is_excluded: Callable[[str], bool] = lambda name: False,
    wants_file: Callable[[ParsedFilename], bool] = lambda parsed: True,
    max_path_length: int = 4096,
) -> Iterator[DirectoryBatch]:
    """Walk ``source_root`` depth-first, one batch per readable directory.

    Subdirectories for which ``is_excluded(name)`` is true are not entered.
    Only files accepted by ``wants_file`` are statted. Symlinks are never
    followed or reported. Unreadable directories and unstattable files are
    skipped with a warning.
    """
    yield from _walk_recursive(source_root, is_excluded, wants_file, max_path_length)


def _walk_recursive(
    current_dir: Path,
    is_excluded: Callable[[str], bool],
    wants_file: Callable[[ParsedFilename], bool],
    max_path_length: int,
) -> Iterator[DirectoryBatch]:
    try:
        entries = _list_entries(current_dir)
    except PermissionError:
        logger.warning("Permission denied listing directory: %s", current_dir)
        return
    except OSError as e:
        logger.warning("Error listing directory %s: %s", current_dir, e)
        return

    files: list[FileInfo] = []
    subdirs: list[Path] = []
    skipped = 0

    for entry in entries:
        try:
            if entry.is_symlink():
                continue
            if entry.is_dir(follow_symlinks=False):
                if is_excluded(entry.name):
                    logger.debug("Skipping excluded directory: %s", entry.path)
                    skipped += 1
                else:
                    subdirs.append(Path(entry.path))
                continue
        except OSError as e:
            logger.warning("Error inspecting %s: %s", entry.path, e)
            continue

        file_info = _process_entry(entry, wants_file, max_path_length)
        if file_info:
            files.append(file_info)

    yield DirectoryBatch(directory=current_dir, files=files, skipped_subdirectories=skipped)

    for subdir in subdirs:
        yield from _walk_recursive(subdir, is_excluded, wants_file, max_path_length)


def _list_entries(directory: Path) -> list[os.DirEntry]:
    with os.scandir(directory) as entries:
        return sorted(entries, key=lambda e: e.name)


def _process_entry(
    entry: os.DirEntry,
    wants_file: Callable[[ParsedFilename], bool],
    max_path_length: int,
) -> FileInfo | None:
    try:
        if not entry.is_file(follow_symlinks=False):
            return None

        parsed = parse_filename(entry.name)
        if not wants_file(parsed):
            return None

        if len(entry.path) > max_path_length:
            logger.warning("Path too long, skipping: %s", entry.path)
            return None

        stat_result = entry.stat(follow_symlinks=False)

        return FileInfo(
            path=Path(entry.path),
            parsed_filename=parsed,
            size=stat_result.st_size,
        )

    except PermissionError:
        logger.warning("Permission denied: %s", entry.path)
        return None
    except FileNotFoundError:
        logger.warning("File disappeared during scan: %s", entry.path)
        return None
    except OSError as e:
        logger.warning("Error processing %s: %s", entry.path, e)
        return None
