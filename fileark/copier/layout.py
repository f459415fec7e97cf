"""Destination folder layout and collision-safe naming."""

import logging
from collections.abc import Sequence
from pathlib import Path

from fileark.models import CopyOptions, FileRecord

logger = logging.getLogger(__name__)


class DestinationSetupError(Exception):
    """Raised when a category folder cannot be created under the destination."""


def extension_folder(extension: str) -> str:
    return extension.upper()


def collect_categories(records: Sequence[FileRecord]) -> list[str]:
    """Distinct categories in order of first appearance."""
    return list(dict.fromkeys(record.category for record in records))


def target_directory(destination_root: Path, record: FileRecord, options: CopyOptions) -> Path:
    directory = destination_root / record.category
    if options.group_by_extension_subfolder:
        directory = directory / extension_folder(record.extension)
    return directory


def prepare_destination(
    destination_root: Path,
    records: Sequence[FileRecord],
    options: CopyOptions,
) -> list[str]:
    """Create every folder the run will copy into.

    Existing folders are left alone. Returns the categories touched.

    Raises:
        DestinationSetupError: A folder could not be created.
    """
    categories = collect_categories(records)
    directories: list[Path] = [destination_root]

    for category in categories:
        directories.append(destination_root / category)
        if options.group_by_extension_subfolder:
            extensions = dict.fromkeys(
                extension_folder(r.extension) for r in records if r.category == category
            )
            directories.extend(destination_root / category / ext for ext in extensions)

    for directory in directories:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DestinationSetupError(f"Cannot create folder {directory}: {e}") from e
        logger.debug("Destination folder ready: %s", directory)

    return categories


def resolve_destination(directory: Path, filename: str) -> Path:
    """First path in ``directory`` for ``filename`` that does not exist yet.

    ``photo.jpg`` becomes ``photo_1.jpg``, ``photo_2.jpg`` and so on.
    """
    candidate = directory / filename
    if not candidate.exists():
        return candidate

    stem, suffix = _split_name(filename)
    counter = 1
    while True:
        candidate = directory / f"{stem}_{counter}{suffix}"
        if not candidate.exists():
            return candidate
        counter += 1


def _split_name(filename: str) -> tuple[str, str]:
    dot_index = filename.rfind(".")
    if dot_index <= 0:
        return filename, ""
    return filename[:dot_index], filename[dot_index:]
