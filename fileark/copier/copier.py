"""Copier implementation."""

import logging
import shutil
import time
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from pathlib import Path

from fileark.copier.cancellation import CancellationToken
from fileark.copier.layout import prepare_destination, resolve_destination, target_directory
from fileark.copier.sidecar import SIDECAR_SUFFIX, write_origin_sidecar
from fileark.manifest import Manifest, ManifestEntry, write_manifest
from fileark.manifest.writer import MANIFEST_NAME
from fileark.models import CopyOptions, CopyProgress, CopyResult, FileRecord

logger = logging.getLogger(__name__)

ProgressSink = Callable[[CopyProgress], None]


class Copier:
    """Copies scanned files into per-category folders under a destination."""

    def __init__(
        self,
        progress_batch_size: int = 5,
        manifest_name: str = MANIFEST_NAME,
        sidecar_suffix: str = SIDECAR_SUFFIX,
    ) -> None:
        if progress_batch_size < 1:
            raise ValueError("progress_batch_size must be at least 1")
        self.progress_batch_size = progress_batch_size
        self.manifest_name = manifest_name
        self.sidecar_suffix = sidecar_suffix

    def copy(
        self,
        records: Sequence[FileRecord],
        destination_root: Path,
        options: CopyOptions | None = None,
        token: CancellationToken | None = None,
        progress: ProgressSink | None = None,
    ) -> CopyResult:
        """Copy ``records`` into ``destination_root`` and write the manifest.

        A failure on one file is recorded in the manifest and the run moves
        on. Cancellation is checked before each file; files not reached are
        neither copied nor recorded.

        Raises:
            DestinationSetupError: A category folder could not be created.
            ManifestWriteError: The manifest could not be written.
        """
        destination_root = Path(destination_root)
        options = options or CopyOptions()
        token = token or CancellationToken()
        total = len(records)

        logger.info("Copying %d files to %s", total, destination_root)
        categories = prepare_destination(destination_root, records, options)

        entries: list[ManifestEntry] = []
        copied = 0
        errors = 0
        cancelled = False

        for index, record in enumerate(records):
            if token.cancelled:
                logger.info("Copy cancelled after %d of %d files", index, total)
                cancelled = True
                # Report files finished since the last batch event
                if progress is not None and index % self.progress_batch_size != 0:
                    last = records[index - 1]
                    progress(CopyProgress(current=index, total=total, filename=last.name))
                break

            entry = self._copy_one(record, destination_root, options)
            entries.append(entry)
            if entry.succeeded:
                copied += 1
            else:
                errors += 1

            processed = index + 1
            if processed % self.progress_batch_size == 0 or processed == total:
                if progress is not None:
                    progress(CopyProgress(current=processed, total=total, filename=record.name))
                # Let the consumer thread run between batches
                time.sleep(0)

        manifest = Manifest(
            created=datetime.now(timezone.utc).isoformat(),
            total_files=total,
            copied_files=copied,
            errors=errors,
            cancelled=cancelled,
            subfolder_by_ext=options.group_by_extension_subfolder,
            embed_original_path=options.write_origin_sidecar,
            categories=categories,
            files=entries,
        )
        write_manifest(destination_root, manifest, self.manifest_name)

        logger.info(
            "Copy finished: %d copied, %d errors%s",
            copied,
            errors,
            " (cancelled)" if cancelled else "",
        )
        return CopyResult(success=not cancelled, copied=copied, errors=errors, cancelled=cancelled)

    def _copy_one(
        self,
        record: FileRecord,
        destination_root: Path,
        options: CopyOptions,
    ) -> ManifestEntry:
        source = Path(record.path)
        directory = target_directory(destination_root, record, options)
        destination = resolve_destination(directory, record.name)

        try:
            shutil.copyfile(source, destination)
        except OSError as e:
            logger.warning("Failed to copy %s: %s", source, e)
            return ManifestEntry.failed(str(source), str(e))

        if options.write_origin_sidecar:
            write_origin_sidecar(destination, source, self.sidecar_suffix)

        logger.debug("Copied %s -> %s", source, destination)
        return ManifestEntry.copied(
            original=str(source),
            destination=str(destination),
            size=record.size,
            category=record.category,
            original_folder=str(source.parent),
        )
