"""Main scanner implementation."""

import logging
import time
from pathlib import Path

from fileark.models import FileRecord, ParsedFilename, ScanRule
from fileark.scanner.filesystem import FileInfo, walk_directory
from fileark.scanner.stats import ScanStats, format_bytes, format_duration

logger = logging.getLogger(__name__)


class Scanner:
    """Enumerates files under a root that match a ScanRule."""

    def __init__(self, max_path_length: int = 4096):
        self.max_path_length = max_path_length
        self.stats = ScanStats()

    def scan(self, source_root: Path, rule: ScanRule) -> list[FileRecord]:
        """Return a FileRecord for every matching file under ``source_root``.

        Never raises for filesystem problems: unreadable subtrees and
        unstattable files are left out of the result.
        """
        source_root = Path(source_root).resolve()
        self.stats = ScanStats()
        records: list[FileRecord] = []

        logger.info("Starting scan of %s", source_root)

        def wants_file(parsed: ParsedFilename) -> bool:
            return parsed.extension is not None and parsed.extension in rule.extensions

        for batch in walk_directory(
            source_root,
            is_excluded=rule.is_excluded,
            wants_file=wants_file,
            max_path_length=self.max_path_length,
        ):
            self.stats.directories_scanned += 1
            self.stats.directories_skipped += batch.skipped_subdirectories
            self.stats.files_considered += len(batch.files)

            for info in batch.files:
                record = self._match(info, rule)
                if record is None:
                    continue
                records.append(record)
                self.stats.files_matched += 1
                self.stats.total_bytes += record.size

        self.stats.end_time = time.time()
        logger.info(
            "Scan complete: %d matching files (%s) in %d directories, %d excluded (%s)",
            self.stats.files_matched,
            format_bytes(self.stats.total_bytes),
            self.stats.directories_scanned,
            self.stats.directories_skipped,
            format_duration(self.stats.elapsed_seconds),
        )
        return records

    def _match(self, info: FileInfo, rule: ScanRule) -> FileRecord | None:
        extension = info.parsed_filename.extension
        if extension is None or extension not in rule.extensions:
            return None

        if info.size < rule.min_size_for(extension):
            logger.debug("Below size threshold, skipping: %s (%d bytes)", info.path, info.size)
            return None

        return FileRecord(
            path=info.path,
            name=info.parsed_filename.full,
            extension=extension,
            size=info.size,
            category=rule.category_for(extension),
        )
