"""Scan statistics and their human-readable formatting."""

import time
from dataclasses import dataclass, field


@dataclass
class ScanStats:
    """Statistics for a scan operation."""

    directories_scanned: int = 0
    directories_skipped: int = 0
    files_considered: int = 0
    files_matched: int = 0
    total_bytes: int = 0
    start_time: float = field(default_factory=time.time)
    end_time: float | None = None

    @property
    def elapsed_seconds(self) -> float:
        end = self.end_time if self.end_time is not None else time.time()
        return end - self.start_time


def format_duration(seconds: float) -> str:
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_bytes(size: int | None) -> str:
    if size is None:
        return "0 B"
    size_f = float(size)
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_f < 1024:
            return f"{size_f:.1f} {unit}"
        size_f /= 1024
    return f"{size_f:.1f} PB"
