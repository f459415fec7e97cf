"""Scanner module for filesystem traversal."""

from .filesystem import parse_filename, walk_directory
from .scanner import Scanner
from .stats import ScanStats

__all__ = [
    "Scanner",
    "ScanStats",
    "parse_filename",
    "walk_directory",
]
