"""File Ark - Gathers files from a directory tree into categorized folders."""

__version__ = "0.1.0"

from fileark.copier import Copier, CopyJob
from fileark.scanner import Scanner

__all__ = ["Copier", "CopyJob", "Scanner"]
