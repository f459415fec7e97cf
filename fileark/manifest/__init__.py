"""Manifest module for the copy audit trail."""

from .models import Manifest, ManifestEntry
from .writer import ManifestWriteError, load_manifest, write_manifest

__all__ = [
    "Manifest",
    "ManifestEntry",
    "ManifestWriteError",
    "load_manifest",
    "write_manifest",
]
