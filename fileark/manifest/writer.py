"""Reading and writing the manifest file."""

import json
import logging
from pathlib import Path

from .models import Manifest

logger = logging.getLogger(__name__)

MANIFEST_NAME = "_manifest.json"


class ManifestWriteError(Exception):
    """Raised when the manifest cannot be written to the destination."""


def write_manifest(
    destination_root: Path,
    manifest: Manifest,
    manifest_name: str = MANIFEST_NAME,
) -> Path:
    """Write ``manifest`` as pretty-printed JSON under ``destination_root``."""
    manifest_path = Path(destination_root) / manifest_name
    try:
        manifest_path.write_text(
            json.dumps(manifest.to_dict(), indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    except OSError as e:
        raise ManifestWriteError(f"Could not write manifest {manifest_path}: {e}") from e

    logger.info("Manifest written: %s", manifest_path)
    return manifest_path


def load_manifest(destination_root: Path, manifest_name: str = MANIFEST_NAME) -> Manifest:
    """Load a previously written manifest.

    Raises:
        FileNotFoundError: No manifest exists under ``destination_root``.
        ValueError: The file is not a valid manifest.
    """
    manifest_path = Path(destination_root) / manifest_name
    text = manifest_path.read_text(encoding="utf-8")

    try:
        return Manifest.from_dict(json.loads(text))
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        raise ValueError(f"Invalid manifest {manifest_path}: {e}") from e
