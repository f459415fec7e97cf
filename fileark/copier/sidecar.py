"""Origin sidecar files written next to copied files."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SIDECAR_SUFFIX = ".origin.txt"


def sidecar_path(destination: Path, suffix: str = SIDECAR_SUFFIX) -> Path:
    return destination.with_name(destination.name + suffix)


def write_origin_sidecar(
    destination: Path,
    original: Path,
    suffix: str = SIDECAR_SUFFIX,
) -> bool:
    """Record where a copied file came from.

    Returns False if the sidecar could not be written. The copy itself is
    unaffected either way.
    """
    path = sidecar_path(destination, suffix)
    try:
        path.write_text(
            f"Original location: {original.parent}\nOriginal path: {original}\n",
            encoding="utf-8",
        )
    except OSError as e:
        logger.warning("Could not write sidecar %s: %s", path, e)
        return False
    return True
