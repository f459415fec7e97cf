"""Categorized, cancellable file copying."""

from .cancellation import CancellationToken
from .copier import Copier, ProgressSink
from .job import CopyJob
from .layout import DestinationSetupError, prepare_destination, resolve_destination, target_directory
from .sidecar import write_origin_sidecar

__all__ = [
    "CancellationToken",
    "Copier",
    "CopyJob",
    "DestinationSetupError",
    "ProgressSink",
    "prepare_destination",
    "resolve_destination",
    "target_directory",
    "write_origin_sidecar",
]
