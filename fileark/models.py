"""Data models shared by the scanner and the copier."""

from dataclasses import dataclass, field
from pathlib import Path

CUSTOM_CATEGORY = "Custom"


@dataclass(frozen=True)
class ScanRule:
    """Which files a scan picks up and where they are routed.

    Extensions are lowercase without the leading dot. Excluded directory
    names are matched against directory base names, case-insensitively.
    """

    extensions: frozenset[str]
    min_size_by_extension: dict[str, int] = field(default_factory=dict)
    category_by_extension: dict[str, str] = field(default_factory=dict)
    excluded_directory_names: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "extensions", frozenset(e.lower() for e in self.extensions))
        object.__setattr__(
            self,
            "min_size_by_extension",
            {ext.lower(): size for ext, size in self.min_size_by_extension.items()},
        )
        object.__setattr__(
            self,
            "category_by_extension",
            {ext.lower(): name for ext, name in self.category_by_extension.items()},
        )
        object.__setattr__(
            self,
            "excluded_directory_names",
            frozenset(name.lower() for name in self.excluded_directory_names),
        )

    def is_excluded(self, directory_name: str) -> bool:
        return directory_name.lower() in self.excluded_directory_names

    def min_size_for(self, extension: str) -> int:
        return self.min_size_by_extension.get(extension, 0)

    def category_for(self, extension: str) -> str:
        return self.category_by_extension.get(extension, CUSTOM_CATEGORY)


@dataclass(frozen=True)
class FileRecord:
    """A matched file, produced by the scanner and consumed by the copier."""

    path: Path
    name: str
    extension: str
    size: int
    category: str


@dataclass(frozen=True)
class CopyOptions:
    group_by_extension_subfolder: bool = False
    write_origin_sidecar: bool = False


@dataclass(frozen=True)
class CopyResult:
    """Terminal outcome of one copy run.

    ``success`` only reflects whether the run was cancelled; per-file
    failures are counted in ``errors``. Use ``clean`` to require both.
    """

    success: bool
    copied: int
    errors: int
    cancelled: bool

    @property
    def clean(self) -> bool:
        return self.success and self.errors == 0


@dataclass(frozen=True)
class CopyProgress:
    """Progress event emitted by the copier."""

    current: int
    total: int
    filename: str


@dataclass
class ParsedFilename:
    """Parsed components of a filename."""

    full: str
    base: str
    extension: str | None
