"""Data models for the copy manifest."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ManifestEntry:
    """Outcome of one copy attempt.

    A successful entry carries ``destination``, ``size``, ``category`` and
    ``original_folder``; a failed one carries only ``error``.
    """

    original: str
    destination: str | None = None
    size: int | None = None
    category: str | None = None
    original_folder: str | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @classmethod
    def copied(
        cls,
        original: str,
        destination: str,
        size: int,
        category: str,
        original_folder: str,
    ) -> "ManifestEntry":
        return cls(
            original=original,
            destination=destination,
            size=size,
            category=category,
            original_folder=original_folder,
        )

    @classmethod
    def failed(cls, original: str, error: str) -> "ManifestEntry":
        return cls(original=original, error=error)

    def to_dict(self) -> dict[str, Any]:
        if not self.succeeded:
            return {"original": self.original, "error": self.error}
        return {
            "original": self.original,
            "destination": self.destination,
            "size": self.size,
            "category": self.category,
            "originalFolder": self.original_folder,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ManifestEntry":
        if "error" in data:
            return cls.failed(data["original"], data["error"])
        return cls.copied(
            original=data["original"],
            destination=data["destination"],
            size=data["size"],
            category=data["category"],
            original_folder=data["originalFolder"],
        )


@dataclass
class Manifest:
    """Summary of a whole copy run as written to disk."""

    created: str
    total_files: int
    copied_files: int
    errors: int
    cancelled: bool
    subfolder_by_ext: bool
    embed_original_path: bool
    categories: list[str] = field(default_factory=list)
    files: list[ManifestEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "created": self.created,
            "totalFiles": self.total_files,
            "copiedFiles": self.copied_files,
            "errors": self.errors,
            "cancelled": self.cancelled,
            "options": {
                "subfolderByExt": self.subfolder_by_ext,
                "embedOriginalPath": self.embed_original_path,
            },
            "categories": list(self.categories),
            "files": [entry.to_dict() for entry in self.files],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Manifest":
        options = data.get("options", {})
        return cls(
            created=data["created"],
            total_files=data["totalFiles"],
            copied_files=data["copiedFiles"],
            errors=data["errors"],
            cancelled=data["cancelled"],
            subfolder_by_ext=options.get("subfolderByExt", False),
            embed_original_path=options.get("embedOriginalPath", False),
            categories=list(data.get("categories", [])),
            files=[ManifestEntry.from_dict(item) for item in data.get("files", [])],
        )
