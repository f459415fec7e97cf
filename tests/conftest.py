"""Shared fixtures for fileark tests."""

from pathlib import Path

import pytest

from fileark.models import FileRecord


@pytest.fixture
def make_record(tmp_path: Path):
    """Create a source file on disk and return its FileRecord."""

    def _make(
        relative: str,
        size: int = 100,
        category: str = "Images",
        source_root: Path | None = None,
    ) -> FileRecord:
        root = source_root or tmp_path / "source"
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"a" * size)
        name = path.name
        return FileRecord(
            path=path,
            name=name,
            extension=name.rsplit(".", 1)[-1].lower(),
            size=size,
            category=category,
        )

    return _make
