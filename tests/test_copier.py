"""Tests for Copier class."""

import json
from pathlib import Path

import pytest

from fileark.copier import CancellationToken, Copier, DestinationSetupError
from fileark.manifest import ManifestWriteError, load_manifest
from fileark.models import CopyOptions, CopyProgress, FileRecord


def _read_manifest(dest: Path) -> dict:
    return json.loads((dest / "_manifest.json").read_text())


class TestCopier:
    """Tests for a full copy run."""

    def test_copies_into_category_folder(self, tmp_path: Path, make_record):
        record = make_record("a.jpg", size=2000)
        dest = tmp_path / "dest"

        result = Copier().copy([record], dest, CopyOptions())

        assert (dest / "Images" / "a.jpg").read_bytes() == b"a" * 2000
        assert result.success is True
        assert result.copied == 1
        assert result.errors == 0
        assert result.cancelled is False

        manifest = _read_manifest(dest)
        assert manifest["totalFiles"] == 1
        assert manifest["copiedFiles"] == 1
        assert manifest["errors"] == 0
        assert manifest["cancelled"] is False
        assert manifest["categories"] == ["Images"]
        assert manifest["options"] == {"subfolderByExt": False, "embedOriginalPath": False}
        assert manifest["files"] == [
            {
                "original": str(record.path),
                "destination": str(dest / "Images" / "a.jpg"),
                "size": 2000,
                "category": "Images",
                "originalFolder": str(record.path.parent),
            }
        ]

    def test_same_name_files_do_not_overwrite(self, tmp_path: Path, make_record):
        first = make_record("x/a.jpg", size=10)
        second = make_record("y/a.jpg", size=20)
        dest = tmp_path / "dest"

        result = Copier().copy([first, second], dest)

        assert result.copied == 2
        assert (dest / "Images" / "a.jpg").stat().st_size == 10
        assert (dest / "Images" / "a_1.jpg").stat().st_size == 20

    def test_existing_destination_file_is_kept(self, tmp_path: Path, make_record):
        record = make_record("a.jpg", size=10)
        dest = tmp_path / "dest"
        (dest / "Images").mkdir(parents=True)
        (dest / "Images" / "a.jpg").write_text("keep me")

        Copier().copy([record], dest)

        assert (dest / "Images" / "a.jpg").read_text() == "keep me"
        assert (dest / "Images" / "a_1.jpg").stat().st_size == 10

    def test_extension_subfolders(self, tmp_path: Path, make_record):
        records = [make_record("a.jpg"), make_record("b.png")]
        dest = tmp_path / "dest"

        Copier().copy(records, dest, CopyOptions(group_by_extension_subfolder=True))

        assert (dest / "Images" / "JPG" / "a.jpg").exists()
        assert (dest / "Images" / "PNG" / "b.png").exists()
        assert _read_manifest(dest)["options"]["subfolderByExt"] is True

    def test_origin_sidecar(self, tmp_path: Path, make_record):
        record = make_record("shoot/a.jpg")
        dest = tmp_path / "dest"

        Copier().copy([record], dest, CopyOptions(write_origin_sidecar=True))

        sidecar = dest / "Images" / "a.jpg.origin.txt"
        assert sidecar.read_text() == (
            f"Original location: {record.path.parent}\nOriginal path: {record.path}\n"
        )

    def test_sidecar_failure_is_ignored(self, tmp_path: Path, make_record):
        record = make_record("a.jpg")
        dest = tmp_path / "dest"
        (dest / "Images" / "a.jpg.origin.txt").mkdir(parents=True)

        result = Copier().copy([record], dest, CopyOptions(write_origin_sidecar=True))

        assert result.copied == 1
        assert result.errors == 0
        assert (dest / "Images" / "a.jpg").exists()

    def test_failed_copy_is_recorded_and_run_continues(self, tmp_path: Path, make_record):
        missing = FileRecord(
            path=tmp_path / "source" / "gone.jpg",
            name="gone.jpg",
            extension="jpg",
            size=5,
            category="Images",
        )
        present = make_record("ok.jpg")
        dest = tmp_path / "dest"

        result = Copier().copy([missing, present], dest)

        assert result.success is True
        assert result.copied == 1
        assert result.errors == 1
        assert result.clean is False

        files = _read_manifest(dest)["files"]
        assert files[0]["original"] == str(missing.path)
        assert set(files[0]) == {"original", "error"}
        assert files[1]["destination"] == str(dest / "Images" / "ok.jpg")

    def test_running_twice_into_same_destination(self, tmp_path: Path, make_record):
        record = make_record("a.jpg")
        dest = tmp_path / "dest"

        Copier().copy([record], dest)
        result = Copier().copy([record], dest)

        assert result.copied == 1
        assert (dest / "Images" / "a_1.jpg").exists()

    def test_empty_run_still_writes_manifest(self, tmp_path: Path):
        dest = tmp_path / "dest"

        result = Copier().copy([], dest)

        assert result.copied == 0
        assert _read_manifest(dest)["files"] == []

    def test_setup_failure_is_fatal(self, tmp_path: Path, make_record):
        dest = tmp_path / "dest"
        dest.mkdir()
        (dest / "Images").write_text("blocking file")

        with pytest.raises(DestinationSetupError):
            Copier().copy([make_record("a.jpg")], dest)

        assert not (dest / "_manifest.json").exists()

    def test_manifest_failure_raises(self, tmp_path: Path, make_record):
        dest = tmp_path / "dest"
        (dest / "_manifest.json").mkdir(parents=True)

        with pytest.raises(ManifestWriteError):
            Copier().copy([make_record("a.jpg")], dest)

    def test_invalid_batch_size(self):
        with pytest.raises(ValueError):
            Copier(progress_batch_size=0)


class TestCancellation:
    """Tests for cooperative cancellation."""

    def test_cancel_before_start(self, tmp_path: Path, make_record):
        records = [make_record(f"{i}.jpg") for i in range(3)]
        dest = tmp_path / "dest"
        token = CancellationToken()
        token.cancel()

        result = Copier().copy(records, dest, token=token)

        assert result.cancelled is True
        assert result.success is False
        assert result.copied == 0
        manifest = load_manifest(dest)
        assert manifest.cancelled is True
        assert manifest.total_files == 3
        assert manifest.files == []

    def test_cancel_mid_run_keeps_partial_manifest(self, tmp_path: Path, make_record):
        records = [make_record(f"{i:02d}.jpg") for i in range(12)]
        dest = tmp_path / "dest"
        token = CancellationToken()

        def on_progress(event: CopyProgress) -> None:
            token.cancel()

        result = Copier(progress_batch_size=5).copy(
            records, dest, token=token, progress=on_progress
        )

        assert result.cancelled is True
        assert result.copied == 5
        assert result.copied + result.errors < len(records)
        manifest = load_manifest(dest)
        assert len(manifest.files) == result.copied + result.errors
        assert not (dest / "Images" / "05.jpg").exists()

    def test_cancel_is_idempotent(self):
        token = CancellationToken()
        token.cancel()
        token.cancel()

        assert token.cancelled is True

    def test_new_token_starts_uncancelled(self):
        assert CancellationToken().cancelled is False


class TestProgress:
    """Tests for progress reporting."""

    def test_events_every_batch_and_on_last(self, tmp_path: Path, make_record):
        records = [make_record(f"{i:02d}.jpg") for i in range(12)]
        events: list[CopyProgress] = []

        Copier(progress_batch_size=5).copy(records, tmp_path / "dest", progress=events.append)

        assert [e.current for e in events] == [5, 10, 12]
        assert all(e.total == 12 for e in events)
        assert events[-1].filename == "11.jpg"

    def test_single_file_emits_final_event(self, tmp_path: Path, make_record):
        events: list[CopyProgress] = []

        Copier().copy([make_record("a.jpg")], tmp_path / "dest", progress=events.append)

        assert events == [CopyProgress(current=1, total=1, filename="a.jpg")]


class StopAfterChecks(CancellationToken):
    """Token that reports cancellation once it has been polled ``limit`` times."""

    def __init__(self, limit: int) -> None:
        super().__init__()
        self.limit = limit
        self.checks = 0

    @property
    def cancelled(self) -> bool:
        self.checks += 1
        return self.checks > self.limit


class TestProgressOnCancel:
    """Tests for the progress event sent when a run stops early."""

    def test_cancel_mid_batch_reports_files_done(self, tmp_path: Path, make_record):
        records = [make_record(f"{i:02d}.jpg") for i in range(12)]
        events: list[CopyProgress] = []

        result = Copier(progress_batch_size=5).copy(
            records, tmp_path / "dest", token=StopAfterChecks(7), progress=events.append
        )

        assert result.copied == 7
        assert [e.current for e in events] == [5, 7]
        assert events[-1] == CopyProgress(current=7, total=12, filename="06.jpg")

    def test_cancel_on_batch_boundary_sends_no_duplicate(self, tmp_path: Path, make_record):
        records = [make_record(f"{i:02d}.jpg") for i in range(12)]
        events: list[CopyProgress] = []

        Copier(progress_batch_size=5).copy(
            records, tmp_path / "dest", token=StopAfterChecks(5), progress=events.append
        )

        assert [e.current for e in events] == [5]

    def test_cancel_before_first_file_sends_nothing(self, tmp_path: Path, make_record):
        events: list[CopyProgress] = []

        Copier().copy(
            [make_record("a.jpg")],
            tmp_path / "dest",
            token=StopAfterChecks(0),
            progress=events.append,
        )

        assert events == []
