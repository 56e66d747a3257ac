"""Tests for upload validation, temporary storage and logging setup."""

from __future__ import annotations

import threading

import pytest

from feedback_service.logging_config import build_logging_config
from feedback_service.storage import FileStorage, UploadRejected


def test_store_writes_unique_file_and_delete_removes_it(storage: FileStorage) -> None:
    first = storage.store("feedback.csv", "text/csv", b"a,b\n")
    second = storage.store("feedback.csv", "text/csv", b"c,d\n")

    assert first != second
    assert first.name.endswith("_feedback.csv")
    assert first.read_bytes() == b"a,b\n"

    storage.delete(first)
    assert not first.exists()
    # Deleting twice is harmless; the fallback timer may fire after the eager delete.
    storage.delete(first)


def test_store_strips_directories_from_filename(storage: FileStorage) -> None:
    stored = storage.store("../../etc/feedback.csv", "text/csv", b"a\n")
    assert stored.parent == storage.upload_dir


@pytest.mark.parametrize(
    ("filename", "content_type", "raw", "message"),
    [
        ("notes.txt", "text/plain", b"x", "Invalid file format. Only CSV files are allowed."),
        (None, None, b"x", "Invalid file format. Only CSV files are allowed."),
        ("empty.csv", "text/csv", b"", "Uploaded file was empty."),
        ("big.csv", "text/csv", b"x" * 1025, "File size exceeds 1024 bytes limit."),
    ],
)
def test_validate_rejections(storage: FileStorage, filename, content_type, raw, message) -> None:
    with pytest.raises(UploadRejected) as excinfo:
        storage.validate(filename, content_type, raw)
    assert str(excinfo.value) == message


def test_csv_content_type_accepted_without_extension(storage: FileStorage) -> None:
    storage.validate("export", "text/csv", b"a\n")


def test_logging_config_routes_uvicorn_through_console() -> None:
    config = build_logging_config("DEBUG", "WARNING")
    assert config["root"]["level"] == "DEBUG"
    assert config["loggers"]["uvicorn.error"]["handlers"] == ["console"]
    assert config["loggers"]["uvicorn.access"]["level"] == "WARNING"


def _join_new_timers(existing) -> None:
    for thread in threading.enumerate():
        if isinstance(thread, threading.Timer) and thread not in existing:
            thread.join(timeout=2)


def test_delete_cancels_fallback_timer(storage: FileStorage) -> None:
    existing = set(threading.enumerate())

    for _ in range(50):
        storage.delete(storage.store("feedback.csv", "text/csv", b"a,b\n"))

    assert storage.pending_deletions == 0
    # Cancelled timers wake up and exit on their own.
    _join_new_timers(existing)
    assert threading.active_count() <= len(existing)


def test_fallback_timer_deletes_file_and_forgets_itself(tmp_path) -> None:
    existing = set(threading.enumerate())
    storage = FileStorage(tmp_path / "uploads", max_bytes=1024, ttl_seconds=0.01)
    stored = storage.store("feedback.csv", "text/csv", b"a,b\n")

    _join_new_timers(existing)

    assert not stored.exists()
    assert storage.pending_deletions == 0
