"""Temporary storage for uploaded feedback files."""

from __future__ import annotations

import logging
import threading
import uuid
from pathlib import Path
from typing import Dict, Optional

from .config import FILE_TTL_SECONDS, MAX_UPLOAD_BYTES, UPLOAD_DIR

LOGGER = logging.getLogger(__name__)

CSV_CONTENT_TYPES = ("text/csv", "application/csv")


def _format_limit(max_bytes: int) -> str:
    megabytes = max_bytes / (1024 * 1024)
    return f"{megabytes:g}MB" if megabytes >= 1 else f"{max_bytes} bytes"


class UploadRejected(ValueError):
    """Raised when an uploaded file fails validation."""


class FileStorage:
    """Keep uploads on disk just long enough to analyse them.

    Every stored file is deleted right after analysis; a timer removes it
    anyway after ``ttl_seconds`` in case that step never runs.
    """

    def __init__(
        self,
        upload_dir: Path = UPLOAD_DIR,
        *,
        max_bytes: int = MAX_UPLOAD_BYTES,
        ttl_seconds: float = FILE_TTL_SECONDS,
    ) -> None:
        self.upload_dir = Path(upload_dir).resolve()
        self.max_bytes = max_bytes
        self.ttl_seconds = ttl_seconds
        self._timers: Dict[Path, threading.Timer] = {}
        self._timers_lock = threading.Lock()
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        LOGGER.info("Upload directory ready at %s", self.upload_dir)

    @property
    def pending_deletions(self) -> int:
        with self._timers_lock:
            return len(self._timers)

    def validate(self, filename: Optional[str], content_type: Optional[str], raw_bytes: bytes) -> None:
        """Check size and type of an upload.

        Raises:
            UploadRejected: When the file is too large, empty, or not a CSV.
        """
        if len(raw_bytes) > self.max_bytes:
            LOGGER.warning("File size exceeds limit: %d bytes", len(raw_bytes))
            raise UploadRejected(f"File size exceeds {_format_limit(self.max_bytes)} limit.")

        name = (filename or "").lower()
        if content_type not in CSV_CONTENT_TYPES and not name.endswith(".csv"):
            LOGGER.warning("Invalid file type: %s (%s)", content_type, filename)
            raise UploadRejected("Invalid file format. Only CSV files are allowed.")

        if not raw_bytes:
            raise UploadRejected("Uploaded file was empty.")

    def store(self, filename: Optional[str], content_type: Optional[str], raw_bytes: bytes) -> Path:
        """Validate and write the upload under a collision-free name."""
        self.validate(filename, content_type, raw_bytes)

        safe_name = Path(filename or "feedback.csv").name
        target = self.upload_dir / f"{uuid.uuid4()}_{safe_name}"
        target.write_bytes(raw_bytes)
        LOGGER.info("File stored temporarily at %s", target)

        self._schedule_deletion(target)
        return target

    def delete(self, path: Path) -> None:
        with self._timers_lock:
            timer = self._timers.pop(path, None)
        if timer is not None:
            timer.cancel()
        try:
            path.unlink(missing_ok=True)
        except OSError:
            LOGGER.exception("Could not delete file %s", path.name)
        else:
            LOGGER.info("Deleted temporary file %s", path.name)

    def _schedule_deletion(self, path: Path) -> None:
        timer = threading.Timer(self.ttl_seconds, self.delete, args=(path,))
        timer.daemon = True
        with self._timers_lock:
            self._timers[path] = timer
        timer.start()
        LOGGER.debug("Scheduled deletion for %s in %s seconds", path.name, self.ttl_seconds)
