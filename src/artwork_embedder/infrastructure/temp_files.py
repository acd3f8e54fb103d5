"""Temporary-file infrastructure helpers."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable
from uuid import uuid4

from artwork_embedder.domain.models import UploadedFile

logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = "modified.mp3"


@dataclass(frozen=True, slots=True)
class TemporaryStorage:
    """Working directory holding uploads and tagged outputs for in-flight requests."""

    directory: Path

    def ensure_directory(self) -> Path:
        """Create the working directory if it does not exist yet."""

        self.directory.mkdir(parents=True, exist_ok=True)
        return self.directory

    def unique_path(self, original_filename: str | None) -> Path:
        """Return a collision-free path that keeps the original basename."""

        basename = Path(original_filename or "").name or "upload"
        prefix = f"{time.time_ns()}-{uuid4().hex[:8]}"
        return self.directory / f"{prefix}-{basename}"

    def output_path(self) -> Path:
        return self.unique_path(OUTPUT_SUFFIX)

    def store_upload(
        self,
        payload: bytes,
        *,
        filename: str | None,
        content_type: str | None,
    ) -> UploadedFile:
        """Write an uploaded part to storage and describe it."""

        self.ensure_directory()
        path = self.unique_path(filename)
        try:
            path.write_bytes(payload)
        except OSError:
            self.remove(path)
            raise
        return UploadedFile(
            path=path,
            original_filename=filename or path.name,
            content_type=content_type or "application/octet-stream",
            size_bytes=len(payload),
        )

    def remove(self, path: Path) -> bool:
        """Delete ``path``; never raises. Returns True when a file was removed."""

        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as error:
            logger.warning("Temporary file cleanup failed.", extra={"path": str(path)}, exc_info=error)
            return False
        return True

    def remove_all(self, paths: Iterable[Path | None]) -> list[Path]:
        """Delete every given path and return the ones actually removed."""

        return [path for path in paths if path is not None and self.remove(path)]

    def list_files(self) -> list[Path]:
        if not self.directory.exists():
            return []
        return sorted(path for path in self.directory.iterdir() if path.is_file())
