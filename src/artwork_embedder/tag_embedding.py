"""Copy-then-tag embedding of artwork into MP3 files."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable

from artwork_embedder.artwork_options import PipelineStage
from artwork_embedder.domain.errors import FileCopyError, TagWriteError
from artwork_embedder.domain.models import TagSet
from artwork_embedder.domain.policies import DEFAULT_TAG_WRITE_OPTIONS, TagWriteOptions
from artwork_embedder.infrastructure.id3_writer import write_id3_tags

logger = logging.getLogger(__name__)

TAG_WRITE_FAILED_MESSAGE = "Failed to write ID3 tags"

TagWriter = Callable[[Path, TagSet, TagWriteOptions], bool]


def embed_tags(
    source: Path,
    destination: Path,
    tags: TagSet,
    *,
    writer: TagWriter = write_id3_tags,
    options: TagWriteOptions = DEFAULT_TAG_WRITE_OPTIONS,
) -> Path:
    """Duplicate ``source`` to ``destination`` and tag the duplicate.

    On failure the partially written destination is left in place for the
    caller to remove.
    """

    try:
        shutil.copyfile(source, destination)
    except OSError as exc:
        raise FileCopyError(
            "file_copy_failed",
            f"Failed to copy audio file: {exc.strerror or exc}",
            PipelineStage.EMBEDDING,
        ) from exc

    try:
        written = writer(destination, tags, options)
    except Exception as exc:  # noqa: BLE001
        logger.warning("ID3 writer raised.", extra={"destination": str(destination)}, exc_info=exc)
        raise TagWriteError("tag_write_failed", TAG_WRITE_FAILED_MESSAGE, PipelineStage.EMBEDDING) from exc

    if not written:
        raise TagWriteError("tag_write_failed", TAG_WRITE_FAILED_MESSAGE, PipelineStage.EMBEDDING)
    return destination
