"""Domain models for a single artwork embed request."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from artwork_embedder.domain.policies import ARTWORK_DESCRIPTION, FRONT_COVER_PICTURE_TYPE


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """An uploaded part written to temporary storage."""

    path: Path
    original_filename: str
    content_type: str
    size_bytes: int


@dataclass(frozen=True, slots=True)
class ArtworkImage:
    """Encoded image bytes ready to be embedded."""

    data: bytes
    mime_type: str


@dataclass(frozen=True, slots=True)
class FormFields:
    """Raw optional text fields submitted alongside the uploads."""

    artist: str | None = None
    title: str | None = None
    album: str | None = None


@dataclass(frozen=True, slots=True)
class TagSet:
    """Text frames and artwork written into the output file."""

    artist: str
    title: str
    album: str
    artwork: ArtworkImage
    picture_type: int = FRONT_COVER_PICTURE_TYPE
    description: str = ARTWORK_DESCRIPTION


@dataclass(frozen=True, slots=True)
class OutputFile:
    """Tagged copy of the uploaded audio, owned by the current request."""

    path: Path
    download_name: str
    media_type: str = "audio/mpeg"


@dataclass(slots=True)
class ProcessedAudio:
    """Successful pipeline result plus every temporary path to remove later."""

    output: OutputFile
    tags: TagSet
    temporary_paths: list[Path] = field(default_factory=list)
