"""Value objects enumerating the options passed to image and tag libraries."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

FRONT_COVER_PICTURE_TYPE = 3
ARTWORK_DESCRIPTION = "Album Art"


@dataclass(frozen=True, slots=True)
class ResizeOptions:
    """Cover-fit resize settings.

    ``size`` is the edge of the square target box in pixels. ``quality`` is the
    JPEG quality used for the re-encode. ``centering`` is the crop anchor handed
    to ``ImageOps.fit`` where ``(0.5, 0.5)`` keeps the crop centred.
    """

    size: int = 3000
    quality: int = 90
    output_format: str = "JPEG"
    output_mime_type: str = "image/jpeg"
    resample: Image.Resampling = Image.Resampling.LANCZOS
    centering: tuple[float, float] = (0.5, 0.5)


@dataclass(frozen=True, slots=True)
class TranscodeOptions:
    """HEIC/HEIF to JPEG transcode settings."""

    quality: int = 90
    output_format: str = "JPEG"
    output_mime_type: str = "image/jpeg"


@dataclass(frozen=True, slots=True)
class TagWriteOptions:
    """ID3 writer settings.

    ``id3_version`` selects ID3v2.3 or ID3v2.4 on save. ``replace_existing``
    discards any tag already present in the file; when false only the frames
    written here are replaced. ``text_encoding`` is the ID3 encoding byte
    (3 = UTF-8). ``skip_empty_text`` omits text frames whose value is empty.
    """

    id3_version: int = 3
    replace_existing: bool = True
    text_encoding: int = 3
    skip_empty_text: bool = True


DEFAULT_RESIZE_OPTIONS = ResizeOptions()
DEFAULT_TRANSCODE_OPTIONS = TranscodeOptions()
DEFAULT_TAG_WRITE_OPTIONS = TagWriteOptions()
