"""Artwork image normalization.

Uploaded artwork is classified purely from its filename suffix and declared
mime type. HEIC/HEIF uploads (the default container for iPhone photos) are
transcoded to JPEG; everything else must already be one of the formats that
ID3 consumers display reliably.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from artwork_embedder.artwork_options import PipelineStage
from artwork_embedder.domain.errors import ImageConversionError, UnsupportedImageFormatError
from artwork_embedder.domain.models import ArtworkImage
from artwork_embedder.domain.policies import DEFAULT_TRANSCODE_OPTIONS, TranscodeOptions
from artwork_embedder.infrastructure.heif_codec import transcode_heif_to_jpeg

HEIF_EXTENSIONS: tuple[str, ...] = (".heic", ".heif")
HEIF_MIME_TYPES: tuple[str, ...] = ("image/heic", "image/heif")
SUPPORTED_MIME_TYPES: tuple[str, ...] = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
)

Transcoder = Callable[[bytes, TranscodeOptions], bytes]


def is_heif_upload(filename: str | None, mime_type: str | None) -> bool:
    """Return True when the upload is declared as HEIC/HEIF."""

    extension = Path(filename).suffix.lower() if filename else ""
    declared = (mime_type or "").strip().lower()
    return extension in HEIF_EXTENSIONS or declared in HEIF_MIME_TYPES


def normalize_image(
    raw_bytes: bytes,
    *,
    filename: str | None,
    mime_type: str | None,
    transcoder: Transcoder = transcode_heif_to_jpeg,
    options: TranscodeOptions = DEFAULT_TRANSCODE_OPTIONS,
) -> ArtworkImage:
    if is_heif_upload(filename, mime_type):
        try:
            converted = transcoder(raw_bytes, options)
        except Exception as exc:  # noqa: BLE001
            raise ImageConversionError(
                "image_conversion_failed",
                f"Failed to convert image: {exc}",
                PipelineStage.NORMALIZING,
            ) from exc
        return ArtworkImage(data=converted, mime_type=options.output_mime_type)

    declared = (mime_type or "").strip().lower()
    if declared not in SUPPORTED_MIME_TYPES:
        raise UnsupportedImageFormatError(
            "unsupported_image_format",
            f"Unsupported image format: {mime_type or 'unknown'}. "
            "Please use JPG, PNG, GIF or HEIC.",
            PipelineStage.NORMALIZING,
        )
    return ArtworkImage(data=raw_bytes, mime_type=mime_type or declared)
