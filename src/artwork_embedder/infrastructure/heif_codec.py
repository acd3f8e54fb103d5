"""HEIC/HEIF decode adapter backed by pillow-heif."""

from __future__ import annotations

from io import BytesIO

import pillow_heif
from PIL import ImageOps

from artwork_embedder.domain.policies import DEFAULT_TRANSCODE_OPTIONS, TranscodeOptions


def transcode_heif_to_jpeg(payload: bytes, options: TranscodeOptions = DEFAULT_TRANSCODE_OPTIONS) -> bytes:
    """Decode HEIC/HEIF bytes and re-encode them as a standard image."""

    heif_file = pillow_heif.open_heif(BytesIO(payload))
    image = ImageOps.exif_transpose(heif_file.to_pillow())
    if image.mode != "RGB":
        image = image.convert("RGB")

    with BytesIO() as buffer:
        image.save(buffer, format=options.output_format, quality=options.quality)
        return buffer.getvalue()
