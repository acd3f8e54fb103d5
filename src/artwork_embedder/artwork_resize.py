"""Cover-fit resizing of artwork to a square target."""

from __future__ import annotations

from io import BytesIO

from PIL import Image, ImageOps

from artwork_embedder.artwork_options import PipelineStage
from artwork_embedder.domain.errors import ImageResizeError
from artwork_embedder.domain.models import ArtworkImage
from artwork_embedder.domain.policies import DEFAULT_RESIZE_OPTIONS, ResizeOptions


def resize_artwork(image: ArtworkImage, options: ResizeOptions = DEFAULT_RESIZE_OPTIONS) -> ArtworkImage:
    """Scale to cover a ``size`` x ``size`` box, crop the overflow and re-encode."""

    try:
        with Image.open(BytesIO(image.data)) as source:
            oriented = ImageOps.exif_transpose(source)
            if oriented.mode != "RGB":
                oriented = oriented.convert("RGB")
            fitted = ImageOps.fit(
                oriented,
                (options.size, options.size),
                method=options.resample,
                centering=options.centering,
            )
        with BytesIO() as buffer:
            fitted.save(buffer, format=options.output_format, quality=options.quality)
            payload = buffer.getvalue()
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageResizeError(
            "image_resize_failed",
            f"Failed to resize image: {exc}",
            PipelineStage.RESIZING,
        ) from exc

    return ArtworkImage(data=payload, mime_type=options.output_mime_type)
