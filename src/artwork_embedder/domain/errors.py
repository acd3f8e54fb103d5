"""Error contracts raised by the artwork pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from artwork_embedder.artwork_options import PipelineStage


@dataclass(frozen=True, slots=True)
class ArtworkEmbedError(ValueError):
    """Base failure for a single embed request."""

    code: str
    message: str
    stage: PipelineStage = PipelineStage.ERRORED

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class MissingFileError(ArtworkEmbedError):
    """The audio or image part of the request was not supplied."""


@dataclass(frozen=True, slots=True)
class InvalidRequestError(ArtworkEmbedError):
    """The multipart body did not match the expected form fields."""


@dataclass(frozen=True, slots=True)
class UploadTooLargeError(ArtworkEmbedError):
    """An uploaded part exceeded the configured size ceiling."""


@dataclass(frozen=True, slots=True)
class UnsupportedImageFormatError(ArtworkEmbedError):
    """The image mime type is neither HEIC nor in the allow-list."""


@dataclass(frozen=True, slots=True)
class ImageConversionError(ArtworkEmbedError):
    """HEIC/HEIF transcoding failed."""


@dataclass(frozen=True, slots=True)
class ImageResizeError(ArtworkEmbedError):
    """Cover-fit resize or re-encode failed."""


@dataclass(frozen=True, slots=True)
class FileCopyError(ArtworkEmbedError):
    """The source audio could not be duplicated."""


@dataclass(frozen=True, slots=True)
class TagWriteError(ArtworkEmbedError):
    """ID3 tag writing reported failure."""
