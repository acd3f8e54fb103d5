"""Domain layer."""

from .errors import (
    ArtworkEmbedError,
    FileCopyError,
    ImageConversionError,
    ImageResizeError,
    InvalidRequestError,
    MissingFileError,
    TagWriteError,
    UnsupportedImageFormatError,
    UploadTooLargeError,
)
from .events import (
    ArtworkEmbedFailed,
    ArtworkNormalized,
    ArtworkRequestReceived,
    ArtworkResized,
    DomainEvent,
    TagsWritten,
    TemporaryFilesRemoved,
)
from .models import ArtworkImage, FormFields, OutputFile, ProcessedAudio, TagSet, UploadedFile
from .policies import (
    DEFAULT_RESIZE_OPTIONS,
    DEFAULT_TAG_WRITE_OPTIONS,
    DEFAULT_TRANSCODE_OPTIONS,
    ResizeOptions,
    TagWriteOptions,
    TranscodeOptions,
)

__all__ = [
    "ArtworkEmbedError",
    "MissingFileError",
    "UploadTooLargeError",
    "InvalidRequestError",
    "UnsupportedImageFormatError",
    "ImageConversionError",
    "ImageResizeError",
    "FileCopyError",
    "TagWriteError",
    "DomainEvent",
    "ArtworkRequestReceived",
    "ArtworkNormalized",
    "ArtworkResized",
    "TagsWritten",
    "ArtworkEmbedFailed",
    "TemporaryFilesRemoved",
    "ArtworkImage",
    "FormFields",
    "OutputFile",
    "ProcessedAudio",
    "TagSet",
    "UploadedFile",
    "ResizeOptions",
    "TranscodeOptions",
    "TagWriteOptions",
    "DEFAULT_RESIZE_OPTIONS",
    "DEFAULT_TRANSCODE_OPTIONS",
    "DEFAULT_TAG_WRITE_OPTIONS",
]
