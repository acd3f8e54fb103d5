"""Application service orchestrating the artwork embed use-case."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable
from uuid import uuid4

from artwork_embedder.application.event_publisher import EventPublisher, NullEventPublisher
from artwork_embedder.artwork_options import PipelineStage
from artwork_embedder.artwork_resize import resize_artwork
from artwork_embedder.domain.errors import ArtworkEmbedError, MissingFileError
from artwork_embedder.domain.events import (
    ArtworkEmbedFailed,
    ArtworkNormalized,
    ArtworkRequestReceived,
    ArtworkResized,
    TagsWritten,
    TemporaryFilesRemoved,
)
from artwork_embedder.domain.models import (
    ArtworkImage,
    FormFields,
    OutputFile,
    ProcessedAudio,
    TagSet,
    UploadedFile,
)
from artwork_embedder.domain.policies import (
    DEFAULT_RESIZE_OPTIONS,
    DEFAULT_TAG_WRITE_OPTIONS,
    DEFAULT_TRANSCODE_OPTIONS,
    ResizeOptions,
    TagWriteOptions,
    TranscodeOptions,
)
from artwork_embedder.image_normalization import Transcoder, normalize_image
from artwork_embedder.infrastructure.heif_codec import transcode_heif_to_jpeg
from artwork_embedder.infrastructure.id3_writer import write_id3_tags
from artwork_embedder.infrastructure.temp_files import TemporaryStorage
from artwork_embedder.tag_embedding import TagWriter, embed_tags
from artwork_embedder.utils.config import ServiceSettings


@dataclass(slots=True)
class EmbedArtworkIntoAudio:
    """Use case that tags a copy of an uploaded MP3 with uploaded artwork.

    ``process`` runs received -> validating -> normalizing -> (resizing) ->
    embedding. On any failure every temporary it knows about is removed before
    the error propagates. On success the caller owns the returned temporary
    paths and must hand them back to ``cleanup`` once the response is flushed.
    """

    storage: TemporaryStorage
    resize_enabled: bool = True
    title_fallback: str = ""
    default_download_name: str = "modified"
    resize_options: ResizeOptions = DEFAULT_RESIZE_OPTIONS
    transcode_options: TranscodeOptions = DEFAULT_TRANSCODE_OPTIONS
    tag_write_options: TagWriteOptions = DEFAULT_TAG_WRITE_OPTIONS
    transcoder: Transcoder = transcode_heif_to_jpeg
    tag_writer: TagWriter = write_id3_tags
    event_publisher: EventPublisher = NullEventPublisher()

    @classmethod
    def from_settings(
        cls,
        settings: ServiceSettings,
        event_publisher: EventPublisher | None = None,
    ) -> "EmbedArtworkIntoAudio":
        return cls(
            storage=TemporaryStorage(settings.upload_dir),
            resize_enabled=settings.resize_enabled,
            title_fallback=settings.effective_title_fallback,
            default_download_name=settings.default_download_name,
            resize_options=settings.resize_options(),
            transcode_options=settings.transcode_options(),
            tag_write_options=settings.tag_write_options(),
            event_publisher=event_publisher or NullEventPublisher(),
        )

    def build_tags(self, fields: FormFields, artwork: ArtworkImage) -> TagSet:
        return TagSet(
            artist=fields.artist or "",
            title=fields.title or self.title_fallback,
            album=fields.album or "",
            artwork=artwork,
        )

    def download_name(self, title: str) -> str:
        return f"{title or self.default_download_name}.mp3"

    def process(
        self,
        audio: UploadedFile | None,
        image: UploadedFile | None,
        fields: FormFields,
        correlation_id: str | None = None,
    ) -> ProcessedAudio:
        run_correlation_id = correlation_id or str(uuid4())
        created: list[Path] = [upload.path for upload in (audio, image) if upload is not None]
        stage = PipelineStage.RECEIVED

        try:
            if audio is None:
                raise MissingFileError("missing_file", "Missing file: 'mp3' upload is required.", stage)
            if image is None:
                raise MissingFileError("missing_file", "Missing file: 'image' upload is required.", stage)
            self.event_publisher.publish(
                ArtworkRequestReceived(
                    correlation_id=run_correlation_id,
                    payload_summary={
                        "audio": audio.original_filename,
                        "audio_size_bytes": audio.size_bytes,
                        "image": image.original_filename,
                        "image_content_type": image.content_type,
                    },
                )
            )

            stage = PipelineStage.VALIDATING
            text_fields = FormFields(
                artist=(fields.artist or "").strip() or None,
                title=(fields.title or "").strip() or None,
                album=(fields.album or "").strip() or None,
            )

            stage = PipelineStage.NORMALIZING
            artwork = normalize_image(
                image.path.read_bytes(),
                filename=image.original_filename,
                mime_type=image.content_type,
                transcoder=self.transcoder,
                options=self.transcode_options,
            )
            self.event_publisher.publish(
                ArtworkNormalized(
                    correlation_id=run_correlation_id,
                    payload_summary={
                        "declared_mime_type": image.content_type,
                        "mime_type": artwork.mime_type,
                        "size_bytes": len(artwork.data),
                    },
                )
            )

            if self.resize_enabled:
                stage = PipelineStage.RESIZING
                artwork = resize_artwork(artwork, self.resize_options)
                self.event_publisher.publish(
                    ArtworkResized(
                        correlation_id=run_correlation_id,
                        payload_summary={
                            "size": self.resize_options.size,
                            "mime_type": artwork.mime_type,
                            "size_bytes": len(artwork.data),
                        },
                    )
                )

            stage = PipelineStage.EMBEDDING
            tags = self.build_tags(text_fields, artwork)
            output_path = self.storage.output_path()
            created.append(output_path)
            embed_tags(
                audio.path,
                output_path,
                tags,
                writer=self.tag_writer,
                options=self.tag_write_options,
            )
            self.event_publisher.publish(
                TagsWritten(
                    correlation_id=run_correlation_id,
                    payload_summary={
                        "destination": output_path.as_posix(),
                        "artist": tags.artist,
                        "title": tags.title,
                        "album": tags.album,
                        "artwork_mime_type": artwork.mime_type,
                    },
                )
            )
        except Exception as error:
            failed_stage = error.stage if isinstance(error, ArtworkEmbedError) else stage
            self.event_publisher.publish(
                ArtworkEmbedFailed(
                    correlation_id=run_correlation_id,
                    payload_summary={"stage": failed_stage.value, "error": str(error)},
                )
            )
            self.cleanup(created, correlation_id=run_correlation_id)
            raise

        return ProcessedAudio(
            output=OutputFile(path=output_path, download_name=self.download_name(tags.title)),
            tags=tags,
            temporary_paths=created,
        )

    def cleanup(self, paths: Iterable[Path], correlation_id: str | None = None) -> None:
        """Remove request temporaries. Failures are logged by the storage layer only."""

        requested = list(paths)
        removed = self.storage.remove_all(requested)
        self.event_publisher.publish(
            TemporaryFilesRemoved(
                correlation_id=correlation_id or str(uuid4()),
                payload_summary={
                    "stage": PipelineStage.CLEANING_UP.value,
                    "next_stage": PipelineStage.DONE.value,
                    "requested": len(requested),
                    "removed": len(removed),
                },
            )
        )
