"""CLI-facing handlers that delegate to the embed application service."""

from __future__ import annotations

import mimetypes
import shutil
from pathlib import Path
from tempfile import TemporaryDirectory

from artwork_embedder.application.embedding_service import EmbedArtworkIntoAudio
from artwork_embedder.domain.models import FormFields
from artwork_embedder.infrastructure.logging_event_publisher import LoggingEventPublisher
from artwork_embedder.utils.config import ServiceSettings

_event_publisher = LoggingEventPublisher()


def guess_content_type(path: Path) -> str:
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type or "application/octet-stream"


def embed_from_paths(
    audio: Path,
    image: Path,
    output: Path,
    fields: FormFields,
    settings: ServiceSettings,
    correlation_id: str,
) -> Path:
    """Run the upload pipeline on local files, leaving the inputs untouched."""

    with TemporaryDirectory(prefix="artwork-embedder-") as work_dir:
        service = EmbedArtworkIntoAudio.from_settings(
            settings.model_copy(update={"upload_dir": Path(work_dir)}),
            event_publisher=_event_publisher,
        )
        audio_upload = service.storage.store_upload(
            audio.read_bytes(), filename=audio.name, content_type=guess_content_type(audio)
        )
        image_upload = service.storage.store_upload(
            image.read_bytes(), filename=image.name, content_type=guess_content_type(image)
        )
        result = service.process(audio_upload, image_upload, fields, correlation_id=correlation_id)
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(result.output.path, output)
        finally:
            service.cleanup(result.temporary_paths, correlation_id=correlation_id)
    return output
