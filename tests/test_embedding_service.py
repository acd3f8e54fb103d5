from __future__ import annotations

from pathlib import Path

import pytest

from artwork_embedder.application.embedding_service import EmbedArtworkIntoAudio
from artwork_embedder.artwork_options import PipelineVariant
from artwork_embedder.domain.errors import (
    ImageResizeError,
    MissingFileError,
    TagWriteError,
    UnsupportedImageFormatError,
)
from artwork_embedder.domain.events import (
    ArtworkEmbedFailed,
    ArtworkNormalized,
    ArtworkRequestReceived,
    ArtworkResized,
    TagsWritten,
    TemporaryFilesRemoved,
)
from artwork_embedder.domain.models import FormFields
from artwork_embedder.utils.config import ServiceSettings


class RecordingPublisher:
    def __init__(self) -> None:
        self.events = []

    def publish(self, event) -> None:
        self.events.append(event)


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def service(settings: ServiceSettings, publisher: RecordingPublisher) -> EmbedArtworkIntoAudio:
    return EmbedArtworkIntoAudio.from_settings(settings, event_publisher=publisher)


@pytest.fixture
def uploads(service: EmbedArtworkIntoAudio, mp3_bytes, jpeg_bytes):
    audio = service.storage.store_upload(mp3_bytes, filename="song.mp3", content_type="audio/mpeg")
    image = service.storage.store_upload(jpeg_bytes, filename="cover.jpg", content_type="image/jpeg")
    return audio, image


def test_process_emits_events_in_stage_order(service, publisher, uploads) -> None:
    audio, image = uploads

    result = service.process(audio, image, FormFields(artist="A", title="T"), correlation_id="corr-1")

    assert result.output.path.exists()
    assert result.output.download_name == "T.mp3"
    assert [type(event) for event in publisher.events] == [
        ArtworkRequestReceived,
        ArtworkNormalized,
        ArtworkResized,
        TagsWritten,
    ]
    assert all(event.correlation_id == "corr-1" for event in publisher.events)


def test_success_leaves_temporaries_for_deferred_cleanup(service, publisher, uploads) -> None:
    audio, image = uploads

    result = service.process(audio, image, FormFields(), correlation_id="corr-2")

    assert set(result.temporary_paths) == {audio.path, image.path, result.output.path}
    assert len(service.storage.list_files()) == 3

    service.cleanup(result.temporary_paths, correlation_id="corr-2")

    assert service.storage.list_files() == []
    assert isinstance(publisher.events[-1], TemporaryFilesRemoved)
    assert publisher.events[-1].payload_summary["removed"] == 3
    assert publisher.events[-1].payload_summary["stage"] == "cleaning_up"
    assert publisher.events[-1].payload_summary["next_stage"] == "done"


def test_baseline_variant_skips_resize_and_falls_back_to_modified_title(
    upload_dir: Path, publisher, mp3_bytes, make_image
) -> None:
    settings = ServiceSettings(upload_dir=upload_dir, variant=PipelineVariant.BASELINE)
    service = EmbedArtworkIntoAudio.from_settings(settings, event_publisher=publisher)
    png = make_image("PNG", (20, 20))
    audio = service.storage.store_upload(mp3_bytes, filename="song.mp3", content_type="audio/mpeg")
    image = service.storage.store_upload(png, filename="cover.png", content_type="image/png")

    result = service.process(audio, image, FormFields(title="   "))

    assert ArtworkResized not in [type(event) for event in publisher.events]
    assert result.tags.artwork.data == png
    assert result.tags.artwork.mime_type == "image/png"
    assert result.tags.title == "modified"
    assert result.output.download_name == "modified.mp3"


def test_missing_image_fails_before_processing_and_removes_audio(service, publisher, mp3_bytes) -> None:
    audio = service.storage.store_upload(mp3_bytes, filename="song.mp3", content_type="audio/mpeg")

    with pytest.raises(MissingFileError) as exc:
        service.process(audio, None, FormFields())

    assert "image" in exc.value.message
    assert service.storage.list_files() == []
    assert [type(event) for event in publisher.events] == [ArtworkEmbedFailed, TemporaryFilesRemoved]
    assert publisher.events[0].payload_summary["stage"] == "received"


def test_unsupported_image_removes_uploads(service, publisher, mp3_bytes) -> None:
    audio = service.storage.store_upload(mp3_bytes, filename="song.mp3", content_type="audio/mpeg")
    image = service.storage.store_upload(b"BM", filename="cover.bmp", content_type="image/bmp")

    with pytest.raises(UnsupportedImageFormatError):
        service.process(audio, image, FormFields())

    assert service.storage.list_files() == []
    failure = next(event for event in publisher.events if isinstance(event, ArtworkEmbedFailed))
    assert failure.payload_summary["stage"] == "normalizing"


def test_resize_failure_reports_resizing_stage(service, publisher, mp3_bytes) -> None:
    audio = service.storage.store_upload(mp3_bytes, filename="song.mp3", content_type="audio/mpeg")
    image = service.storage.store_upload(b"garbage", filename="cover.jpg", content_type="image/jpeg")

    with pytest.raises(ImageResizeError):
        service.process(audio, image, FormFields())

    failure = next(event for event in publisher.events if isinstance(event, ArtworkEmbedFailed))
    assert failure.payload_summary["stage"] == "resizing"
    assert service.storage.list_files() == []


def test_tag_write_failure_removes_partial_output(service, uploads) -> None:
    audio, image = uploads
    service.tag_writer = lambda path, tags, options: False

    with pytest.raises(TagWriteError, match="Failed to write ID3 tags"):
        service.process(audio, image, FormFields(title="Song"))

    assert service.storage.list_files() == []


def test_heif_upload_uses_configured_transcoder(service, fake_transcoder, mp3_bytes) -> None:
    service.transcoder = fake_transcoder
    audio = service.storage.store_upload(mp3_bytes, filename="song.mp3", content_type="audio/mpeg")
    image = service.storage.store_upload(b"heic", filename="IMG_1.HEIC", content_type="application/octet-stream")

    result = service.process(audio, image, FormFields())

    assert fake_transcoder.calls == [b"heic"]
    assert result.tags.artwork.mime_type == "image/jpeg"
