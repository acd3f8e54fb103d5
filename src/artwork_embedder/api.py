"""FastAPI interface for the artwork embedder."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator
from uuid import uuid4

from fastapi import FastAPI, File, Form, Header, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse, Response
from starlette.background import BackgroundTask

from .application.embedding_service import EmbedArtworkIntoAudio
from .artwork_options import PipelineStage
from .domain.errors import ArtworkEmbedError, UploadTooLargeError
from .domain.models import FormFields, UploadedFile
from .infrastructure.logging_event_publisher import LoggingEventPublisher
from .interfaces.api_handlers import (
    content_disposition,
    error_response,
    invalid_request_error,
    store_upload,
)
from .utils.config import ServiceSettings, get_settings

STATIC_DIR = Path(__file__).resolve().parent / "static"


def create_app(
    settings: ServiceSettings | None = None,
    service: EmbedArtworkIntoAudio | None = None,
) -> FastAPI:
    """Build the API around explicit settings and an embed service."""

    settings = settings or get_settings()
    service = service or EmbedArtworkIntoAudio.from_settings(
        settings, event_publisher=LoggingEventPublisher()
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        service.storage.ensure_directory()
        yield

    app = FastAPI(title="Artwork Embedder API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.embed_service = service

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        correlation_id = request.headers.get("X-Correlation-Id") or str(uuid4())
        return error_response(invalid_request_error(exc.errors()), correlation_id)

    @app.get("/", include_in_schema=False)
    def index() -> FileResponse:
        return FileResponse(STATIC_DIR / "index.html", media_type="text/html")

    @app.get("/health")
    def health() -> dict[str, str]:
        """Health check endpoint."""

        return {"status": "ok", "variant": settings.variant.value}

    @app.post("/process-mp3")
    async def process_mp3(
        mp3: UploadFile | None = File(None, description="MP3 file to tag"),
        image: UploadFile | None = File(None, description="Artwork image"),
        artist: str | None = Form(None),
        title: str | None = Form(None),
        album: str | None = Form(None),
        x_correlation_id: str | None = Header(default=None, alias="X-Correlation-Id"),
    ) -> Response:
        """Embed the uploaded image into a copy of the uploaded MP3 and return it."""

        correlation_id = x_correlation_id or str(uuid4())
        stored: list[UploadedFile] = []

        try:
            audio_file = await store_upload(mp3, service.storage, settings.max_upload_bytes)
            if audio_file is not None:
                stored.append(audio_file)
            image_file = await store_upload(image, service.storage, settings.max_upload_bytes)
            if image_file is not None:
                stored.append(image_file)
        except Exception as error:  # noqa: BLE001
            await run_in_threadpool(
                service.cleanup, [upload.path for upload in stored], correlation_id=correlation_id
            )
            status = 413 if isinstance(error, UploadTooLargeError) else 500
            return error_response(error, correlation_id, status_code=status)

        fields = FormFields(artist=artist, title=title, album=album)
        try:
            result = await run_in_threadpool(
                service.process, audio_file, image_file, fields, correlation_id
            )
        except Exception as error:  # noqa: BLE001
            return error_response(error, correlation_id)

        try:
            payload = await run_in_threadpool(result.output.path.read_bytes)
        except OSError as exc:
            await run_in_threadpool(
                service.cleanup, result.temporary_paths, correlation_id=correlation_id
            )
            error = ArtworkEmbedError(
                "output_unreadable",
                f"Failed to read tagged file: {exc.strerror or exc}",
                PipelineStage.RESPONDING,
            )
            return error_response(error, correlation_id)

        # Runs only after the body has been sent to the client.
        cleanup = BackgroundTask(
            service.cleanup, result.temporary_paths, correlation_id=correlation_id
        )
        response = Response(content=payload, media_type=result.output.media_type, background=cleanup)
        response.headers["Content-Disposition"] = content_disposition(result.output.download_name)
        response.headers["X-Correlation-Id"] = correlation_id
        return response

    return app


app = create_app()
