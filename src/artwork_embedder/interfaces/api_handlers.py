"""API-facing handlers that delegate to the embed application service."""

from __future__ import annotations

import logging
from typing import Any, Sequence
from urllib.parse import quote

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from artwork_embedder.artwork_options import PipelineStage
from artwork_embedder.domain.errors import ArtworkEmbedError, InvalidRequestError, UploadTooLargeError
from artwork_embedder.domain.models import UploadedFile
from artwork_embedder.infrastructure.temp_files import TemporaryStorage

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Failed to process MP3: "
FALLBACK_FILENAME = "modified.mp3"


async def store_upload(
    upload: UploadFile | None,
    storage: TemporaryStorage,
    max_upload_bytes: int,
) -> UploadedFile | None:
    """Persist a multipart part to temporary storage, or return None when absent."""

    if upload is None or not upload.filename:
        return None

    payload = await upload.read()
    if len(payload) > max_upload_bytes:
        raise UploadTooLargeError(
            "file_too_large",
            f"Upload '{upload.filename}' exceeds max size limit of {max_upload_bytes} bytes.",
            PipelineStage.RECEIVED,
        )
    return await run_in_threadpool(
        storage.store_upload, payload, filename=upload.filename, content_type=upload.content_type
    )


def content_disposition(filename: str) -> str:
    """Build an attachment header, adding an RFC 5987 name for non-ASCII titles."""

    cleaned = "".join(ch for ch in filename if ch.isprintable() and ch not in '"\\/').strip()
    cleaned = cleaned or FALLBACK_FILENAME
    ascii_name = cleaned.encode("ascii", "ignore").decode("ascii").strip() or FALLBACK_FILENAME
    if ascii_name == cleaned:
        return f'attachment; filename="{cleaned}"'
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(cleaned)}"


def invalid_request_error(errors: Sequence[dict[str, Any]]) -> InvalidRequestError:
    """Summarise framework validation errors, e.g. a text value sent for a file part."""

    details = []
    for item in errors:
        location = [str(part) for part in item.get("loc", ()) if part != "body"]
        field = ".".join(location) or "request"
        details.append(f"{field}: {item.get('msg', 'invalid value')}")
    message = "Invalid request: " + ("; ".join(details) or "malformed multipart body")
    return InvalidRequestError("invalid_request", message, PipelineStage.RECEIVED)


def error_response(error: Exception, correlation_id: str, status_code: int = 500) -> JSONResponse:
    """Translate a pipeline failure into the uniform JSON error body."""

    if isinstance(error, ArtworkEmbedError):
        logger.warning(
            "Artwork embed request failed: %s",
            error.message,
            extra={"correlation_id": correlation_id, "error_code": error.code, "stage": error.stage.value},
        )
    else:
        logger.exception("Unexpected failure processing MP3.", extra={"correlation_id": correlation_id})

    response = JSONResponse(status_code=status_code, content={"error": f"{ERROR_PREFIX}{error}"})
    response.headers["X-Correlation-Id"] = correlation_id
    return response


__all__ = ["content_disposition", "error_response", "invalid_request_error", "store_upload"]
