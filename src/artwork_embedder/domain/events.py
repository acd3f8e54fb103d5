"""Domain event contracts for artwork embed workflows."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """Base domain event emitted by application services."""

    correlation_id: str
    payload_summary: dict[str, Any]
    occurred_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))


@dataclass(frozen=True, slots=True)
class ArtworkRequestReceived(DomainEvent):
    """Both uploads were present and accepted for processing."""


@dataclass(frozen=True, slots=True)
class ArtworkNormalized(DomainEvent):
    """The uploaded image was validated or transcoded."""


@dataclass(frozen=True, slots=True)
class ArtworkResized(DomainEvent):
    """Artwork was cover-fit resized and re-encoded."""


@dataclass(frozen=True, slots=True)
class TagsWritten(DomainEvent):
    """ID3 frames were written into the output copy."""


@dataclass(frozen=True, slots=True)
class ArtworkEmbedFailed(DomainEvent):
    """Pipeline execution failed for a correlation id."""


@dataclass(frozen=True, slots=True)
class TemporaryFilesRemoved(DomainEvent):
    """Request temporaries were deleted after the response or failure."""
