"""Logging-backed implementation of the event publisher."""

from __future__ import annotations

import logging

from artwork_embedder.domain.events import ArtworkEmbedFailed, DomainEvent

LOGGER = logging.getLogger("artwork_embedder.events")

EVENT_LOG_LEVELS: dict[type[DomainEvent], int] = {
    ArtworkEmbedFailed: logging.WARNING,
}


class LoggingEventPublisher:
    """Emit request lifecycle events to structured logs.

    Failures are logged at WARNING so they surface under the default level;
    every other event is INFO unless ``levels`` overrides it.
    """

    def __init__(self, levels: dict[type[DomainEvent], int] | None = None) -> None:
        self._levels = {**EVENT_LOG_LEVELS, **(levels or {})}

    def publish(self, event: DomainEvent) -> None:
        event_name = type(event).__name__
        LOGGER.log(
            self._levels.get(type(event), logging.INFO),
            "artwork_event %s",
            event_name,
            extra={
                "event_name": event_name,
                "correlation_id": event.correlation_id,
                "payload_summary": event.payload_summary,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )
