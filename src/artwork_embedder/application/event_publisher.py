"""Port through which the embed use case reports request lifecycle events."""

from __future__ import annotations

from typing import Protocol

from artwork_embedder.domain.events import DomainEvent


class EventPublisher(Protocol):
    def publish(self, event: DomainEvent) -> None:
        """Report one lifecycle event; implementations must not raise."""


class NullEventPublisher:
    """Discards events. Default for library and CLI use without logging."""

    def publish(self, event: DomainEvent) -> None:  # noqa: ARG002
        return None
