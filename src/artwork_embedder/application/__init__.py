"""Application layer."""

from .embedding_service import EmbedArtworkIntoAudio
from .event_publisher import EventPublisher, NullEventPublisher

__all__ = ["EventPublisher", "NullEventPublisher", "EmbedArtworkIntoAudio"]
