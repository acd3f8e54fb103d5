"""Public package exports for the artwork embedder with lazy imports."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "ArtworkImage",
    "TagSet",
    "UploadedFile",
    "EmbedArtworkIntoAudio",
    "ArtworkEmbedError",
    "ServiceSettings",
    "load_settings",
    "normalize_image",
    "resize_artwork",
    "embed_tags",
]

_EXPORT_MODULES: dict[str, str] = {
    "ArtworkImage": "artwork_embedder.domain.models",
    "TagSet": "artwork_embedder.domain.models",
    "UploadedFile": "artwork_embedder.domain.models",
    "EmbedArtworkIntoAudio": "artwork_embedder.application.embedding_service",
    "ArtworkEmbedError": "artwork_embedder.domain.errors",
    "ServiceSettings": "artwork_embedder.utils.config",
    "load_settings": "artwork_embedder.utils.config",
    "normalize_image": "artwork_embedder.image_normalization",
    "resize_artwork": "artwork_embedder.artwork_resize",
    "embed_tags": "artwork_embedder.tag_embedding",
}


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MODULES:
        raise AttributeError(f"module 'artwork_embedder' has no attribute {name!r}")

    module = import_module(_EXPORT_MODULES[name])
    value = getattr(module, name)
    globals()[name] = value
    return value
