from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from artwork_embedder.artwork_options import PipelineVariant, parse_case_insensitive_enum
from artwork_embedder.domain.policies import ResizeOptions, TagWriteOptions, TranscodeOptions

ENV_PREFIX = "ARTWORK_EMBEDDER_"
CONFIG_PATH_ENV = f"{ENV_PREFIX}CONFIG"

_BASELINE_TITLE_FALLBACK = "modified"
_ENHANCED_TITLE_FALLBACK = ""


class ServiceSettings(BaseModel):
    """Runtime configuration handed to the API, CLI and pipeline at startup."""

    host: str = "0.0.0.0"
    port: int = Field(3000, ge=1, le=65535)
    upload_dir: Path = Path("uploads")
    variant: PipelineVariant = PipelineVariant.ENHANCED
    artwork_size: int = Field(3000, ge=1, le=10000)
    jpeg_quality: int = Field(90, ge=1, le=95)
    title_fallback: str | None = None
    default_download_name: str = "modified"
    max_upload_bytes: int = Field(100 * 1024 * 1024, gt=0)
    id3_version: int = Field(3, ge=3, le=4)
    log_level: str = "info"

    @field_validator("variant", mode="before")
    @classmethod
    def _parse_variant(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_case_insensitive_enum(value, PipelineVariant)
        return value

    @field_validator("default_download_name")
    @classmethod
    def _validate_download_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("default_download_name must not be empty.")
        return value

    @property
    def resize_enabled(self) -> bool:
        return self.variant is PipelineVariant.ENHANCED

    @property
    def effective_title_fallback(self) -> str:
        if self.title_fallback is not None:
            return self.title_fallback
        if self.variant is PipelineVariant.BASELINE:
            return _BASELINE_TITLE_FALLBACK
        return _ENHANCED_TITLE_FALLBACK

    def resize_options(self) -> ResizeOptions:
        return ResizeOptions(size=self.artwork_size, quality=self.jpeg_quality)

    def transcode_options(self) -> TranscodeOptions:
        return TranscodeOptions(quality=self.jpeg_quality)

    def tag_write_options(self) -> TagWriteOptions:
        return TagWriteOptions(id3_version=self.id3_version)


def load_settings(path: Path | None = None, environ: dict[str, str] | None = None) -> ServiceSettings:
    """Load settings from an optional YAML/JSON file, then apply env overrides."""

    env = os.environ if environ is None else environ
    if path is None and env.get(CONFIG_PATH_ENV):
        path = Path(env[CONFIG_PATH_ENV])

    data: dict[str, Any] = _load_config_data(path) if path is not None else {}
    data.update(_environment_overrides(env))
    return ServiceSettings.model_validate(data)


@lru_cache(maxsize=1)
def get_settings() -> ServiceSettings:
    """Build and cache settings for the module-level application."""

    return load_settings()


def _environment_overrides(env: Any) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for name in ServiceSettings.model_fields:
        value = env.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None:
            overrides[name] = value
    # Conventional PORT is honoured when the prefixed variable is absent.
    if "port" not in overrides and env.get("PORT"):
        overrides["port"] = env["PORT"]
    return overrides


def _load_config_data(path: Path) -> dict:
    if path.suffix.lower() in {".yaml", ".yml"}:
        import yaml

        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}

    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)
