from __future__ import annotations

import io
from pathlib import Path

import pytest
from PIL import Image

from artwork_embedder.utils.config import ServiceSettings


def _mp3_frames(*, bitrate_kbps: int = 128, sample_rate: int = 44_100, seconds: float = 0.5) -> bytes:
    bitrate_idx = {64: 5, 128: 9, 192: 11, 320: 14}[bitrate_kbps]
    sample_idx = {44_100: 0, 48_000: 1, 32_000: 2}[sample_rate]
    header = 0
    header |= 0x7FF << 21
    header |= 0x3 << 19  # MPEG-1
    header |= 0x1 << 17  # Layer III
    header |= 0x1 << 16  # no CRC
    header |= bitrate_idx << 12
    header |= sample_idx << 10
    frame_len = int((144_000 * bitrate_kbps) / sample_rate)
    frame = header.to_bytes(4, "big") + b"\x00" * (frame_len - 4)
    frame_count = max(1, int(seconds * sample_rate / 1152))
    return frame * frame_count


def _image_bytes(fmt: str = "JPEG", size: tuple[int, int] = (800, 600), color=(200, 40, 40)) -> bytes:
    image = Image.new("RGB", size, color)
    if fmt == "GIF":
        image = image.convert("P")
    with io.BytesIO() as buffer:
        image.save(buffer, format=fmt)
        return buffer.getvalue()


@pytest.fixture
def mp3_bytes() -> bytes:
    return _mp3_frames()


@pytest.fixture
def make_image():
    return _image_bytes


@pytest.fixture
def jpeg_bytes() -> bytes:
    return _image_bytes("JPEG", (800, 600))


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir: Path) -> ServiceSettings:
    return ServiceSettings(upload_dir=upload_dir, artwork_size=64)


@pytest.fixture
def fake_transcoder(jpeg_bytes: bytes):
    calls: list[bytes] = []

    def transcode(payload: bytes, options) -> bytes:
        calls.append(payload)
        return jpeg_bytes

    transcode.calls = calls
    return transcode
