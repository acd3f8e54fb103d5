from __future__ import annotations

from pathlib import Path

from mutagen.id3 import ID3
from typer.testing import CliRunner

from artwork_embedder import cli
from artwork_embedder.domain.models import FormFields
from artwork_embedder.interfaces.cli_handlers import embed_from_paths, guess_content_type
from artwork_embedder.utils.config import ServiceSettings

runner = CliRunner()


def test_guess_content_type_falls_back_to_octet_stream() -> None:
    assert guess_content_type(Path("cover.png")) == "image/png"
    assert guess_content_type(Path("cover.unknownext")) == "application/octet-stream"


def test_embed_from_paths_keeps_inputs_and_writes_output(tmp_path: Path, mp3_bytes, jpeg_bytes) -> None:
    audio = tmp_path / "song.mp3"
    image = tmp_path / "cover.jpg"
    output = tmp_path / "out" / "tagged.mp3"
    audio.write_bytes(mp3_bytes)
    image.write_bytes(jpeg_bytes)

    written = embed_from_paths(
        audio,
        image,
        output,
        FormFields(artist="Artist", title="Title"),
        settings=ServiceSettings(artwork_size=16),
        correlation_id="corr-cli",
    )

    assert written == output
    assert audio.read_bytes() == mp3_bytes
    assert image.exists()
    tags = ID3(str(output))
    assert tags["TPE1"].text == ["Artist"]
    assert tags.getall("APIC")[0].mime == "image/jpeg"


def test_embed_command_reports_written_path(tmp_path: Path, mp3_bytes, make_image) -> None:
    audio = tmp_path / "song.mp3"
    image = tmp_path / "cover.png"
    output = tmp_path / "tagged.mp3"
    audio.write_bytes(mp3_bytes)
    image.write_bytes(make_image("PNG", (8, 8)))

    result = runner.invoke(
        cli.app,
        [
            "embed",
            "--audio", str(audio),
            "--image", str(image),
            "--output", str(output),
            "--title", "Song",
            "--variant", "baseline",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Tagged audio written to" in result.output
    assert ID3(str(output)).getall("APIC")[0].mime == "image/png"


def test_embed_command_exits_non_zero_on_unsupported_image(tmp_path: Path, mp3_bytes) -> None:
    audio = tmp_path / "song.mp3"
    image = tmp_path / "cover.bmp"
    audio.write_bytes(mp3_bytes)
    image.write_bytes(b"BM")

    result = runner.invoke(
        cli.app,
        ["embed", "--audio", str(audio), "--image", str(image), "--output", str(tmp_path / "o.mp3")],
    )

    assert result.exit_code == 1
    assert not (tmp_path / "o.mp3").exists()


def test_serve_command_runs_uvicorn_with_settings(monkeypatch, tmp_path: Path) -> None:
    captured = {}

    def fake_run(app, **kwargs):
        captured["app"] = app
        captured.update(kwargs)

    monkeypatch.setattr("uvicorn.run", fake_run)

    result = runner.invoke(
        cli.app,
        ["serve", "--port", "8123", "--upload-dir", str(tmp_path / "u"), "--variant", "baseline"],
    )

    assert result.exit_code == 0, result.output
    assert captured["port"] == 8123
    assert captured["app"].state.settings.variant.value == "baseline"
    assert captured["app"].state.settings.upload_dir == tmp_path / "u"
