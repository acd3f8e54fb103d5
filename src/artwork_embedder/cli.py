"""CLI interface for the artwork embedder."""

import logging
from pathlib import Path
from uuid import uuid4

import typer

from .artwork_options import PipelineVariant
from .domain.errors import ArtworkEmbedError
from .domain.models import FormFields
from .interfaces.cli_handlers import embed_from_paths
from .utils.config import ServiceSettings, load_settings

app = typer.Typer(help="Artwork embedder command line interface")


def _resolve_settings(config: Path | None, **overrides: object) -> ServiceSettings:
    settings = load_settings(config)
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return settings
    return ServiceSettings.model_validate({**settings.model_dump(), **updates})


@app.command("serve")
def serve_command(
    host: str | None = typer.Option(None, "--host", help="Interface to bind."),
    port: int | None = typer.Option(None, "--port", "-p", min=1, max=65535, help="Port to listen on."),
    upload_dir: Path | None = typer.Option(
        None, "--upload-dir", help="Directory holding in-flight uploads."
    ),
    variant: PipelineVariant | None = typer.Option(
        None,
        "--variant",
        case_sensitive=False,
        help="Pipeline variant: baseline (no resize) or enhanced (3000x3000 cover fit).",
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="YAML or JSON settings file."
    ),
) -> None:
    """Run the HTTP API."""

    import uvicorn

    from .api import create_app

    settings = _resolve_settings(config, host=host, port=port, upload_dir=upload_dir, variant=variant)
    logging.basicConfig(level=settings.log_level.upper())
    typer.echo(f"Server running on http://{settings.host}:{settings.port}")
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


@app.command("embed")
def embed_command(
    audio: Path = typer.Option(..., "--audio", "-a", exists=True, dir_okay=False, help="Path to MP3"),
    image: Path = typer.Option(..., "--image", "-i", exists=True, dir_okay=False, help="Path to artwork"),
    output: Path = typer.Option(..., "--output", "-o", help="Path to tagged output MP3"),
    artist: str | None = typer.Option(None, "--artist", help="Artist (TPE1)."),
    title: str | None = typer.Option(None, "--title", help="Title (TIT2)."),
    album: str | None = typer.Option(None, "--album", help="Album (TALB)."),
    variant: PipelineVariant | None = typer.Option(
        None,
        "--variant",
        case_sensitive=False,
        help="Pipeline variant: baseline (no resize) or enhanced (3000x3000 cover fit).",
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="YAML or JSON settings file."
    ),
) -> None:
    """Embed artwork into a local MP3 without starting the server."""

    settings = _resolve_settings(config, variant=variant)
    correlation_id = str(uuid4())
    try:
        written = embed_from_paths(
            audio,
            image,
            output,
            FormFields(artist=artist, title=title, album=album),
            settings=settings,
            correlation_id=correlation_id,
        )
    except ArtworkEmbedError as error:
        typer.echo(f"Failed to process MP3: {error}", err=True)
        raise typer.Exit(code=1) from error

    typer.echo(f"Tagged audio written to: {written}")
    typer.echo(f"Correlation ID: {correlation_id}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
