import os
from typing import Any
from urllib.parse import unquote

import requests
from flask import Flask, Response, render_template_string, request

from artwork_embedder.artwork_options import PipelineVariant, enum_values

app = Flask(__name__)


INDEX_TEMPLATE = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <title>Artwork Embedder</title>
  </head>
  <body>
    <h1>Artwork Embedder</h1>
    <form action="/process-mp3" method="post" enctype="multipart/form-data">
      <p>
        <label for="mp3">MP3 file:</label>
        <input id="mp3" name="mp3" type="file" accept="audio/mpeg,.mp3" required>
      </p>
      <p>
        <label for="image">Artwork (JPG, PNG, GIF or HEIC):</label>
        <input id="image" name="image" type="file" required>
      </p>
      {% for field in text_fields %}
      <p>
        <label for="{{ field }}">{{ field|capitalize }}:</label>
        <input id="{{ field }}" name="{{ field }}" type="text">
      </p>
      {% endfor %}
      <button type="submit">Embed artwork</button>
    </form>
    <p>API pipeline variants: {{ variants|join(", ") }}</p>
    <p><a href="/health">Check health</a></p>
  </body>
</html>
"""


HEALTH_TEMPLATE = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <title>Health</title>
  </head>
  <body>
    <h1>API health status: {{ status }}</h1>
    <pre>{{ payload }}</pre>
    <p><a href="/">Back</a></p>
  </body>
</html>
"""


ERROR_TEMPLATE = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <title>Embed Error</title>
  </head>
  <body>
    <h1>Artwork embed failed (status {{ status }})</h1>
    <pre>{{ payload }}</pre>
    <p><a href="/">Back</a></p>
  </body>
</html>
"""


SUCCESS_TEMPLATE = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <title>Embed Success</title>
  </head>
  <body>
    <h1>Artwork embedded</h1>
    <p><strong>Filename:</strong> {{ filename }}</p>
    <p><strong>Content type:</strong> {{ content_type }}</p>
    <p><strong>Size:</strong> {{ size_bytes }} bytes</p>
    <p>
      <a href="/">Tag another file</a>
      |
      <a href="/health">Check health</a>
    </p>
  </body>
</html>
"""

TEXT_FIELDS = ("artist", "title", "album")
DEFAULT_FILENAME = "modified.mp3"


def _api_base_url() -> str:
    return os.getenv("ARTWORK_EMBEDDER_API_BASE_URL", "http://127.0.0.1:3000").rstrip("/")


def _frontend_host() -> str:
    return os.getenv("ARTWORK_EMBEDDER_FRONTEND_HOST", "0.0.0.0")


def _frontend_port() -> int:
    return int(os.getenv("ARTWORK_EMBEDDER_FRONTEND_PORT", "5000"))


@app.get("/")
def index() -> str:
    return render_template_string(
        INDEX_TEMPLATE,
        text_fields=TEXT_FIELDS,
        variants=enum_values(PipelineVariant),
    )


@app.post("/process-mp3")
def process_mp3() -> Response | tuple[str, int]:
    mp3 = request.files.get("mp3")
    image = request.files.get("image")

    if mp3 is None or image is None:
        payload = {"error": "Both 'mp3' and 'image' files are required."}
        return render_template_string(ERROR_TEMPLATE, status=400, payload=payload), 400

    files = {
        "mp3": (mp3.filename or "audio.mp3", mp3.stream, mp3.mimetype),
        "image": (image.filename or "image", image.stream, image.mimetype),
    }
    data = {field: request.form[field] for field in TEXT_FIELDS if request.form.get(field)}

    try:
        upstream = requests.post(
            f"{_api_base_url()}/process-mp3",
            data=data,
            files=files,
            timeout=120,
        )
    except requests.RequestException as exc:
        payload = {"error": "Failed to contact API", "detail": str(exc)}
        return render_template_string(ERROR_TEMPLATE, status=502, payload=payload), 502

    content_type = upstream.headers.get("content-type", "audio/mpeg")

    if upstream.ok:
        disposition = upstream.headers.get("content-disposition")
        filename = _content_disposition_filename(disposition)
        download = request.args.get("download", "1") != "0"

        if not download:
            return (
                render_template_string(
                    SUCCESS_TEMPLATE,
                    filename=filename,
                    content_type=content_type,
                    size_bytes=len(upstream.content),
                ),
                upstream.status_code,
            )

        return Response(
            upstream.content,
            status=upstream.status_code,
            content_type=content_type,
            headers={"Content-Disposition": disposition or f'attachment; filename="{filename}"'},
        )

    payload: dict[str, Any]
    try:
        payload = upstream.json()
    except ValueError:
        payload = {"error": "Upstream returned non-JSON error", "body": upstream.text}

    return (
        render_template_string(
            ERROR_TEMPLATE,
            status=upstream.status_code,
            payload=payload,
        ),
        upstream.status_code,
    )


@app.get("/health")
def health() -> tuple[str, int]:
    try:
        upstream = requests.get(f"{_api_base_url()}/health", timeout=30)
    except requests.RequestException as exc:
        payload = {"error": "Failed to contact API", "detail": str(exc)}
        return render_template_string(HEALTH_TEMPLATE, status="unavailable", payload=payload), 502

    try:
        payload = upstream.json()
    except ValueError:
        payload = {"error": "Upstream returned non-JSON payload", "body": upstream.text}

    status = payload.get("status", "unknown") if isinstance(payload, dict) else "unknown"
    return render_template_string(HEALTH_TEMPLATE, status=status, payload=payload), upstream.status_code


def _content_disposition_filename(content_disposition: str | None) -> str:
    if not content_disposition:
        return DEFAULT_FILENAME

    plain = None
    for part in (part.strip() for part in content_disposition.split(";")):
        if part.lower().startswith("filename*="):
            charset, _, encoded = part.split("=", 1)[1].partition("''")
            if encoded:
                return unquote(encoded, encoding=charset or "utf-8", errors="replace") or DEFAULT_FILENAME
        elif part.lower().startswith("filename="):
            plain = part.split("=", 1)[1].strip('"')
    return plain or DEFAULT_FILENAME


def main() -> None:
    app.run(host=_frontend_host(), port=_frontend_port(), debug=True)


if __name__ == "__main__":
    main()
