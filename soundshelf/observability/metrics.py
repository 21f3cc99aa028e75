from __future__ import annotations

from flask import Blueprint, Response
from prometheus_client import Counter, generate_latest

metrics_blueprint = Blueprint("metrics_bp", __name__)

CONTENT_TYPE_LATEST = "text/plain; version=0.0.4; charset=utf-8"

TRACKS_UPLOADED = Counter(
    "soundshelf_tracks_uploaded_total",
    "Total number of tracks created from uploaded files.",
)
TRACKS_REGISTERED = Counter(
    "soundshelf_tracks_registered_total",
    "Total number of remote URL tracks registered.",
)
TRACKS_DELETED = Counter(
    "soundshelf_tracks_deleted_total",
    "Total number of tracks deleted.",
)
STREAM_REQUESTS = Counter(
    "soundshelf_stream_requests_total",
    "Stream requests by response status.",
    ["status"],
)
STREAM_BYTES = Counter(
    "soundshelf_stream_bytes_total",
    "Audio bytes served in 200 and 206 stream responses.",
)


def record_uploads(count: int) -> None:
    if count > 0:
        TRACKS_UPLOADED.inc(count)


def record_registration() -> None:
    TRACKS_REGISTERED.inc()


def record_deletion() -> None:
    TRACKS_DELETED.inc()


def record_stream_request(status: int) -> None:
    STREAM_REQUESTS.labels(status=str(status)).inc()


def record_stream_bytes(count: int) -> None:
    STREAM_BYTES.inc(count)


@metrics_blueprint.route("/metrics")
def metrics_endpoint() -> Response:
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
