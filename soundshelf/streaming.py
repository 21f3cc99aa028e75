"""Audio file responses for the player.

Range, If-Range and conditional GET handling come from Werkzeug through
``send_file(conditional=True)``. A single ``bytes=`` range yields a 206, a
range that cannot be served (past the end, several ranges, malformed) raises
``RequestedRangeNotSatisfiable`` which Flask turns into a 416 carrying
``Content-Range: bytes */<size>``.
"""

import logging
import mimetypes

from flask import Response, send_file

from soundshelf.observability.metrics import record_stream_bytes

logger = logging.getLogger(__name__)

DEFAULT_AUDIO_TYPE = 'audio/mpeg'


def guess_audio_type(path: str) -> str:
    mimetype, _ = mimetypes.guess_type(path)
    return mimetype or DEFAULT_AUDIO_TYPE


def stream_audio_file(path: str) -> Response:
    """Serve ``path`` for playback inside the current request.

    Raises OSError if the file vanished, RequestedRangeNotSatisfiable for a bad Range.
    """
    response = send_file(path, mimetype=guess_audio_type(path), as_attachment=False, conditional=True)
    if response.status_code in (200, 206):
        record_stream_bytes(response.content_length or 0)
    return response


__all__ = [
    'DEFAULT_AUDIO_TYPE',
    'guess_audio_type',
    'stream_audio_file',
]
