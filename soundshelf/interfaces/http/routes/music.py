"""Track routes: upload, URL registration, listing, deletion and streaming."""

from __future__ import annotations

import logging
import os

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import RequestedRangeNotSatisfiable

from soundshelf.interfaces.http.payloads import json_object
from soundshelf.models import FileTrack
from soundshelf.observability.metrics import (
    record_deletion,
    record_registration,
    record_stream_request,
    record_uploads,
)
from soundshelf.streaming import stream_audio_file


logger = logging.getLogger(__name__)

music_bp = Blueprint('music_bp', __name__, url_prefix='/api/music')


def _library():
    return current_app.extensions['library_service']


def _error(message: str, status: int):
    return jsonify({'ok': False, 'error': message}), status


@music_bp.route('/upload', methods=['POST'])
def upload_tracks():
    files = [f for f in request.files.getlist('files') if f and f.filename]
    limit = current_app.config['MAX_UPLOAD_FILES']
    if len(files) > limit:
        return _error(f'at most {limit} files per upload', 400)

    created = _library().upload_files(files)
    record_uploads(len(created))
    return jsonify({'ok': True, 'tracks': [track.to_dict() for track in created]}), 200


@music_bp.route('/url', methods=['POST'])
def register_url():
    payload = json_object()
    try:
        track = _library().register_url(
            payload.get('url'),
            title=payload.get('title'),
            artist=payload.get('artist'),
            album=payload.get('album'),
            genre=payload.get('genre'),
        )
    except ValueError as exc:
        return _error(str(exc), 400)
    record_registration()
    return jsonify({'ok': True, 'track': track.to_dict()}), 200


@music_bp.route('', methods=['GET'])
def list_tracks():
    tracks = _library().list_tracks()
    return jsonify({'tracks': [track.to_dict() for track in tracks]}), 200


@music_bp.route('/<string:track_id>', methods=['DELETE'])
def delete_track(track_id: str):
    if _library().delete_track(track_id) is None:
        return _error('not found', 404)
    record_deletion()
    return jsonify({'ok': True}), 200


@music_bp.route('/stream/<string:track_id>', methods=['GET'])
def stream_track(track_id: str):
    library = _library()
    track = library.get_track(track_id)
    if track is None:
        record_stream_request(404)
        return _error('not found', 404)
    if not isinstance(track, FileTrack):
        record_stream_request(400)
        return _error('track is not a local file', 400)

    full_path = library.uploads.path_for(track.path)
    if full_path is None or not os.path.isfile(full_path):
        logger.warning('File for track %s is missing: %s', track_id, track.path)
        record_stream_request(404)
        return _error('file not found', 404)

    try:
        response = stream_audio_file(full_path)
    except RequestedRangeNotSatisfiable:
        logger.info('Unsatisfiable range %r for track %s', request.headers.get('Range'), track_id)
        record_stream_request(416)
        raise
    record_stream_request(response.status_code)
    return response


__all__ = ['music_bp']
