"""Playlist CRUD routes."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from soundshelf.interfaces.http.payloads import json_object


playlist_bp = Blueprint('playlist_bp', __name__, url_prefix='/api/playlists')


def _library():
    return current_app.extensions['library_service']


def _not_found(message: str = 'not found'):
    return jsonify({'ok': False, 'error': message}), 404


@playlist_bp.route('', methods=['GET'])
def list_playlists():
    playlists = _library().list_playlists()
    return jsonify({'playlists': {pid: pl.to_dict() for pid, pl in playlists.items()}}), 200


@playlist_bp.route('', methods=['POST'])
def create_playlist():
    payload = json_object()
    try:
        playlist = _library().create_playlist(payload.get('name'))
    except ValueError as exc:
        return jsonify({'ok': False, 'error': str(exc)}), 400
    return jsonify({'ok': True, 'playlist': playlist.to_dict()}), 200


@playlist_bp.route('/<string:playlist_id>', methods=['PUT'])
def rename_playlist(playlist_id: str):
    payload = json_object()
    playlist = _library().rename_playlist(playlist_id, payload.get('name'))
    if playlist is None:
        return _not_found()
    return jsonify({'ok': True, 'playlist': playlist.to_dict()}), 200


@playlist_bp.route('/<string:playlist_id>', methods=['DELETE'])
def delete_playlist(playlist_id: str):
    if not _library().delete_playlist(playlist_id):
        return _not_found()
    return jsonify({'ok': True}), 200


@playlist_bp.route('/<string:playlist_id>/tracks', methods=['POST'])
def add_track(playlist_id: str):
    payload = json_object()
    try:
        playlist = _library().add_track_to_playlist(playlist_id, payload.get('trackId'))
    except ValueError as exc:
        return jsonify({'ok': False, 'error': str(exc)}), 400
    if playlist is None:
        return _not_found('playlist not found')
    return jsonify({'ok': True, 'playlist': playlist.to_dict()}), 200


@playlist_bp.route('/<string:playlist_id>/tracks/<string:track_id>', methods=['DELETE'])
def remove_track(playlist_id: str, track_id: str):
    playlist = _library().remove_track_from_playlist(playlist_id, track_id)
    if playlist is None:
        return _not_found('playlist not found')
    return jsonify({'ok': True, 'playlist': playlist.to_dict()}), 200


__all__ = ['playlist_bp']
