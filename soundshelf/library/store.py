"""Whole-document JSON persistence for the library.

Every request reads the full document and every mutation rewrites it. There is
no lock around the load/mutate/save cycle, so two concurrent writers can lose
an update; the server is meant for a single local user.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict

from pydantic import TypeAdapter, ValidationError

from soundshelf.models import Library, Playlist, Track


logger = logging.getLogger(__name__)

_TRACK_ADAPTER = TypeAdapter(Track)


class LibraryStore:
    def __init__(self, data_file: str):
        self.data_file = data_file

    def load(self) -> Library:
        """Return the stored library.

        A missing, unreadable or non-object document gives an empty library.
        Otherwise each track and playlist is validated on its own: invalid
        entries are skipped with a warning so one bad record cannot take the
        rest of the library with it on the next save.
        """
        if not os.path.exists(self.data_file):
            return Library()
        try:
            with open(self.data_file, "r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, ValueError) as exc:
            logger.warning("Library document %s unreadable, starting empty: %s", self.data_file, exc)
            return Library()
        if not isinstance(data, dict):
            logger.warning("Library document %s is not a JSON object, starting empty", self.data_file)
            return Library()
        return self._build_library(data)

    def _build_library(self, data: Dict[str, Any]) -> Library:
        library = Library()

        raw_tracks = data.get("tracks") or []
        if not isinstance(raw_tracks, list):
            logger.warning("Ignoring non-list 'tracks' in %s", self.data_file)
            raw_tracks = []
        for index, raw in enumerate(raw_tracks):
            try:
                library.tracks.append(_TRACK_ADAPTER.validate_python(raw))
            except ValidationError as exc:
                logger.warning("Skipping invalid track #%d in %s: %s", index, self.data_file, exc)

        raw_playlists = data.get("playlists") or {}
        if not isinstance(raw_playlists, dict):
            logger.warning("Ignoring non-object 'playlists' in %s", self.data_file)
            raw_playlists = {}
        known = {track.id for track in library.tracks}
        for key, raw in raw_playlists.items():
            try:
                playlist = Playlist.model_validate(raw)
            except ValidationError as exc:
                logger.warning("Skipping invalid playlist %r in %s: %s", key, self.data_file, exc)
                continue
            # Entries pointing at skipped tracks would dangle.
            kept = [tid for tid in playlist.track_ids if tid in known]
            if len(kept) != len(playlist.track_ids):
                logger.warning("Dropping unknown track ids from playlist %r in %s", key, self.data_file)
                playlist.track_ids = kept
            library.playlists[key] = playlist
        return library

    def save(self, library: Library) -> None:
        directory = os.path.dirname(self.data_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.data_file}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as handle:
            json.dump(library.to_dict(), handle, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.data_file)

    def exists(self) -> bool:
        return os.path.exists(self.data_file)


__all__ = ["LibraryStore"]
