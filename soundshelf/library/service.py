"""Track and playlist operations over the JSON library document.

Each public method performs one full load/mutate/save cycle. Not-found is
signalled by returning ``None``; invalid input raises ``ValueError``.
"""

from __future__ import annotations

import logging
import os
import uuid
from typing import Dict, Iterable, List, Optional, Union

from soundshelf.library.hints import FilenameHints, parse_filename, url_basename
from soundshelf.library.metadata import AudioTags, MetadataExtractionError, read_audio_tags
from soundshelf.library.store import LibraryStore
from soundshelf.library.uploads import UploadManager
from soundshelf.models import (
    CONFIDENCE_HIGH,
    CONFIDENCE_LOW,
    FileTrack,
    Playlist,
    RemoteTrack,
)


logger = logging.getLogger(__name__)

AnyTrack = Union[FileTrack, RemoteTrack]


def _new_id() -> str:
    return str(uuid.uuid4())


def _clean(value: Optional[object]) -> str:
    if value is None:
        return ""
    return str(value).strip()


def build_file_track(stored_name: str, original_name: str, tags: Optional[AudioTags]) -> FileTrack:
    """Merge embedded tags with filename hints; tag values win when present."""
    hints = parse_filename(original_name)
    tags = tags or AudioTags()
    from_hints = not (tags.title and tags.artist)
    return FileTrack(
        id=_new_id(),
        path=stored_name,
        title=tags.title or hints.title or original_name,
        artist=tags.artist or hints.artist,
        album=tags.album,
        genre=tags.genre or hints.genre,
        duration=tags.duration,
        confidence=CONFIDENCE_LOW if from_hints else CONFIDENCE_HIGH,
    )


class LibraryService:
    def __init__(self, store: LibraryStore, uploads: UploadManager):
        self.store = store
        self.uploads = uploads

    # -- tracks ---------------------------------------------------------

    def list_tracks(self) -> List[AnyTrack]:
        return list(self.store.load().tracks)

    def get_track(self, track_id: str) -> Optional[AnyTrack]:
        return self.store.load().find_track(track_id)

    def upload_files(self, uploads: Iterable) -> List[FileTrack]:
        """Store each uploaded file and create a track for it.

        Files are handled independently; a file whose tags cannot be read still
        becomes a track described by its filename.
        """
        library = self.store.load()
        created: List[FileTrack] = []
        for upload in uploads:
            original_name = upload.filename or "upload"
            stored_name = self.uploads.save(upload)
            tags: Optional[AudioTags] = None
            try:
                tags = read_audio_tags(self.uploads.path_for(stored_name))
            except MetadataExtractionError as exc:
                logger.debug("Tag extraction failed for %s, using filename hints: %s", stored_name, exc)
            track = build_file_track(stored_name, original_name, tags)
            library.tracks.append(track)
            created.append(track)
        self.store.save(library)
        logger.info("Added %d uploaded track(s)", len(created))
        return created

    def register_url(
        self,
        url: Optional[str],
        title: Optional[str] = None,
        artist: Optional[str] = None,
        album: Optional[str] = None,
        genre: Optional[str] = None,
    ) -> RemoteTrack:
        url = _clean(url)
        if not url:
            raise ValueError("url required")
        name = url_basename(url)
        hints: FilenameHints = parse_filename(name)
        title, artist, album, genre = _clean(title), _clean(artist), _clean(album), _clean(genre)
        track = RemoteTrack(
            id=_new_id(),
            src=url,
            title=title or hints.title or name,
            artist=artist or hints.artist,
            album=album,
            genre=genre or hints.genre,
            duration=0,
            confidence=CONFIDENCE_HIGH if (title and artist) else CONFIDENCE_LOW,
        )
        library = self.store.load()
        library.tracks.append(track)
        self.store.save(library)
        logger.info("Registered remote track %s -> %s", track.id, url)
        return track

    def delete_track(self, track_id: str) -> Optional[AnyTrack]:
        """Remove a track, unlink it from all playlists and drop its file.

        A file that cannot be removed does not stop the record from being deleted.
        """
        library = self.store.load()
        track = library.pop_track(track_id)
        if track is None:
            return None
        if isinstance(track, FileTrack) and track.path:
            self.uploads.remove(track.path)
        self.store.save(library)
        logger.info("Deleted track %s", track_id)
        return track

    def prune_missing_files(self) -> List[AnyTrack]:
        """Delete file tracks whose file is gone, cascading into playlists."""
        library = self.store.load()
        missing = []
        for track in list(library.tracks):
            if not isinstance(track, FileTrack):
                continue
            full = self.uploads.path_for(track.path)
            if full is None or not os.path.isfile(full):
                library.pop_track(track.id)
                missing.append(track)
        if missing:
            self.store.save(library)
            logger.info("Pruned %d track(s) with missing files", len(missing))
        return missing

    # -- playlists ------------------------------------------------------

    def list_playlists(self) -> Dict[str, Playlist]:
        return dict(self.store.load().playlists)

    def create_playlist(self, name: Optional[str]) -> Playlist:
        name = _clean(name)
        if not name:
            raise ValueError("name required")
        library = self.store.load()
        playlist = Playlist(id=_new_id(), name=name)
        library.playlists[playlist.id] = playlist
        self.store.save(library)
        return playlist

    def rename_playlist(self, playlist_id: str, name: Optional[str]) -> Optional[Playlist]:
        """Rename a playlist; a blank name leaves it unchanged."""
        library = self.store.load()
        playlist = library.playlists.get(playlist_id)
        if playlist is None:
            return None
        name = _clean(name)
        if name:
            playlist.name = name
        self.store.save(library)
        return playlist

    def delete_playlist(self, playlist_id: str) -> bool:
        library = self.store.load()
        if library.playlists.pop(playlist_id, None) is None:
            return False
        self.store.save(library)
        return True

    def add_track_to_playlist(self, playlist_id: str, track_id: Optional[str]) -> Optional[Playlist]:
        library = self.store.load()
        playlist = library.playlists.get(playlist_id)
        if playlist is None:
            return None
        track_id = _clean(track_id)
        if not track_id or library.find_track(track_id) is None:
            raise ValueError("track not found")
        playlist.add(track_id)
        self.store.save(library)
        return playlist

    def remove_track_from_playlist(self, playlist_id: str, track_id: str) -> Optional[Playlist]:
        library = self.store.load()
        playlist = library.playlists.get(playlist_id)
        if playlist is None:
            return None
        playlist.discard(track_id)
        self.store.save(library)
        return playlist


__all__ = ["LibraryService", "build_file_track"]
