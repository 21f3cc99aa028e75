#!/usr/bin/env python
"""
Pydantic models for the persisted library document.

A track is either an uploaded file living in the upload directory or a
remote URL the player fetches directly. Both share the descriptive fields and
are told apart by ``type``. The wire keys (``type``, ``path``, ``src``,
``trackIds``) match the JSON document and the browser player.
"""

from __future__ import annotations

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Where a track's descriptive metadata came from. Filename hints are a guess.
CONFIDENCE_HIGH = "high"
CONFIDENCE_LOW = "low"


class TrackBase(BaseModel):
    """Fields shared by every playable item."""

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str = ""
    artist: str = ""
    album: str = ""
    genre: str = ""
    duration: float = Field(default=0.0, ge=0)
    confidence: Literal["high", "low"] = CONFIDENCE_HIGH

    @field_validator("title", "artist", "album", "genre", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("duration", mode="before")
    @classmethod
    def _coerce_duration(cls, value: object) -> float:
        try:
            duration = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 0.0
        return duration if duration > 0 else 0.0

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class FileTrack(TrackBase):
    """Uploaded audio stored under the upload directory."""

    type: Literal["file"] = "file"
    path: str


class RemoteTrack(TrackBase):
    """Audio referenced by URL; never fetched or inspected by the server."""

    type: Literal["url"] = "url"
    src: str


Track = Annotated[Union[FileTrack, RemoteTrack], Field(discriminator="type")]


class Playlist(BaseModel):
    """Named, ordered, duplicate-free list of track ids."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: str
    track_ids: List[str] = Field(default_factory=list, alias="trackIds")

    def add(self, track_id: str) -> bool:
        if track_id in self.track_ids:
            return False
        self.track_ids.append(track_id)
        return True

    def discard(self, track_id: str) -> bool:
        if track_id not in self.track_ids:
            return False
        self.track_ids = [tid for tid in self.track_ids if tid != track_id]
        return True

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class Library(BaseModel):
    """The whole persisted document: tracks in insertion order plus playlists by id."""

    model_config = ConfigDict(extra="ignore")

    tracks: List[Track] = Field(default_factory=list)
    playlists: Dict[str, Playlist] = Field(default_factory=dict)

    def find_track(self, track_id: str) -> Optional[Union[FileTrack, RemoteTrack]]:
        return next((track for track in self.tracks if track.id == track_id), None)

    def pop_track(self, track_id: str) -> Optional[Union[FileTrack, RemoteTrack]]:
        """Remove a track and unlink it from every playlist that references it."""
        track = self.find_track(track_id)
        if track is None:
            return None
        self.tracks = [t for t in self.tracks if t.id != track_id]
        for playlist in self.playlists.values():
            playlist.discard(track_id)
        return track

    def to_dict(self) -> dict:
        return {
            "tracks": [track.to_dict() for track in self.tracks],
            "playlists": {pid: playlist.to_dict() for pid, playlist in self.playlists.items()},
        }


__all__ = [
    "CONFIDENCE_HIGH",
    "CONFIDENCE_LOW",
    "TrackBase",
    "FileTrack",
    "RemoteTrack",
    "Track",
    "Playlist",
    "Library",
]
