"""Library data models."""

from .library import (
    CONFIDENCE_HIGH,
    CONFIDENCE_LOW,
    FileTrack,
    Library,
    Playlist,
    RemoteTrack,
    Track,
    TrackBase,
)

__all__ = [
    "CONFIDENCE_HIGH",
    "CONFIDENCE_LOW",
    "FileTrack",
    "Library",
    "Playlist",
    "RemoteTrack",
    "Track",
    "TrackBase",
]
