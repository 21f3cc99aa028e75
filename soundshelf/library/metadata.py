"""Embedded tag extraction for uploaded audio."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mutagen import File as MutagenFile

logger = logging.getLogger(__name__)


class MetadataExtractionError(Exception):
    """Raised when a file cannot be opened or identified as audio."""


@dataclass(frozen=True)
class AudioTags:
    title: str = ""
    artist: str = ""
    album: str = ""
    genre: str = ""
    duration: float = 0.0


# WAV/AIFF carry raw ID3 frames even when opened with easy=True
_ID3_FRAMES = {"title": "TIT2", "artist": "TPE1", "album": "TALB", "genre": "TCON"}


def _first(tags, key: str) -> str:
    try:
        values = tags.get(key) or tags.get(_ID3_FRAMES[key]) or []
    except Exception:
        return ""
    values = getattr(values, "text", values)
    if isinstance(values, (list, tuple)):
        values = values[0] if values else ""
    return str(values).strip()


def read_audio_tags(path: str) -> AudioTags:
    """Read title/artist/album/genre and duration via mutagen's easy tag interface.

    Multi-valued fields keep only their first value.
    """
    try:
        audio = MutagenFile(path, easy=True)
    except Exception as exc:
        raise MetadataExtractionError(f"Failed to read audio file {path}: {exc}") from exc
    if audio is None:
        raise MetadataExtractionError(f"Unrecognized audio format: {path}")

    tags = audio.tags or {}
    length = getattr(getattr(audio, "info", None), "length", None)
    try:
        duration = float(length) if length else 0.0
    except (TypeError, ValueError):
        duration = 0.0

    return AudioTags(
        title=_first(tags, "title"),
        artist=_first(tags, "artist"),
        album=_first(tags, "album"),
        genre=_first(tags, "genre"),
        duration=duration,
    )


__all__ = ["AudioTags", "MetadataExtractionError", "read_audio_tags"]
