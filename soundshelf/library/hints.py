"""Guess artist/title/genre from a filename shaped like ``Artist - Title [Genre].ext``.

This is the fallback when embedded tags are missing. The split happens at the
first hyphen, so an artist that contains one ("Jay-Z - Song") comes out wrong.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import unquote, urlparse

_EXTENSION_RE = re.compile(r"\.[^/.]+\Z")
_PATTERN_RE = re.compile(r"^(.*?)-(.*?)(?:\s*\[(.*?)\])?\Z", re.DOTALL)

DEFAULT_STREAM_NAME = "Stream"


@dataclass(frozen=True)
class FilenameHints:
    title: str
    artist: str = ""
    genre: str = ""


def strip_extension(name: str) -> str:
    return _EXTENSION_RE.sub("", name)


def parse_filename(name: str) -> FilenameHints:
    stem = strip_extension(name)
    match = _PATTERN_RE.match(stem)
    if match:
        return FilenameHints(
            artist=match.group(1).strip(),
            title=match.group(2).strip(),
            genre=(match.group(3) or "").strip(),
        )
    return FilenameHints(title=stem)


def url_basename(url: str) -> str:
    """Final path segment of a URL, without query or fragment."""
    path = urlparse(url).path
    segment = unquote(path.rsplit("/", 1)[-1]) if path else ""
    return segment or DEFAULT_STREAM_NAME


__all__ = ["FilenameHints", "parse_filename", "strip_extension", "url_basename", "DEFAULT_STREAM_NAME"]
