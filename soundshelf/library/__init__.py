"""Library persistence, metadata and track/playlist operations."""

from .hints import FilenameHints, parse_filename
from .metadata import AudioTags, MetadataExtractionError, read_audio_tags
from .service import LibraryService
from .store import LibraryStore
from .uploads import UploadManager

__all__ = [
    "AudioTags",
    "FilenameHints",
    "LibraryService",
    "LibraryStore",
    "MetadataExtractionError",
    "UploadManager",
    "parse_filename",
    "read_audio_tags",
]
