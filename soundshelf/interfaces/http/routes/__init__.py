"""Route blueprints exposed via Flask."""

from .music import music_bp
from .playlists import playlist_bp
from .health import health_bp

__all__ = [
    "music_bp",
    "playlist_bp",
    "health_bp",
]
