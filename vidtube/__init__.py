"""VidTube: video-sharing backend."""

__version__ = "0.1.0"
