"""
YouTube module for PreviewKit.

Provides YouTube URL detection and video download.
"""

from .client import (
    YouTubeClient,
    is_youtube_url,
    extract_youtube_id,
)

__all__ = [
    'YouTubeClient',
    'is_youtube_url',
    'extract_youtube_id',
]
