"""
PreviewKit - Scrubber Preview Sprite Sheets for Video

Samples decoded video frames at a fixed interval, packs them into
fixed-grid sprite sheets and writes a WebVTT cue index that maps time
ranges to tile rectangles, ready for seek-bar thumbnail previews.

Features:
- Interval-based frame sampling with exact millisecond media time
- Aspect-preserving tile sizing and row-major grid packing
- Automatic spill-over to additional sheets
- WebVTT index with #xywh media fragment references
- Inputs from local files, direct URLs and YouTube

Example usage:
    >>> from previewkit import extract_previews, MediaTime
    >>>
    >>> result = extract_previews(
    ...     input_path="movie.mp4",
    ...     output_dir="previews",
    ...     frame_interval=MediaTime.from_seconds(5),
    ... )
    >>> print(result.index_path)
    previews/spritesheet.vtt
"""

import logging

__version__ = "0.1.0"
__author__ = "PreviewKit Contributors"
__license__ = "MIT"

# Add NullHandler to prevent "No handler found" warnings
# Users should configure logging in their application if they want to see logs
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Core values and geometry
from .media_time import MediaTime
from .geometry import resolve_tile_size

# Sampling and packing
from .sprite_sheet import SpriteSheet, IMAGE_FORMATS
from .manager import SpriteSheetManager, ManagerState

# Cue index
from .webvtt import format_timestamp, format_cue_reference, format_vtt_from_cues, write_vtt_file

# Data models
from .models import TileSize, Slot, Rect, Cue, OpenCue, ExtractConfig, ExtractResult

# Errors
from .exceptions import (
    PreviewKitError,
    ConfigurationError,
    InvalidTimeBase,
    SequencingError,
    AlreadyInitialized,
    InvalidState,
    DurationBeforeLastSample,
    NonMonotonicTimestamp,
    SizeMismatch,
    SheetFull,
    PersistenceError,
    DecodeError,
    DownloadError,
)

# Decoding and input resolution
from .decoder import VideoDecoder, DecodedFrame, parse_scaler
from .downloader import VideoDownloader, is_http_url, download_video_file
from .youtube import YouTubeClient, is_youtube_url, extract_youtube_id

# Pipeline
from .extract import extract_previews, extract_from_config

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",

    # Core
    "MediaTime",
    "resolve_tile_size",
    "SpriteSheet",
    "IMAGE_FORMATS",
    "SpriteSheetManager",
    "ManagerState",

    # Cue index
    "format_timestamp",
    "format_cue_reference",
    "format_vtt_from_cues",
    "write_vtt_file",

    # Models
    "TileSize",
    "Slot",
    "Rect",
    "Cue",
    "OpenCue",
    "ExtractConfig",
    "ExtractResult",

    # Errors
    "PreviewKitError",
    "ConfigurationError",
    "InvalidTimeBase",
    "SequencingError",
    "AlreadyInitialized",
    "InvalidState",
    "DurationBeforeLastSample",
    "NonMonotonicTimestamp",
    "SizeMismatch",
    "SheetFull",
    "PersistenceError",
    "DecodeError",
    "DownloadError",

    # Decoding and input
    "VideoDecoder",
    "DecodedFrame",
    "parse_scaler",
    "VideoDownloader",
    "is_http_url",
    "download_video_file",
    "YouTubeClient",
    "is_youtube_url",
    "extract_youtube_id",

    # Pipeline
    "extract_previews",
    "extract_from_config",
]
