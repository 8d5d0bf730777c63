"""
Data models for PreviewKit.

Defines the core data structures used throughout the package.
"""

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

from .media_time import MediaTime


class TileSize(NamedTuple):
    """Pixel size shared by every tile of every sheet."""
    width: int
    height: int


class Slot(NamedTuple):
    """Grid position inside a sprite sheet."""
    row: int
    col: int


class Rect(NamedTuple):
    """Absolute pixel rectangle inside a sprite sheet."""
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class Cue:
    """A closed cue: the preview tile shown for [start, end)."""
    start: MediaTime
    end: MediaTime
    sheet_index: int
    rect: Rect

    @property
    def duration(self) -> MediaTime:
        return self.end - self.start


@dataclass(frozen=True)
class OpenCue:
    """The in-progress cue whose end is set by the next sample or by end_frame."""
    start: MediaTime
    sheet_index: int
    rect: Rect

    def close(self, end: MediaTime) -> Cue:
        return Cue(start=self.start, end=end, sheet_index=self.sheet_index, rect=self.rect)


@dataclass
class ExtractConfig:
    """Configuration for a preview extraction run."""
    input: str
    output_dir: str
    max_size: int = 160
    num_horizontal: int = 5
    num_vertical: int = 5
    frame_interval_seconds: float = 2
    image_format: str = "jpg"
    scaler: str = "bilinear"
    name_prefix: str = "spritesheet"
    cookies_path: Optional[str] = None  # yt-dlp cookies for YouTube inputs
    work_dir: Optional[str] = None      # where remote inputs are downloaded


@dataclass
class ExtractResult:
    """Files written by a finished extraction."""
    sheet_paths: List[str] = field(default_factory=list)
    index_path: Optional[str] = None
    cues_count: int = 0
    tile_size: Optional[TileSize] = None
