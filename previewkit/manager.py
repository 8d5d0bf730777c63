"""
Sprite sheet manager for PreviewKit.

Samples decoded frames at a fixed interval, packs the kept frames into a
sequence of fixed-grid sprite sheets and records where each one landed as
a gap-free list of time cues.

The manager moves through three states:

- UNINITIALIZED: nothing accepted yet, tile size unknown
- ACTIVE: at least one sheet allocated, exactly one open cue once a frame is added
- CLOSED: end_frame() was called, the cue list is final and can be saved
"""

import enum
import logging
import os
from typing import List, Optional

from .exceptions import (
    AlreadyInitialized,
    ConfigurationError,
    DurationBeforeLastSample,
    InvalidState,
    NonMonotonicTimestamp,
    PersistenceError,
)
from .geometry import resolve_tile_size
from .media_time import MediaTime
from .models import Cue, ExtractResult, OpenCue, TileSize
from .sprite_sheet import ImageLike, SpriteSheet, as_rgb_image, pillow_format
from .webvtt import format_vtt_from_cues, write_vtt_file

logger = logging.getLogger(__name__)


class ManagerState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    CLOSED = "closed"


class SpriteSheetManager:
    """
    Interval sampler and grid packer producing sprite sheets and a cue index.

    Example:
        >>> manager = SpriteSheetManager(max_size=100, num_horizontal=2, num_vertical=2,
        ...                              frame_interval=MediaTime.from_seconds(2))
        >>> for second in range(10):
        ...     t = MediaTime.from_seconds(second)
        ...     if manager.fulfils_frame_interval(t):
        ...         if manager.state is ManagerState.UNINITIALIZED:
        ...             tile = manager.initialize(1920, 1080)
        ...         cue = manager.add_image(t, bytes(3 * manager.tile_size.width * manager.tile_size.height))
        >>> manager.end_frame(MediaTime.from_seconds(10))
        >>> len(manager.sheets), len(manager.cues)
        (2, 5)
    """

    def __init__(
        self,
        max_size: int = 160,
        num_horizontal: int = 5,
        num_vertical: int = 5,
        frame_interval: MediaTime = MediaTime.from_seconds(2),
        image_format: str = "jpg",
        name_prefix: str = "spritesheet",
    ):
        """
        Initialize the manager.

        Args:
            max_size: Longest tile side in pixels
            num_horizontal: Tiles per sheet row
            num_vertical: Tile rows per sheet
            frame_interval: Minimum spacing between kept samples
            image_format: Sheet image format (jpg, png, webp, bmp)
            name_prefix: Base name of the sheet images and the cue index

        Raises:
            ConfigurationError: If any setting is invalid
        """
        for name, value in (("max_size", max_size),
                            ("num_horizontal", num_horizontal),
                            ("num_vertical", num_vertical)):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        if not isinstance(frame_interval, MediaTime) or frame_interval < MediaTime(0):
            raise ConfigurationError(f"frame_interval must be a non-negative MediaTime, got {frame_interval!r}")
        if not name_prefix or os.sep in name_prefix:
            raise ConfigurationError(f"Invalid name prefix: {name_prefix!r}")
        pillow_format(image_format)

        self.max_size = max_size
        self.num_horizontal = num_horizontal
        self.num_vertical = num_vertical
        self.frame_interval = frame_interval
        self.image_format = image_format
        self.name_prefix = name_prefix

        self._state = ManagerState.UNINITIALIZED
        self._tile_size: Optional[TileSize] = None
        self._sheets: List[SpriteSheet] = []
        self._cues: List[Cue] = []
        self._open_cue: Optional[OpenCue] = None
        self._last_accepted: Optional[MediaTime] = None

    @property
    def state(self) -> ManagerState:
        return self._state

    @property
    def tile_size(self) -> Optional[TileSize]:
        return self._tile_size

    @property
    def sheets(self) -> List[SpriteSheet]:
        return list(self._sheets)

    @property
    def cues(self) -> List[Cue]:
        """Closed cues in ascending start order."""
        return list(self._cues)

    @property
    def open_cue(self) -> Optional[OpenCue]:
        return self._open_cue

    @property
    def last_accepted(self) -> Optional[MediaTime]:
        return self._last_accepted

    def fulfils_frame_interval(self, timestamp: MediaTime) -> bool:
        """
        Check whether a frame at timestamp should be kept.

        The first frame is always kept; later frames must be at least
        frame_interval after the last kept one. Does not change state, so
        callers can check before paying for retrieval and scaling.
        """
        if self._last_accepted is None:
            return True
        return timestamp - self._last_accepted >= self.frame_interval

    def initialize(self, source_width: int, source_height: int) -> TileSize:
        """
        Fix the tile size from the first kept frame and allocate sheet 0.

        Raises:
            AlreadyInitialized: If called more than once
            ConfigurationError: If the source dimensions are not positive integers
        """
        if self._state is not ManagerState.UNINITIALIZED:
            raise AlreadyInitialized(f"Manager already initialized (state: {self._state.value})")

        self._tile_size = resolve_tile_size(source_width, source_height, self.max_size)
        self._sheets.append(self._new_sheet(0))
        self._state = ManagerState.ACTIVE

        logger.info(
            f"Resolved tile size {self._tile_size.width}x{self._tile_size.height} "
            f"from {source_width}x{source_height} source frames"
        )
        return self._tile_size

    def _new_sheet(self, index: int) -> SpriteSheet:
        logger.debug(f"Allocating sprite sheet {index}")
        return SpriteSheet(self._tile_size, self.num_horizontal, self.num_vertical, index=index)

    def _require(self, state: ManagerState, operation: str) -> None:
        if self._state is not state:
            raise InvalidState(f"{operation}() requires state {state.value}, manager is {self._state.value}")

    def add_image(self, timestamp: MediaTime, image: ImageLike) -> Optional[Cue]:
        """
        Place a kept frame and open its cue.

        Closes the previous cue at timestamp, spills over to a new sheet when
        the current one is full, and records timestamp as the last accepted
        sample. An equal timestamp yields a zero-length cue.

        Args:
            timestamp: Presentation time of the frame
            image: Frame already scaled to tile_size (Pillow image or raw RGB24)

        Returns:
            The cue closed by this call, or None for the first frame

        Raises:
            InvalidState: If the manager is not active
            SizeMismatch: If the frame does not match tile_size
            NonMonotonicTimestamp: If timestamp precedes the last accepted sample
        """
        self._require(ManagerState.ACTIVE, "add_image")
        if self._last_accepted is not None and timestamp < self._last_accepted:
            raise NonMonotonicTimestamp(
                f"Sample at {timestamp} precedes last accepted sample at {self._last_accepted}"
            )
        tile = as_rgb_image(image, self._tile_size)

        closed = None
        if self._open_cue is not None:
            closed = self._open_cue.close(timestamp)
            self._cues.append(closed)
            self._open_cue = None

        sheet = self._sheets[-1]
        if sheet.is_full():
            sheet = self._new_sheet(sheet.index + 1)
            self._sheets.append(sheet)

        slot = sheet.place(tile)
        self._open_cue = OpenCue(start=timestamp, sheet_index=sheet.index, rect=sheet.rect_for_slot(slot))
        self._last_accepted = timestamp

        logger.debug(f"Placed frame at {timestamp} on sheet {sheet.index} slot {tuple(slot)}")
        return closed

    def end_frame(self, total_duration: MediaTime) -> None:
        """
        Close the last cue at the end of the stream.

        Raises:
            InvalidState: If the manager is not active
            DurationBeforeLastSample: If total_duration precedes the last accepted
                sample; the manager stays active
        """
        self._require(ManagerState.ACTIVE, "end_frame")
        if self._last_accepted is not None and total_duration < self._last_accepted:
            raise DurationBeforeLastSample(
                f"Total duration {total_duration} ends before last sample at {self._last_accepted}"
            )

        if self._open_cue is not None:
            self._cues.append(self._open_cue.close(total_duration))
            self._open_cue = None
        self._state = ManagerState.CLOSED

        logger.info(
            f"Closed cue list: {len(self._cues)} cues on {len(self._sheets)} sheets, "
            f"duration {total_duration}"
        )

    def sheet_names(self, image_format: Optional[str] = None) -> List[str]:
        extension = (image_format or self.image_format).lstrip(".")
        return [sheet.file_name(self.name_prefix, extension) for sheet in self._sheets]

    def index_name(self) -> str:
        return f"{self.name_prefix}.vtt"

    def render_index(self, image_format: Optional[str] = None) -> str:
        """WebVTT content of the cue index."""
        self._require(ManagerState.CLOSED, "render_index")
        return format_vtt_from_cues(self._cues, self.sheet_names(image_format))

    def save(self, output_dir: str, image_format: Optional[str] = None) -> ExtractResult:
        """
        Write every sprite sheet and the cue index to output_dir.

        Safe to call again after a failure: existing files are overwritten
        and the index content is deterministic.

        Args:
            output_dir: Destination directory (created if missing)
            image_format: Overrides the configured sheet format

        Returns:
            ExtractResult with the written paths

        Raises:
            InvalidState: If end_frame() has not been called
            ConfigurationError: If image_format is not supported
            PersistenceError: If any file cannot be written
        """
        self._require(ManagerState.CLOSED, "save")
        image_format = image_format or self.image_format
        pillow_format(image_format)

        result = ExtractResult(cues_count=len(self._cues), tile_size=self._tile_size)
        try:
            os.makedirs(output_dir, exist_ok=True)

            for sheet, name in zip(self._sheets, self.sheet_names(image_format)):
                path = os.path.join(output_dir, name)
                sheet.save(path, image_format)
                result.sheet_paths.append(path)

            index_path = os.path.join(output_dir, self.index_name())
            write_vtt_file(index_path, self.render_index(image_format))
            result.index_path = index_path
        except (OSError, ValueError, KeyError) as e:  # KeyError: no Pillow encoder
            logger.error(f"Failed to save sprite sheets to {output_dir}: {str(e)}")
            raise PersistenceError(f"Saving previews to {output_dir} failed: {str(e)}") from e

        logger.info(f"Saved {len(result.sheet_paths)} sprite sheets and cue index to {output_dir}")
        return result
