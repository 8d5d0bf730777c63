"""
OpenCV-backed video decoding for PreviewKit.

Wraps cv2.VideoCapture as the frame source feeding the sprite sheet
manager. Frames are grabbed for every packet but only retrieved, resized
and converted to RGB when the caller asks for them, so frames discarded
by the sampling interval never pay for pixel conversion.
"""

import logging
from fractions import Fraction
from typing import Iterator, Optional

import cv2
from PIL import Image

from .exceptions import DecodeError
from .media_time import MediaTime
from .models import TileSize

logger = logging.getLogger(__name__)

# cv2 reports positions in float milliseconds; keep microsecond ticks
POSITION_TIME_BASE = Fraction(1, 1000000)

SCALERS = {
    "point": cv2.INTER_NEAREST,
    "fast_bilinear": cv2.INTER_LINEAR,
    "bilinear": cv2.INTER_LINEAR_EXACT,
    "bicubic": cv2.INTER_CUBIC,
    "area": cv2.INTER_AREA,
    "lanczos": cv2.INTER_LANCZOS4,
}


def parse_scaler(name: str) -> int:
    """
    Map a scaler name to an OpenCV interpolation flag.

    Raises:
        ValueError: If the scaler is unknown

    Example:
        >>> parse_scaler("area") == cv2.INTER_AREA
        True
    """
    try:
        return SCALERS[name]
    except KeyError:
        raise ValueError(f"Invalid scaler: {name}")


class DecodedFrame:
    """A grabbed frame whose pixels are fetched on demand."""

    def __init__(self, decoder: "VideoDecoder", index: int, timestamp: MediaTime):
        self._decoder = decoder
        self.index = index
        self.timestamp = timestamp

    @property
    def source_size(self) -> TileSize:
        return TileSize(self._decoder.width, self._decoder.height)

    def scaled(self, tile_size: TileSize) -> Image.Image:
        """
        Retrieve the frame, resize it to tile_size and convert BGR to RGB.

        Raises:
            DecodeError: If the decoder has moved past this frame or it cannot be retrieved
        """
        current = self._decoder.current_frame
        if current is not self:
            position = f"frame {current.index}" if current is not None else "end of stream"
            raise DecodeError(f"Frame {self.index} is no longer current (decoder is at {position})")
        ok, frame = self._decoder.capture.retrieve()
        if not ok or frame is None:
            raise DecodeError(f"Failed to retrieve frame {self.index} at {self.timestamp}")

        height, width = frame.shape[:2]
        if (width, height) != tuple(tile_size):
            frame = cv2.resize(frame, tuple(tile_size), interpolation=self._decoder.interpolation)
        frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        return Image.fromarray(frame)


class VideoDecoder:
    """
    Sequential frame source over a video file.

    Example:
        >>> with VideoDecoder("input.mp4") as decoder:
        ...     for frame in decoder.frames():
        ...         image = frame.scaled(TileSize(160, 90))
    """

    def __init__(self, path: str, scaler: str = "bilinear"):
        self.path = str(path)
        self.interpolation = parse_scaler(scaler)
        self.capture = None
        self._last_timestamp: Optional[MediaTime] = None
        self.current_frame: Optional[DecodedFrame] = None  # only this frame can be retrieved

    def open(self) -> "VideoDecoder":
        capture = cv2.VideoCapture(self.path)
        if not capture.isOpened():
            capture.release()
            raise DecodeError(f"Cannot open video: {self.path}")
        self.capture = capture
        logger.info(
            f"Opened {self.path}: {self.width}x{self.height}, "
            f"{self.fps:.3f} fps, {self.frame_count} frames"
        )
        return self

    def close(self) -> None:
        if self.capture is not None:
            self.capture.release()
            self.capture = None
            self.current_frame = None

    def __enter__(self) -> "VideoDecoder":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _get(self, prop: int) -> float:
        if self.capture is None:
            raise DecodeError(f"Video not opened: {self.path}")
        return self.capture.get(prop)

    @property
    def width(self) -> int:
        return int(self._get(cv2.CAP_PROP_FRAME_WIDTH))

    @property
    def height(self) -> int:
        return int(self._get(cv2.CAP_PROP_FRAME_HEIGHT))

    @property
    def fps(self) -> float:
        return float(self._get(cv2.CAP_PROP_FPS) or 0.0)

    @property
    def frame_count(self) -> int:
        return max(0, int(self._get(cv2.CAP_PROP_FRAME_COUNT) or 0))

    def _frame_timestamp(self, index: int) -> MediaTime:
        position_ms = self._get(cv2.CAP_PROP_POS_MSEC)
        if position_ms > 0 or index == 0:
            return MediaTime.from_rational(round(position_ms * 1000), POSITION_TIME_BASE)
        # Some backends report no position; derive it from the frame rate
        if self.fps > 0:
            return MediaTime.from_seconds(index / self.fps)
        return MediaTime(0)

    def frames(self) -> Iterator[DecodedFrame]:
        """
        Yield grabbed frames in presentation order.

        Raises:
            DecodeError: If the video was not opened
        """
        if self.capture is None:
            raise DecodeError(f"Video not opened: {self.path}")

        index = 0
        while self.capture.grab():
            timestamp = self._frame_timestamp(index)
            self._last_timestamp = timestamp
            self.current_frame = DecodedFrame(self, index, timestamp)
            yield self.current_frame
            index += 1
        self.current_frame = None

        logger.debug(f"Reached end of stream after {index} frames")

    def duration(self) -> MediaTime:
        """
        Stream duration, from the container when known, else from the last frame.

        Returns:
            frame_count / fps, or the last decoded timestamp plus one frame period
        """
        fps = self.fps
        if fps > 0 and self.frame_count > 0:
            return MediaTime.from_seconds(self.frame_count / fps)

        last = self._last_timestamp or MediaTime(0)
        if fps > 0:
            return last + MediaTime.from_seconds(1 / fps)
        return last
