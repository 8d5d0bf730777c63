"""Preview extraction pipeline: decode, sample, pack and save."""

import logging
import os
import tempfile
from typing import Callable, Optional

from .decoder import VideoDecoder
from .downloader import VideoDownloader
from .exceptions import DecodeError
from .manager import ManagerState, SpriteSheetManager
from .media_time import MediaTime
from .models import ExtractConfig, ExtractResult

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[MediaTime, Optional[MediaTime]], None]


def extract_previews(
    input_path: str,
    output_dir: str,
    max_size: int = 160,
    num_horizontal: int = 5,
    num_vertical: int = 5,
    frame_interval: MediaTime = MediaTime.from_seconds(2),
    image_format: str = "jpg",
    scaler: str = "bilinear",
    name_prefix: str = "spritesheet",
    progress_callback: Optional[ProgressCallback] = None,
) -> ExtractResult:
    """
    Extract preview sprite sheets and a WebVTT cue index from a local video.

    Args:
        input_path: Path to a video file readable by OpenCV.
        output_dir: Directory for the sheets and the cue index.
        max_size: Longest tile side in pixels.
        num_horizontal: Tiles per sheet row.
        num_vertical: Tile rows per sheet.
        frame_interval: Minimum spacing between kept frames.
        image_format: Sheet image format (jpg, png, webp, bmp).
        scaler: Resize interpolation (point, fast_bilinear, bilinear, bicubic, area, lanczos).
        name_prefix: Base name of the output files.
        progress_callback: Called with (timestamp, expected duration) after each kept frame.

    Returns:
        ExtractResult with the written paths.
    """
    manager = SpriteSheetManager(
        max_size=max_size,
        num_horizontal=num_horizontal,
        num_vertical=num_vertical,
        frame_interval=frame_interval,
        image_format=image_format,
        name_prefix=name_prefix,
    )

    with VideoDecoder(input_path, scaler=scaler) as decoder:
        expected = decoder.duration() if decoder.frame_count > 0 else None

        for frame in decoder.frames():
            if not manager.fulfils_frame_interval(frame.timestamp):
                continue
            if manager.state is ManagerState.UNINITIALIZED:
                manager.initialize(*frame.source_size)

            manager.add_image(frame.timestamp, frame.scaled(manager.tile_size))
            if progress_callback is not None:
                progress_callback(frame.timestamp, expected)

        if manager.state is ManagerState.UNINITIALIZED:
            raise DecodeError(f"No frames decoded from {input_path}")

        manager.end_frame(decoder.duration())

    return manager.save(output_dir)


def extract_from_config(
    config: ExtractConfig,
    progress_callback: Optional[ProgressCallback] = None,
) -> ExtractResult:
    """Resolve the configured input and extract previews from it."""
    downloader = VideoDownloader(youtube_cookies_path=config.cookies_path)

    with tempfile.TemporaryDirectory(prefix="previewkit-") as tmp_dir:
        work_dir = config.work_dir or tmp_dir
        input_path = downloader.resolve(config.input, work_dir)
        logger.info(f"Extracting previews from {input_path} into {config.output_dir}")

        result = extract_previews(
            input_path=input_path,
            output_dir=config.output_dir,
            max_size=config.max_size,
            num_horizontal=config.num_horizontal,
            num_vertical=config.num_vertical,
            frame_interval=MediaTime.from_seconds(config.frame_interval_seconds),
            image_format=config.image_format,
            scaler=config.scaler,
            name_prefix=config.name_prefix,
            progress_callback=progress_callback,
        )

    logger.info(
        f"Wrote {len(result.sheet_paths)} sheets and {result.cues_count} cues to "
        f"{os.path.abspath(config.output_dir)}"
    )
    return result
