"""Command-line entry point for preview sprite sheet extraction."""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .decoder import SCALERS
from .exceptions import PreviewKitError
from .extract import extract_from_config
from .media_time import MediaTime
from .models import ExtractConfig
from .sprite_sheet import IMAGE_FORMATS

logger = logging.getLogger("previewkit")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="previewkit",
        description="Extract scrubber-preview sprite sheets and a WebVTT cue index from a video.",
    )
    parser.add_argument("input", help="Video file, direct video URL or YouTube URL")
    parser.add_argument("output", help="Output directory for sheets and the cue index")
    parser.add_argument(
        "--frame-interval",
        type=float,
        default=2,
        help="Minimum seconds between sampled frames (default: 2)",
    )
    parser.add_argument("--num-horizontal", type=int, default=5, help="Tiles per sheet row (default: 5)")
    parser.add_argument("--num-vertical", type=int, default=5, help="Tile rows per sheet (default: 5)")
    parser.add_argument("--max-size", type=int, default=160, help="Longest tile side in pixels (default: 160)")
    parser.add_argument(
        "--format",
        dest="image_format",
        default="jpg",
        choices=sorted(IMAGE_FORMATS),
        help="Sheet image format (default: jpg)",
    )
    parser.add_argument(
        "--scaler",
        default="bilinear",
        choices=sorted(SCALERS),
        help="Resize interpolation (default: bilinear)",
    )
    parser.add_argument("--prefix", default="spritesheet", help="Base name of output files (default: spritesheet)")
    parser.add_argument("--cookies", help="Cookies file for YouTube downloads")
    parser.add_argument("--work-dir", help="Keep downloaded inputs in this directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> ExtractConfig:
    return ExtractConfig(
        input=args.input,
        output_dir=args.output,
        max_size=args.max_size,
        num_horizontal=args.num_horizontal,
        num_vertical=args.num_vertical,
        frame_interval_seconds=args.frame_interval,
        image_format=args.image_format,
        scaler=args.scaler,
        name_prefix=args.prefix,
        cookies_path=args.cookies,
        work_dir=args.work_dir,
    )


def _log_progress(timestamp: MediaTime, duration: Optional[MediaTime]) -> None:
    if duration is not None and duration.millis > 0:
        percent = 100.0 * timestamp.millis / duration.millis
        logger.info(f"Sampled frame at {timestamp} / {duration} ({percent:.1f}%)")
    else:
        logger.info(f"Sampled frame at {timestamp}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        result = extract_from_config(config_from_args(args), progress_callback=_log_progress)
    except (PreviewKitError, FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1

    print(result.index_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
