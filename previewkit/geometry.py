"""
Tile geometry for PreviewKit.

Resolves the fixed tile size used for every frame placed on a sprite sheet.
"""

from numbers import Integral

from .exceptions import ConfigurationError
from .models import TileSize


def _check_positive(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
    return int(value)


def resolve_tile_size(width: int, height: int, max_size: int) -> TileSize:
    """
    Compute the tile size for a source frame, preserving its aspect ratio.

    The longer side is scaled down to exactly max_size and the shorter side is
    rounded half-up to the nearest pixel, never below 1. Frames already within
    the bound are passed through unscaled.

    Args:
        width: Natural width of the source frame
        height: Natural height of the source frame
        max_size: Upper bound for the longer tile side

    Returns:
        TileSize for every tile of the run

    Raises:
        ConfigurationError: If any argument is not a positive integer

    Example:
        >>> resolve_tile_size(1920, 1080, 160)
        TileSize(width=160, height=90)
    """
    width = _check_positive("width", width)
    height = _check_positive("height", height)
    max_size = _check_positive("max_size", max_size)

    longer = max(width, height)
    if longer <= max_size:
        return TileSize(width, height)

    def scale(side: int) -> int:
        return max(1, (2 * side * max_size + longer) // (2 * longer))

    if width >= height:
        return TileSize(max_size, scale(height))
    return TileSize(scale(width), max_size)
