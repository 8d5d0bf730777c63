"""
Sprite sheet canvas for PreviewKit.

A sprite sheet is a fixed grid of equally sized tiles on a single RGB
canvas. Frames are placed left to right, top to bottom, and a sheet is
never revisited once its grid is full.
"""

import logging
from typing import Union

from PIL import Image

from .exceptions import ConfigurationError, SheetFull, SizeMismatch
from .models import Rect, Slot, TileSize

logger = logging.getLogger(__name__)

# File extension -> Pillow encoder name
IMAGE_FORMATS = {
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "png": "PNG",
    "webp": "WEBP",
    "bmp": "BMP",
}

ImageLike = Union[Image.Image, bytes, bytearray, memoryview]


def pillow_format(image_format: str) -> str:
    """
    Map an image format selector to the Pillow encoder name.

    Raises:
        ConfigurationError: If the format is not supported
    """
    try:
        return IMAGE_FORMATS[image_format.lower().lstrip(".")]
    except (KeyError, AttributeError):
        supported = ", ".join(sorted(IMAGE_FORMATS))
        raise ConfigurationError(f"Unsupported image format: {image_format!r} (expected one of {supported})")


def as_rgb_image(image: ImageLike, tile_size: TileSize) -> Image.Image:
    """
    Coerce a decoded frame to an RGB Pillow image of exactly tile_size.

    Raw buffers are read as RGB24: 3 bytes per pixel, row-major, no padding.

    Raises:
        SizeMismatch: If the frame does not match tile_size
    """
    if isinstance(image, Image.Image):
        if image.size != tuple(tile_size):
            raise SizeMismatch(f"Image size {image.size[0]}x{image.size[1]} does not match tile size "
                               f"{tile_size.width}x{tile_size.height}")
        return image if image.mode == "RGB" else image.convert("RGB")

    data = bytes(image)
    expected = tile_size.width * tile_size.height * 3
    if len(data) != expected:
        raise SizeMismatch(f"Raw frame has {len(data)} bytes, expected {expected} for tile size "
                           f"{tile_size.width}x{tile_size.height}")
    return Image.frombytes("RGB", tuple(tile_size), data)


class SpriteSheet:
    """
    One fixed-grid canvas of num_horizontal x num_vertical tiles.

    Example:
        >>> sheet = SpriteSheet(TileSize(160, 90), 5, 5, index=0)
        >>> sheet.canvas.size
        (800, 450)
    """

    def __init__(self, tile_size: TileSize, num_horizontal: int, num_vertical: int, index: int = 0):
        if num_horizontal <= 0 or num_vertical <= 0:
            raise ConfigurationError(f"Grid must be at least 1x1, got {num_horizontal}x{num_vertical}")

        self.tile_size = TileSize(*tile_size)
        self.num_horizontal = num_horizontal
        self.num_vertical = num_vertical
        self.index = index
        self.next_slot = Slot(0, 0)
        self.canvas = Image.new(
            "RGB",
            (self.tile_size.width * num_horizontal, self.tile_size.height * num_vertical),
        )

    @property
    def capacity(self) -> int:
        return self.num_horizontal * self.num_vertical

    @property
    def tile_count(self) -> int:
        """Number of tiles placed so far."""
        return self.next_slot.row * self.num_horizontal + self.next_slot.col

    def is_full(self) -> bool:
        return self.next_slot.row == self.num_vertical

    def rect_for_slot(self, slot: Slot) -> Rect:
        """Absolute pixel rectangle of a grid slot."""
        return Rect(
            x=slot.col * self.tile_size.width,
            y=slot.row * self.tile_size.height,
            width=self.tile_size.width,
            height=self.tile_size.height,
        )

    def place(self, image: ImageLike) -> Slot:
        """
        Write a frame into the next free slot and advance the cursor.

        Args:
            image: Pillow image or raw RGB24 buffer matching tile_size

        Returns:
            The slot the frame was written to

        Raises:
            SheetFull: If every slot is already taken
            SizeMismatch: If the frame does not match tile_size
        """
        if self.is_full():
            raise SheetFull(f"Sprite sheet {self.index} is full ({self.capacity} tiles)")

        tile = as_rgb_image(image, self.tile_size)
        slot = self.next_slot
        rect = self.rect_for_slot(slot)
        self.canvas.paste(tile, (rect.x, rect.y))

        col = slot.col + 1
        if col == self.num_horizontal:
            self.next_slot = Slot(slot.row + 1, 0)
        else:
            self.next_slot = Slot(slot.row, col)
        return slot

    def file_name(self, prefix: str, extension: str) -> str:
        """Sortable file name for this sheet, e.g. spritesheet_0003.jpg."""
        return f"{prefix}_{self.index:04d}.{extension.lstrip('.')}"

    def save(self, path: str, image_format: str) -> None:
        """Encode the canvas to path with Pillow."""
        self.canvas.save(path, format=pillow_format(image_format))
        logger.debug(f"Saved sprite sheet {self.index} ({self.tile_count} tiles) to {path}")
