import logging
from typing import NamedTuple

import numpy as np
from PIL import Image


logger = logging.getLogger(__name__)


BITS_PER_COLOR = 8
CHANNEL_MAX = (1 << BITS_PER_COLOR) - 1

# A packed node whose top byte is all ones is not a color,
#   it marks a node that has children.
HAS_CHILDREN = 0xFF000000


class ConfigError(ValueError):
    """
    Raised when an image cannot be turned into a quadtree grid
        (not square, or a side length that cannot be halved down to 1).
    """


class Pixel(NamedTuple):
    red: int
    green: int
    blue: int


def pack_color(pixel: Pixel) -> int:
    """
    Packs a pixel into 4 bytes: the first byte is unused and set to 0,
        the second, third and fourth store red, green and blue.
    """
    red, green, blue = pixel
    if not all(0 <= channel <= CHANNEL_MAX for channel in pixel):
        raise ValueError(f"{pixel} has a channel outside [0, {CHANNEL_MAX}]")

    return (red << (2 * BITS_PER_COLOR)) | (green << BITS_PER_COLOR) | blue


def unpack_color(value: int) -> Pixel:
    if value & HAS_CHILDREN:
        raise ValueError(f"0x{value:08X} is not a packed color")

    return Pixel(
        red=(value >> (2 * BITS_PER_COLOR)) & CHANNEL_MAX,
        green=(value >> BITS_PER_COLOR) & CHANNEL_MAX,
        blue=value & CHANNEL_MAX,
    )


class PixelGrid:
    # The pixels, indexed as [y, x, channel].
    #   Row 0 is the bottom row of the picture, so that
    #   (0, 0) is the bottom-left pixel.
    array: np.ndarray

    # The width (and height) of the grid.
    dimension: int

    def __init__(self, array: np.ndarray):
        array = np.asarray(array)

        # Casting to bytes would wrap out-of-range channels around silently.
        if array.dtype != np.uint8:
            if array.size > 0 and (array.min() < 0 or array.max() > CHANNEL_MAX):
                raise ConfigError(f"Pixel channels must be within [0, {CHANNEL_MAX}].")
            array = array.astype(np.uint8)

        if array.ndim != 3 or array.shape[2] != 3:
            raise ConfigError(f"Expected an RGB pixel array, got shape {array.shape}.")

        height, width = array.shape[:2]
        if width != height:
            raise ConfigError("The image width and height must be identical.")

        dimension = width
        if dimension == 0 or dimension % 4 != 0:
            raise ConfigError("The image width and height must be divisible by 4.")

        # 12 is divisible by 4 but halves into 6, 3 and then 1.5,
        #   so only powers of two reach a side of 1 cleanly.
        if dimension & (dimension - 1) != 0:
            raise ConfigError(
                f"The image width and height must be a power of two, got {dimension}.")

        # Copy so the caller cannot mutate the grid behind our back.
        self.array = array.copy()
        self.array.flags.writeable = False
        self.dimension = dimension

    @staticmethod
    def from_image(image: Image.Image) -> "PixelGrid":
        """
        Builds a grid from a Pillow image.
        Pillow gives rows top to bottom, while the grid stores them
            bottom to top, so the rows are flipped here and nowhere else.
        """
        rgb = np.asarray(image.convert("RGB"), dtype=np.uint8)
        return PixelGrid(rgb[::-1])

    def __repr__(self) -> str:
        return f"PixelGrid(dimension={self.dimension})"

    def contains(self, x: int, y: int, side: int = 1) -> bool:
        return (side >= 1 and x >= 0 and y >= 0
                and x + side <= self.dimension
                and y + side <= self.dimension)

    def pixel(self, x: int, y: int) -> Pixel:
        assert self.contains(x, y), f"({x}, {y}) is outside the grid"

        red, green, blue = self.array[y, x]
        return Pixel(int(red), int(green), int(blue))

    def region(self, x: int, y: int, side: int) -> np.ndarray:
        """
        Returns a view of the square whose bottom-left corner is (x, y).
        """
        assert self.contains(x, y, side), \
            f"square ({x}, {y}, {side}) is outside the grid"

        return self.array[y:y + side, x:x + side]


def load_grid(path) -> PixelGrid:
    """
    Reads an image file (e.g. a 24-bit BMP) into a grid.
    I/O and decoding errors are left to Pillow to report.
    """
    with Image.open(path) as image:
        logger.debug("Loaded %s: %s %dx%d", path, image.format, image.width, image.height)
        return PixelGrid.from_image(image)
