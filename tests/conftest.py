"""Shared grids for the quadtree tests."""

import numpy as np
import pytest

from pixels import Pixel, PixelGrid


RED = Pixel(255, 0, 0)
BLUE = Pixel(0, 0, 255)


def solid_grid(dimension: int, color: Pixel) -> PixelGrid:
    array = np.empty((dimension, dimension, 3), dtype=np.uint8)
    array[:, :] = color
    return PixelGrid(array)


def red_corner_grid() -> PixelGrid:
    """4x4, bottom-left 2x2 quadrant red, everything else blue."""
    array = np.empty((4, 4, 3), dtype=np.uint8)
    array[:, :] = BLUE
    array[0:2, 0:2] = RED
    return PixelGrid(array)


def distinct_grid(dimension: int) -> PixelGrid:
    """Every pixel has its own color."""
    array = np.zeros((dimension, dimension, 3), dtype=np.uint8)
    for y in range(dimension):
        for x in range(dimension):
            array[y, x] = (x, y, 1)
    return PixelGrid(array)


def two_color_grid(dimension: int, seed: int) -> PixelGrid:
    """Random red/blue pixels, with a solid blue half so that merges happen."""
    rng = np.random.default_rng(seed)
    mask = rng.integers(0, 2, size=(dimension, dimension)).astype(bool)
    mask[:, dimension // 2:] = False

    array = np.empty((dimension, dimension, 3), dtype=np.uint8)
    array[:, :] = BLUE
    array[mask] = RED
    return PixelGrid(array)


@pytest.fixture
def uniform_grid() -> PixelGrid:
    return solid_grid(4, RED)


@pytest.fixture
def corner_grid() -> PixelGrid:
    return red_corner_grid()


@pytest.fixture
def noisy_grid() -> PixelGrid:
    return distinct_grid(4)


@pytest.fixture(params=[
    ("solid", 8),
    ("corner", 4),
    ("distinct", 4),
    ("distinct", 8),
    ("random", 16),
    ("random", 32),
])
def any_grid(request) -> PixelGrid:
    kind, dimension = request.param
    if kind == "solid":
        return solid_grid(dimension, BLUE)
    if kind == "corner":
        return red_corner_grid()
    if kind == "distinct":
        return distinct_grid(dimension)
    return two_color_grid(dimension, seed=dimension)
