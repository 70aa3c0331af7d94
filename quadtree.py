import logging
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np
from PIL import Image

from pixels import HAS_CHILDREN, Pixel, PixelGrid, pack_color


logger = logging.getLogger(__name__)


# The (x, y) offset of each quadrant, in units of half the parent side.
#   The order is the order of the children of an internal node.
QUADRANT_OFFSETS = (
    (0, 0),  # bottom left
    (1, 0),  # bottom right
    (0, 1),  # top left
    (1, 1),  # top right
)


@dataclass(frozen=True)
class Leaf:
    # The color shared by every pixel of the square.
    color: Pixel


@dataclass(frozen=True)
class Internal:
    # The four quadrants, ordered as in [QUADRANT_OFFSETS].
    children: tuple["Leaf | Internal", "Leaf | Internal",
                    "Leaf | Internal", "Leaf | Internal"]

    def __post_init__(self):
        assert len(self.children) == 4, "an internal node has exactly 4 children"


QuadtreeNode = Leaf | Internal


class Region(NamedTuple):
    # [x, y] is the bottom-left corner of the square.
    x: int
    y: int
    side: int

    # The color of the square if it is a leaf, None otherwise.
    color: Pixel | None = None

    @property
    def is_leaf(self) -> bool:
        return self.color is not None


class TreeStats(NamedTuple):
    nodes: int
    leaves: int
    depth: int
    packed_bytes: int
    raw_bytes: int

    @property
    def ratio(self) -> float:
        return self.packed_bytes / self.raw_bytes


def quadrants(x: int, y: int, side: int) -> list[tuple[int, int, int]]:
    """
    Splits the square at (x, y) into its four quadrants,
        returned as (x, y, side) in child order.
    """
    half = side // 2
    return [(x + dx * half, y + dy * half, half) for dx, dy in QUADRANT_OFFSETS]


def is_uniform(grid: PixelGrid, x: int, y: int, side: int) -> bool:
    """
    Returns whether every pixel of the square whose bottom-left corner
        is (x, y) has the same color as that corner.
    """
    area = grid.region(x, y, side)
    return bool((area == area[0, 0]).all())


def build_region(grid: PixelGrid, x: int, y: int, side: int) -> QuadtreeNode:
    # A single pixel, or a square of one color, cannot be split any further.
    #   Uniformity is checked before splitting so that the tree is as
    #   coarse as the image allows.
    if side == 1 or is_uniform(grid, x, y, side):
        return Leaf(grid.pixel(x, y))

    children = tuple(build_region(grid, cx, cy, half)
                     for cx, cy, half in quadrants(x, y, side))

    return Internal(children)


def build(grid: PixelGrid) -> QuadtreeNode:
    root = build_region(grid, 0, 0, grid.dimension)
    logger.debug("Built quadtree for %r", grid)
    return root


def enumerate_regions(root: QuadtreeNode, side: int,
                      x: int = 0, y: int = 0) -> list[Region]:
    """
    Lists the square of every node of the tree, parents before children.
    The position of each square is carried along the traversal,
        since the nodes themselves store no coordinates.
    """
    regions: list[Region] = []

    # Depth-first, with the children pushed in reverse
    #   so that they are popped in child order.
    stack = [(root, x, y, side)]
    while len(stack) > 0:
        node, node_x, node_y, node_side = stack.pop()

        if isinstance(node, Leaf):
            regions.append(Region(node_x, node_y, node_side, node.color))
            continue

        regions.append(Region(node_x, node_y, node_side))
        children = zip(node.children, quadrants(node_x, node_y, node_side))
        stack.extend((child, cx, cy, half)
                     for child, (cx, cy, half) in reversed(list(children)))

    return regions


def pack_node(node: QuadtreeNode) -> int:
    """
    The 4-byte form of a node: the packed color of a leaf,
        or [HAS_CHILDREN] for an internal node.
    """
    if isinstance(node, Internal):
        return HAS_CHILDREN

    return pack_color(node.color)


def tree_statistics(root: QuadtreeNode, dimension: int) -> TreeStats:
    nodes, leaves, depth = 0, 0, 0

    stack = [(root, 0)]
    while len(stack) > 0:
        node, node_depth = stack.pop()
        nodes += 1
        depth = max(depth, node_depth)

        if isinstance(node, Leaf):
            leaves += 1
        else:
            stack.extend((child, node_depth + 1) for child in node.children)

    return TreeStats(
        nodes=nodes,
        leaves=leaves,
        depth=depth,
        # Every node is stored as one packed 4-byte value,
        #   every raw pixel as 3 bytes.
        packed_bytes=4 * nodes,
        raw_bytes=3 * dimension * dimension,
    )


def decode(root: QuadtreeNode, dimension: int) -> Image.Image:
    """
    Paints the picture encoded by the tree.
    """
    output = np.zeros((dimension, dimension, 3), dtype=np.uint8)

    for region in enumerate_regions(root, dimension):
        if region.is_leaf:
            output[region.y:region.y + region.side,
                   region.x:region.x + region.side] = region.color

    # The rows are stored bottom to top, images are top to bottom.
    return Image.fromarray(output[::-1].copy())
