import logging
from dataclasses import dataclass

from PIL import Image, ImageDraw

from quadtree import Region


logger = logging.getLogger(__name__)


OUTLINE_COLOR = (255, 0, 0)
BACKGROUND_COLOR = (0, 0, 0)


@dataclass
class RenderConfig:
    """Controls how the squares of a quadtree are drawn."""

    outline_color: tuple[int, int, int] = OUTLINE_COLOR
    background_color: tuple[int, int, int] = BACKGROUND_COLOR

    # Paint the leaves with their stored color instead of
    #   showing the source picture underneath.
    fill_leaves: bool = False
    draw_outlines: bool = True

    # Every grid pixel becomes a [scale] x [scale] block.
    scale: int = 1


def square_box(region: Region, dimension: int, scale: int = 1) -> tuple[int, int, int, int]:
    """
    The inclusive (left, top, right, bottom) box of a region in image space.
    Regions count y from the bottom, images count it from the top.
    """
    left = region.x * scale
    top = (dimension - region.y - region.side) * scale
    size = region.side * scale
    return (left, top, left + size - 1, top + size - 1)


def draw_regions(regions: list[Region], dimension: int,
                 image: Image.Image | None = None,
                 config: RenderConfig | None = None) -> Image.Image:
    if config is None:
        config = RenderConfig()

    assert config.scale >= 1, "scale must be a positive integer"
    size = (dimension * config.scale, dimension * config.scale)

    if image is not None and not config.fill_leaves:
        output = image.convert("RGB").resize(size, Image.Resampling.NEAREST)
    else:
        output = Image.new("RGB", size, config.background_color)

    draw = ImageDraw.Draw(output)

    if config.fill_leaves:
        for region in regions:
            if region.is_leaf:
                draw.rectangle(square_box(region, dimension, config.scale),
                               fill=tuple(region.color))

    # Outlines go last so that no fill covers them.
    if config.draw_outlines:
        for region in regions:
            draw.rectangle(square_box(region, dimension, config.scale),
                           outline=config.outline_color, width=1)

    logger.debug("Drew %d squares on a %dx%d image", len(regions), *size)
    return output
