import argparse
import logging
import sys
from os import stat
from pathlib import Path

from PIL import Image

from pixels import ConfigError, load_grid
from quadtree import build, enumerate_regions, tree_statistics
from rendering import RenderConfig, draw_regions


logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="quadtree-compressor",
        description="Splits a square image into uniform squares and draws them.",
    )
    parser.add_argument("input", type=Path, help="square image, e.g. a 24-bit BMP")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="where to save the drawing (default: <input>_quadtree.png)")
    parser.add_argument("--fill", action="store_true",
                        help="paint leaves with their color instead of the source picture")
    parser.add_argument("--no-outlines", action="store_true",
                        help="do not draw square outlines")
    parser.add_argument("--scale", type=int, default=1,
                        help="upscale factor of the drawing")
    parser.add_argument("--show", action="store_true",
                        help="open the drawing in an image viewer")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    args = parser.parse_args(argv)
    if args.scale < 1:
        parser.error("--scale must be at least 1")

    return args


def run(args: argparse.Namespace) -> int:
    input_path: Path = args.input
    output_path: Path = args.output or input_path.with_name(f"{input_path.stem}_quadtree.png")

    logger.info("Start %s", input_path)
    try:
        grid = load_grid(input_path)
    except ConfigError as error:
        logger.error("Cannot compress %s: %s", input_path, error)
        return 1
    except OSError as error:
        logger.error("Cannot read %s: %s", input_path, error)
        return 1

    root = build(grid)
    regions = enumerate_regions(root, grid.dimension)

    stats = tree_statistics(root, grid.dimension)
    logger.info("Quadtree: %d nodes, %d leaves, depth %d",
                stats.nodes, stats.leaves, stats.depth)
    logger.info("Packed tree: %d bytes, raw pixels: %d bytes (ratio %.3f)",
                stats.packed_bytes, stats.raw_bytes, stats.ratio)

    config = RenderConfig(
        fill_leaves=args.fill,
        draw_outlines=not args.no_outlines,
        scale=args.scale,
    )

    # The source picture is only needed when it is drawn underneath.
    if config.fill_leaves:
        drawing = draw_regions(regions, grid.dimension, config=config)
    else:
        with Image.open(input_path) as image:
            drawing = draw_regions(regions, grid.dimension, image, config)

    # Pillow reports an unknown extension as a ValueError.
    try:
        drawing.save(output_path)
    except (OSError, ValueError) as error:
        logger.error("Cannot save %s: %s", output_path, error)
        return 1

    logger.info("Saved %s", output_path)

    # Compare the disk-size of the input and the drawing.
    logger.info("Input size: %d bytes", stat(input_path).st_size)
    logger.info("Output size: %d bytes", stat(output_path).st_size)

    if args.show:
        drawing.show(title="Quad Tree Image Compressor")

    logger.info("End %s", input_path)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    return run(args)


# Runner Code
if __name__ == "__main__":
    sys.exit(main())
