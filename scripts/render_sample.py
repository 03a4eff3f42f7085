#!/usr/bin/env python3
"""Render a saved gesture sample to a PNG.

CLI tool to rasterize a sample.v1 YAML file with the same pipeline the
recording session uses (bounding-box normalization + unit-step line
drawing).

Usage:
    # Size taken from the sample file's raster block (or 32×32)
    python scripts/render_sample.py --sample_file circle.yaml --output outputs/circle.png

    # Explicit size
    python scripts/render_sample.py --sample_file circle.yaml --width 64 --height 48 \
        --output outputs/circle_64x48.png

Outputs:
    - the PNG at --output (parent directories are created)
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from gesture_dataset.capture import make_sample
from gesture_dataset.raster import Rasterizer, RasterSize, drawable_strokes
from gesture_dataset.utils import fs, logging_config, strokes as stroke_utils, validators

DEFAULT_SIZE = (32, 32)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Rasterize a gesture sample YAML file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        '--sample_file',
        type=str,
        required=True,
        help='Path to sample.v1 YAML file'
    )
    parser.add_argument(
        '--output',
        type=str,
        required=True,
        help='Output PNG path'
    )
    parser.add_argument('--width', type=int, default=None, help='Image width (px)')
    parser.add_argument('--height', type=int, default=None, help='Image height (px)')
    parser.add_argument(
        '--invert',
        action='store_true',
        help='Black strokes on white instead of white on black'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )
    return parser.parse_args(argv)


def resolve_size(args: argparse.Namespace, sample_file: validators.SampleFileV1) -> RasterSize:
    """CLI flags win over the file's raster block, which wins over 32×32."""
    width, height = DEFAULT_SIZE
    if sample_file.raster is not None:
        width, height = sample_file.raster.width, sample_file.raster.height
    if args.width is not None:
        width = args.width
    if args.height is not None:
        height = args.height
    return RasterSize(width, height)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit code."""
    args = parse_args(argv)

    logging_config.setup_logging(
        log_level="DEBUG" if args.verbose else "INFO",
        context={"app": "render"}
    )
    logger = logging.getLogger(__name__)

    try:
        sample_file = validators.load_sample_file(args.sample_file)
        size = resolve_size(args, sample_file)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1

    sample = make_sample(sample_file.strokes)
    drawable = drawable_strokes(sample)
    logger.info(
        f"Loaded {len(sample)} stroke(s) ({len(drawable)} drawable, "
        f"{stroke_utils.count_points(sample)} points) from {args.sample_file}"
    )
    if not drawable:
        logger.warning("Sample has no stroke with 2 or more points; output will be blank")

    rasterizer = Rasterizer(foreground=0, background=255) if args.invert else Rasterizer()
    image = rasterizer.rasterize(sample, size)

    output = Path(args.output)
    try:
        fs.atomic_save_image(image, output)
    except RuntimeError as e:
        logger.error(str(e))
        return 1

    logger.info(f"Saved {size.width}×{size.height} render: {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
