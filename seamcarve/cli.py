"""
Command-line interface: seam-carve an image file down to a smaller size.

    seamcarve input.jpg output.png --width 400 [--height 300] [--energy energy.png]
"""

import argparse
import logging
import sys

from .carving import SeamCarver
from .io import ImageIOError, load_image, save_gray_image, save_image
from .seam import find_vertical_seam, find_horizontal_seam
from .visualize import draw_seam, energy_image


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='seamcarve',
        description="Content-aware image shrinking by seam carving"
    )
    parser.add_argument('input', help='Input image path')
    parser.add_argument('output', help='Output image path (format follows the extension)')
    parser.add_argument(
        '--width',
        type=int,
        help='Target width, smaller than the input width'
    )
    parser.add_argument(
        '--height',
        type=int,
        help='Target height, smaller than the input height'
    )
    parser.add_argument(
        '--energy',
        metavar='PATH',
        help='Also save the energy map of the input image to PATH'
    )
    parser.add_argument(
        '--seam',
        metavar='PATH',
        help='Also save the input image with its first seam drawn in red to PATH'
    )
    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Do not print progress'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )
    return parser


def _check_shrink(target, current, name):
    if target is not None and not 1 <= target < current:
        raise ValueError(f"--{name} must be between 1 and {current - 1}, got {target}")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.width is None and args.height is None:
        parser.error("at least one of --width or --height is required")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    def report(carver, removed, total):
        if not args.quiet and (removed == total or removed % max(1, total // 10) == 0):
            print(f"  Removed {removed}/{total} seams, size: "
                  f"{carver.image.width}x{carver.image.height}")

    try:
        image = load_image(args.input)
        if not args.quiet:
            print(f"Loaded {args.input}: {image.width}x{image.height}")

        _check_shrink(args.width, image.width, 'width')
        _check_shrink(args.height, image.height, 'height')

        if args.energy:
            save_gray_image(energy_image(image), args.energy)
            if not args.quiet:
                print(f"Saved: {args.energy}")

        if args.seam:
            if args.width is not None:
                seam = find_vertical_seam(image)
                vis = draw_seam(image, seam, direction='vertical')
            else:
                seam = find_horizontal_seam(image)
                vis = draw_seam(image, seam, direction='horizontal')
            save_image(vis, args.seam)
            if not args.quiet:
                print(f"Saved: {args.seam}")

        SeamCarver(image).resize(args.width, args.height, callback=report)
        save_image(image, args.output)
    except (ImageIOError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"Saved: {args.output}")
    return 0
