"""
Basic seam carving example.

Writes the energy map, the first seam overlaid on the input, and the
carved result to an output directory.

    python basic_seam_carving.py input.jpg --seams 100 --out ../output
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import argparse
from pathlib import Path

from seamcarve import (SeamCarver, draw_seam, energy_image, find_vertical_seam,
                       load_image, save_gray_image, save_image)


def main():
    parser = argparse.ArgumentParser(description="Basic seam carving demo")
    parser.add_argument('image', help='Input image')
    parser.add_argument('--seams', type=int, default=100, help='Vertical seams to remove (default: 100)')
    parser.add_argument('--out', default='../output', help='Output directory (default: ../output)')
    args = parser.parse_args()

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    stem = Path(args.image).stem

    print("Loading image...")
    image = load_image(args.image)
    print(f"Image size: {image.width} x {image.height}")

    print("Computing energy...")
    save_gray_image(energy_image(image), out_dir / f"{stem}_energy.png")

    print("Computing seam...")
    seam = find_vertical_seam(image)
    save_image(draw_seam(image, seam), out_dir / f"{stem}_with_seam.png")

    n_seams = min(args.seams, image.width - 1)
    print(f"Carving image (removing {n_seams} seams)...")

    def report(carver, removed, total):
        if removed % 20 == 0:
            print(f"  Removed {removed}/{total} seams, size: {carver.image.width} x {carver.image.height}")

    SeamCarver(image).resize_horizontal(image.width - n_seams, callback=report)
    save_image(image, out_dir / f"{stem}_carved.png")

    print(f"\nDone! Check {out_dir} for results.")


if __name__ == '__main__':
    main()
