#!/usr/bin/env python3
"""
Generate a GIF of seam carving: each frame shows the current image with
the seam about to be removed drawn in red, padded to the original size.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import argparse
from PIL import Image

from seamcarve import draw_seam, find_vertical_seam, load_image, remove_vertical_seam


def to_frame(image, canvas_size):
    """Paste a PixelBuffer onto a black canvas of the original size."""
    frame = Image.new('RGB', canvas_size)
    frame.paste(Image.fromarray(image.to_array()), (0, 0))
    return frame


def generate_gif(input_path, output_path, n_seams, fps=10, show_seams=True):
    """
    Generate a GIF of vertical seam removal.

    Args:
        input_path: Input image
        output_path: Path to save the output GIF
        n_seams: Number of seams to remove
        fps: Frames per second for the GIF
        show_seams: If True, overlay the seam about to be removed
    """
    image = load_image(input_path)
    canvas_size = (image.width, image.height)
    n_seams = min(n_seams, image.width - 1)

    print(f"Generating GIF for {input_path} ({n_seams} seams)...")
    frames = [to_frame(image, canvas_size)]

    for step in range(n_seams):
        seam = find_vertical_seam(image)
        if show_seams:
            frames.append(to_frame(draw_seam(image, seam), canvas_size))
        remove_vertical_seam(image, seam)
        frames.append(to_frame(image, canvas_size))

        if (step + 1) % 10 == 0:
            print(f"  Processed step {step + 1}/{n_seams}")

    duration = int(1000 / fps)

    print(f"Saving GIF to {output_path}...")
    frames[0].save(
        output_path,
        save_all=True,
        append_images=frames[1:],
        duration=duration,
        loop=0,
        optimize=False
    )

    print(f" GIF created successfully: {output_path}")
    print(f"  Frames: {len(frames)}, Duration: {len(frames) * duration / 1000:.1f}s")


def main():
    parser = argparse.ArgumentParser(
        description="Generate a GIF showing seam carving step by step"
    )
    parser.add_argument('image', help='Input image')
    parser.add_argument(
        '--output',
        type=str,
        help='Output GIF filename (default: {image_stem}.gif)'
    )
    parser.add_argument(
        '--seams',
        type=int,
        default=50,
        help='Number of seams to remove (default: 50)'
    )
    parser.add_argument(
        '--fps',
        type=int,
        default=10,
        help='Frames per second (default: 10)'
    )
    parser.add_argument(
        '--clean',
        action='store_true',
        help='Do not overlay seams on frames'
    )

    args = parser.parse_args()
    output = args.output or f"{os.path.splitext(os.path.basename(args.image))[0]}.gif"
    generate_gif(args.image, output, args.seams, args.fps, show_seams=not args.clean)


if __name__ == "__main__":
    main()
