"""
Command-line front end: content-aware image resizing by seam carving.

    caire -i photo.jpg -o narrow.png -w 480
"""

import argparse
import math
import sys
from pathlib import Path

from .carving import iter_resize, resize_to_width
from .energy import compute_energy_map
from .errors import SeamCarvingError, UpsampleRejected
from .image import load_image, save_image
from .seam import find_minimum_seam
from .visualize import energy_to_image, every_nth_frame, save_resize_gif, visualize_seam

DESC = "Content Aware Image Resizing using the seam carving algorithm."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='caire', description=DESC)
    parser.add_argument('-i', '--input', type=str, required=True,
                        help='Path of the image to resize')
    parser.add_argument('-o', '--output', type=str, required=True,
                        help='Output path (format follows the extension)')
    parser.add_argument('-w', '--width', type=int, required=True,
                        help='Resize width')
    parser.add_argument('--full-neighborhood', action='store_true',
                        help='Let seams move right as well as left (classical seam carving)')
    parser.add_argument('--workers', type=int, default=None,
                        help='Threads for the energy computation (default: CPU count)')
    parser.add_argument('--progress', action=argparse.BooleanOptionalAction, default=True,
                        help='Show a progress bar (default: on)')
    parser.add_argument('--gif', type=str, default=None,
                        help='Also save an animation of every intermediate frame')
    parser.add_argument('--fps', type=int, default=10,
                        help='Frames per second for --gif (default: 10)')
    parser.add_argument('--gif-frames', type=int, default=100,
                        help='Most intermediate frames kept for --gif (default: 100)')
    parser.add_argument('--seam', type=str, default=None,
                        help='Save the source image with its first seam highlighted')
    parser.add_argument('--energy', type=str, default=None,
                        help='Save the energy map of the source image')
    return parser


def run(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        raise FileNotFoundError(f"Input image does not exist: {input_path}")

    image = load_image(input_path)
    width = image.shape[2]
    if args.width > width:
        raise UpsampleRejected(f"Cannot upsample: {width}px image, {args.width}px requested")

    neighborhood = 'full' if args.full_neighborhood else 'left'

    if args.energy or args.seam:
        energy = compute_energy_map(image, n_workers=args.workers)
        if args.energy:
            save_image(energy_to_image(energy), args.energy)
            print(f"Saved: {args.energy}", file=sys.stderr)
        if args.seam:
            seam = find_minimum_seam(energy, neighborhood=neighborhood)
            save_image(visualize_seam(image, seam), args.seam)
            print(f"Saved: {args.seam}", file=sys.stderr)

    options = dict(neighborhood=neighborhood, n_workers=args.workers,
                   show_progress=args.progress)
    if args.gif:
        # Sample while carving; only the kept frames stay in memory
        every = max(1, math.ceil((width - args.width) / args.gif_frames))
        frames = [image]
        frames.extend(every_nth_frame(iter_resize(image, args.width, **options), every))
        resized = frames[-1]
        n_frames = save_resize_gif(frames, args.gif, fps=args.fps)
        print(f"Saved: {args.gif} ({n_frames} frames)", file=sys.stderr)
    else:
        resized = resize_to_width(image, args.width, **options)

    save_image(resized, args.output)
    print("Successfully resized image.", file=sys.stderr)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.gif_frames < 1:
        parser.error("--gif-frames must be at least 1")
    try:
        run(args)
    except (SeamCarvingError, FileNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
