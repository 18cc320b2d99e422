"""
Basic content-aware resize example.

Shows the source image, its energy map with the first seam, and the result
side by side with a plain uniform rescale to the same width.

    python basic_resize.py output/test_landscape.png --width 120
"""

import argparse
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import torch
import numpy as np
import matplotlib.pyplot as plt
from PIL import Image

from caire import compute_energy_map, find_minimum_seam, load_image, resize_to_width
from caire.visualize import visualize_seam


def to_numpy(image: torch.Tensor) -> np.ndarray:
    """(3, H, W) uint8 tensor -> (H, W, 3) array for imshow."""
    return image.permute(1, 2, 0).cpu().numpy()


def main():
    parser = argparse.ArgumentParser(description="Seam carving vs. uniform rescale")
    parser.add_argument('image', type=str, help='Input image')
    parser.add_argument('--width', type=int, required=True, help='Target width')
    parser.add_argument('--full-neighborhood', action='store_true',
                        help='Allow seams to move right as well as left')
    parser.add_argument('--output', type=str, default='output/basic_resize.png',
                        help='Where to save the comparison figure')
    args = parser.parse_args()

    print("Loading image...")
    image = load_image(args.image)
    C, H, W = image.shape
    print(f"Image shape: {C} x {H} x {W}")

    neighborhood = 'full' if args.full_neighborhood else 'left'

    print("Computing energy...")
    energy = compute_energy_map(image)
    seam = find_minimum_seam(energy, neighborhood=neighborhood)
    img_with_seam = visualize_seam(image, seam)

    print(f"Carving image (removing {W - args.width} seams)...")
    carved = resize_to_width(image, args.width, neighborhood=neighborhood,
                             show_progress=True)

    with Image.open(args.image) as src:
        scaled = np.array(src.convert('RGB').resize((args.width, H), Image.BILINEAR))

    fig, axes = plt.subplots(2, 2, figsize=(10, 8))
    axes[0, 0].imshow(to_numpy(img_with_seam))
    axes[0, 0].set_title(f"Original {W}x{H} with first seam")
    axes[0, 1].imshow(energy.cpu().numpy(), cmap='magma')
    axes[0, 1].set_title("Energy (horizontal neighbours)")
    axes[1, 0].imshow(to_numpy(carved))
    axes[1, 0].set_title(f"Seam carved to {args.width}px")
    axes[1, 1].imshow(scaled)
    axes[1, 1].set_title(f"Uniform rescale to {args.width}px")
    for ax in axes.flat:
        ax.axis('off')
    plt.tight_layout()

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(output, dpi=120)
    print(f"Saved: {output}")


if __name__ == '__main__':
    main()
