"""
Create and save synthetic test images for the resize examples.
Run this once to generate output/test_landscape.png and output/test_columns.png
"""

import torch
from pathlib import Path
import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from caire.image import save_image


def create_landscape_image(height, width, sun_center, sun_radius):
    """Sky gradient over flat ground, with a bright sun and a dark tree.

    Args:
        height, width: Image dimensions
        sun_center: (cx, cy) center of the sun
        sun_radius: Radius of the sun in pixels

    Returns:
        uint8 image tensor (3, H, W)
    """
    y = torch.arange(height, dtype=torch.float32)
    x = torch.arange(width, dtype=torch.float32)
    yy, xx = torch.meshgrid(y, x, indexing='ij')

    horizon = int(height * 0.7)
    image = torch.zeros(3, height, width)

    # Sky: light blue fading to white at the horizon
    t = (yy / horizon).clamp(0, 1)
    image[0] = 120 + 120 * t
    image[1] = 170 + 70 * t
    image[2] = 235 + 15 * t

    # Ground
    image[:, horizon:, :] = torch.tensor([70.0, 120.0, 50.0]).view(3, 1, 1)

    cx, cy = float(sun_center[0]), float(sun_center[1])
    sun = torch.sqrt((xx - cx)**2 + (yy - cy)**2) <= sun_radius
    image[:, sun] = torch.tensor([255.0, 220.0, 60.0]).view(3, 1)

    # Tree: trunk plus a round crown
    trunk_x = int(width * 0.75)
    image[:, horizon - 25:horizon + 5, trunk_x - 3:trunk_x + 3] = torch.tensor(
        [90.0, 60.0, 30.0]).view(3, 1, 1)
    crown = torch.sqrt((xx - trunk_x)**2 + (yy - (horizon - 35))**2) <= 15
    image[:, crown] = torch.tensor([30.0, 90.0, 30.0]).view(3, 1)

    return image.round().clamp(0, 255).to(torch.uint8)


def create_columns_image(height, width, n_columns=4, column_width=6):
    """Evenly spaced dark columns on a flat background.

    Returns:
        uint8 image tensor (3, H, W)
    """
    image = torch.full((3, height, width), 200, dtype=torch.uint8)
    spacing = width // (n_columns + 1)
    for i in range(1, n_columns + 1):
        left = i * spacing - column_width // 2
        image[:, :, left:left + column_width] = 40
    return image


def main():
    out_dir = Path(__file__).resolve().parent / 'output'
    out_dir.mkdir(exist_ok=True)

    landscape = create_landscape_image(120, 200, sun_center=(50, 30), sun_radius=14)
    save_image(landscape, out_dir / 'test_landscape.png')
    print(f"Saved: {out_dir / 'test_landscape.png'}")

    columns = create_columns_image(80, 160)
    save_image(columns, out_dir / 'test_columns.png')
    print(f"Saved: {out_dir / 'test_columns.png'}")


if __name__ == '__main__':
    main()
