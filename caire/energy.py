"""
Energy function for seam carving.

The energy of a pixel is the colour distance to its horizontal neighbours:

    E(x, y) = sqrt(|I(x-1, y) - I(x, y)|^2 + |I(x+1, y) - I(x, y)|^2)

where |.|^2 is the sum of squared channel differences and a neighbour that
falls outside the image contributes nothing. Vertical gradients are not part
of the signal, so a single-column image has zero energy everywhere.

Every pixel depends only on its own row, so the map is computed in
independent bands of rows on a thread pool.
"""

import os
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

import torch

from .errors import DegenerateImage
from .image import check_image


def horizontal_energy(image: torch.Tensor) -> torch.Tensor:
    """
    Compute horizontal-neighbour energy for a block of rows.

    Args:
        image: Image tensor (C, H, W)

    Returns:
        float32 energy map (H, W)
    """
    pixels = image.to(torch.int32)
    C, H, W = pixels.shape
    total = torch.zeros(H, W, dtype=torch.int32, device=image.device)

    if W > 1:
        # Squared distance between x and x+1, shared by both pixels
        diff = pixels[:, :, 1:] - pixels[:, :, :-1]
        pair = (diff * diff).sum(dim=0, dtype=torch.int32)
        total[:, :-1] += pair
        total[:, 1:] += pair

    return torch.sqrt(total.to(torch.float32))


def _row_bands(height: int, n_bands: int) -> List[Tuple[int, int]]:
    edges = [height * i // n_bands for i in range(n_bands + 1)]
    return [(edges[i], edges[i + 1]) for i in range(n_bands) if edges[i] < edges[i + 1]]


def compute_energy_map(image: torch.Tensor, n_workers: Optional[int] = None) -> torch.Tensor:
    """
    Compute the energy map of an RGB image.

    The rows are split into one band per worker; each worker fills only its
    own slice of the output, so the result does not depend on `n_workers`.

    Args:
        image: Image tensor (3, H, W)
        n_workers: Thread count (default: os.cpu_count())

    Returns:
        float32 energy map (H, W), all values >= 0
    """
    check_image(image)
    _, H, W = image.shape
    if H == 0 or W == 0:
        raise DegenerateImage(f"Cannot compute energy of a {W}x{H} image")

    if n_workers is None:
        n_workers = os.cpu_count() or 1
    if n_workers < 1:
        raise ValueError(f"n_workers must be at least 1, got {n_workers}")

    energy = torch.empty(H, W, dtype=torch.float32, device=image.device)
    bands = _row_bands(H, min(n_workers, H))

    def fill(band):
        start, stop = band
        energy[start:stop] = horizontal_energy(image[:, start:stop])

    if len(bands) == 1:
        fill(bands[0])
    else:
        with ThreadPoolExecutor(max_workers=len(bands)) as executor:
            # list() re-raises the first worker exception, if any
            list(executor.map(fill, bands))

    return energy
