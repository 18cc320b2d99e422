"""
High-level resize functions that drive the energy -> seam -> removal loop.
"""

from typing import Iterator, Optional

import torch
from tqdm import tqdm

from .energy import compute_energy_map
from .errors import InvalidDimensions, UpsampleRejected
from .image import check_image
from .seam import find_minimum_seam, neighborhood_offsets, remove_seam


def _seams_to_remove(image: torch.Tensor, target_width: int) -> int:
    check_image(image)
    width = image.shape[2]
    if target_width < 0:
        raise InvalidDimensions(f"Target width must be non-negative, got {target_width}")
    if target_width > width:
        raise UpsampleRejected(
            f"Cannot upsample: target width {target_width} exceeds image width {width}")
    return width - target_width


def _carve(image: torch.Tensor, n_seams: int, neighborhood: str,
           n_workers: Optional[int], show_progress: bool) -> Iterator[torch.Tensor]:
    steps = range(n_seams)
    if show_progress:
        steps = tqdm(steps, desc="Removing seams", unit="seam")

    carved = image
    for _ in steps:
        energy = compute_energy_map(carved, n_workers=n_workers)
        seam = find_minimum_seam(energy, neighborhood=neighborhood)
        carved = remove_seam(carved, seam)
        yield carved


def iter_resize(image: torch.Tensor, target_width: int,
                neighborhood: str = 'left',
                n_workers: Optional[int] = None,
                show_progress: bool = False) -> Iterator[torch.Tensor]:
    """
    Remove seams one at a time, yielding the image after every removal.

    Arguments are validated immediately, not on the first ``next()``.
    Every yielded tensor is a new object and is never modified afterwards,
    so a consumer may hold on to it while carving continues.

    Args:
        image: uint8 image tensor (3, H, W)
        target_width: Width to reduce to, 0 <= target_width <= W
        neighborhood: Seam neighbourhood, 'left' or 'full'
        n_workers: Threads for the energy computation
        show_progress: Display a tqdm progress bar

    Returns:
        Iterator over W - target_width images of decreasing width
    """
    n_seams = _seams_to_remove(image, target_width)
    neighborhood_offsets(neighborhood)
    return _carve(image, n_seams, neighborhood, n_workers, show_progress)


def resize_to_width(image: torch.Tensor, target_width: int,
                    neighborhood: str = 'left',
                    n_workers: Optional[int] = None,
                    show_progress: bool = False) -> torch.Tensor:
    """
    Content-aware width reduction by seam carving.

    Args:
        image: uint8 image tensor (3, H, W)
        target_width: Width to reduce to
        neighborhood: Seam neighbourhood, 'left' or 'full'
        n_workers: Threads for the energy computation
        show_progress: Display a tqdm progress bar

    Returns:
        Carved image (3, H, target_width). The input itself when no seam
        needs removing.
    """
    carved = image
    for carved in iter_resize(image, target_width, neighborhood=neighborhood,
                              n_workers=n_workers, show_progress=show_progress):
        pass
    return carved
