"""
Seam search and removal.

The search is a dynamic program over a grid the size of the energy map.
Each cell stores the cumulative energy of the cheapest path reaching it from
the top row and a back-pointer to the column it came from in the row above.

Two neighbourhoods are supported:
1. 'left': predecessors {x-1, x}. Seams drift left or run straight.
2. 'full': predecessors {x-1, x, x+1}, the classical scheme.

Candidates are examined left to right with a strictly-less comparison, so on
a tie the leftmost predecessor wins.
"""

from typing import Iterable, Optional, Set, Tuple

import torch

from .errors import InvalidDimensions, MalformedSeam
from .image import check_energy_map

NEIGHBORHOODS = {
    'left': (-1, 0),
    'full': (-1, 0, 1),
}


def neighborhood_offsets(neighborhood: str) -> Tuple[int, ...]:
    try:
        return NEIGHBORHOODS[neighborhood]
    except KeyError:
        raise ValueError(f"Invalid neighborhood: {neighborhood!r}. "
                         f"Must be one of {sorted(NEIGHBORHOODS)}.") from None


def _shift(row: torch.Tensor, dx: int, fill: float) -> torch.Tensor:
    """Return r where r[x] = row[x + dx], or `fill` when x + dx is out of range."""
    if dx == 0:
        return row
    W = row.shape[0]
    shifted = torch.full_like(row, fill)
    if dx < 0:
        shifted[-dx:] = row[:W + dx]
    else:
        shifted[:W - dx] = row[dx:]
    return shifted


def cumulative_energy(energy: torch.Tensor,
                      neighborhood: str = 'left') -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Fill the seam grid for an energy map.

    Row 0 copies the energy and has no back-pointer. Every later row depends
    on the fully resolved row above, so rows are processed one at a time;
    the columns of a row are handled together.

    Args:
        energy: Energy map (H, W)
        neighborhood: 'left' or 'full'

    Returns:
        cumulative: float32 (H, W) minimum path energy to each cell
        back: int64 (H, W) predecessor column in the row above, -1 on row 0
    """
    check_energy_map(energy)
    offsets = neighborhood_offsets(neighborhood)
    energy = energy.to(torch.float32)
    H, W = energy.shape

    cumulative = energy.clone()
    back = torch.full((H, W), -1, dtype=torch.long, device=energy.device)
    if H == 0 or W == 0:
        return cumulative, back

    cols = torch.arange(W, device=energy.device)
    inf = float('inf')

    for y in range(1, H):
        prev = cumulative[y - 1]
        best = torch.full_like(prev, inf)
        best_col = cols.clone()

        for dx in offsets:
            candidate = _shift(prev, dx, inf)
            take = candidate < best
            best = torch.where(take, candidate, best)
            best_col = torch.where(take, cols + dx, best_col)

        cumulative[y] = best + energy[y]
        back[y] = best_col

    return cumulative, back


def find_minimum_seam(energy: torch.Tensor, neighborhood: str = 'left') -> torch.Tensor:
    """
    Find one minimum-energy vertical seam.

    The bottom endpoint is the first column of the last row with the lowest
    cumulative energy; back-pointers are followed up to row 0.

    Args:
        energy: Energy map (H, W)
        neighborhood: 'left' or 'full'

    Returns:
        Seam indices (H,) with the column to remove in each row. Empty when
        the map has no columns.
    """
    cumulative, back = cumulative_energy(energy, neighborhood)
    H, W = cumulative.shape
    if H == 0 or W == 0:
        return torch.zeros(0, dtype=torch.long, device=energy.device)

    seam = torch.empty(H, dtype=torch.long, device=energy.device)
    col = torch.argmin(cumulative[H - 1]).item()
    for y in range(H - 1, -1, -1):
        seam[y] = col
        col = back[y, col].item()

    return seam


def remove_seam(image: torch.Tensor, seam) -> torch.Tensor:
    """
    Remove a vertical seam from an image.

    Args:
        image: Image tensor (C, H, W)
        seam: Column index per row, length H

    Returns:
        New image (C, H, W - 1); the input is not modified
    """
    if image.dim() != 3:
        raise InvalidDimensions(f"Expected image of shape (C, H, W), got {tuple(image.shape)}")
    C, H, W = image.shape

    seam = torch.as_tensor(seam, dtype=torch.long, device=image.device)
    if seam.dim() != 1 or seam.shape[0] != H:
        raise MalformedSeam(f"Seam has shape {tuple(seam.shape)}, image height is {H}")
    if W == 0:
        raise MalformedSeam("Image has no columns to remove")
    if H > 0 and (seam.min().item() < 0 or seam.max().item() >= W):
        raise MalformedSeam(f"Seam columns must lie in [0, {W})")

    keep = torch.ones(H, W, dtype=torch.bool, device=image.device)
    keep[torch.arange(H, device=image.device), seam] = False

    return image[:, keep].reshape(C, H, W - 1)


def seam_from_coordinates(coords: Iterable[Tuple[int, int]], height: int,
                          width: Optional[int] = None) -> torch.Tensor:
    """
    Convert an unordered collection of (x, y) pairs into per-row seam indices.

    Raises MalformedSeam if a row is missing or repeated, or a coordinate is
    out of bounds.
    """
    columns = [None] * height
    for x, y in coords:
        if not 0 <= y < height:
            raise MalformedSeam(f"Row {y} outside [0, {height})")
        if x < 0 or (width is not None and x >= width):
            raise MalformedSeam(f"Column {x} out of bounds in row {y}")
        if columns[y] is not None:
            raise MalformedSeam(f"Row {y} appears more than once")
        columns[y] = x

    missing = [y for y, x in enumerate(columns) if x is None]
    if missing:
        raise MalformedSeam(f"Seam has no coordinate for rows {missing}")

    return torch.tensor(columns, dtype=torch.long)


def seam_to_coordinates(seam: torch.Tensor) -> Set[Tuple[int, int]]:
    """Return the seam as a set of (x, y) coordinates."""
    return {(x, y) for y, x in enumerate(seam.tolist())}
