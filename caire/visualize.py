"""
Visual helpers: seam overlays, energy previews and animated GIFs of a resize.
"""

from typing import Iterable, Iterator, Tuple

import torch
from PIL import Image

from .image import check_energy_map, check_image, to_pil_image


def visualize_seam(image: torch.Tensor, seam: torch.Tensor,
                   color: Tuple[int, int, int] = (255, 0, 0)) -> torch.Tensor:
    """Return a copy of `image` with the seam pixels painted in `color`."""
    check_image(image)
    img_vis = image.clone()
    rows = torch.arange(image.shape[1], device=image.device)
    cols = torch.as_tensor(seam, dtype=torch.long, device=image.device)
    paint = torch.tensor(color, dtype=image.dtype, device=image.device)
    img_vis[:, rows, cols] = paint.unsqueeze(1)
    return img_vis


def energy_to_image(energy: torch.Tensor, eps: float = 1e-8) -> torch.Tensor:
    """Remap an energy map to [0, 255] and return it as a grey RGB image."""
    check_energy_map(energy)
    if energy.numel() == 0:
        return torch.zeros(3, *energy.shape, dtype=torch.uint8)
    e_min = energy.min()
    e_max = energy.max()
    grey = (energy - e_min) / (e_max - e_min + eps)
    grey = (grey * 255).round().clamp(0, 255).to(torch.uint8)
    return grey.unsqueeze(0).expand(3, -1, -1).contiguous()


def every_nth_frame(frames: Iterable[torch.Tensor], n: int) -> Iterator[torch.Tensor]:
    """Yield every `n`-th frame, and always the last one."""
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")
    frame = None
    pending = False
    for i, frame in enumerate(frames, start=1):
        pending = i % n != 0
        if not pending:
            yield frame
    if pending:
        yield frame


def save_resize_gif(frames: Iterable[torch.Tensor], path, fps: int = 10,
                    background: Tuple[int, int, int] = (0, 0, 0)) -> int:
    """
    Save the frames of a resize as an animated GIF.

    Frames shrink as seams are removed, so each one is pasted at the left of
    a canvas as wide as the widest frame.

    Returns:
        Number of frames written
    """
    frames = [frame for frame in frames if frame.shape[2] > 0]
    if not frames:
        raise ValueError("No frames to save")

    height = frames[0].shape[1]
    width = max(frame.shape[2] for frame in frames)
    images = []
    for frame in frames:
        canvas = Image.new('RGB', (width, height), background)
        canvas.paste(to_pil_image(frame), (0, 0))
        images.append(canvas)

    duration = int(1000 / fps)
    images[0].save(
        path,
        save_all=True,
        append_images=images[1:],
        duration=duration,
        loop=0,
        optimize=False
    )
    return len(images)
