"""
Image and energy-map containers.

An image is a uint8 tensor laid out (C, H, W) with C == 3 (RGB), the same
channel-first layout torch uses everywhere else. An energy map is a float32
tensor (H, W). Raw buffers are row-major with interleaved channels, which is
what decoders hand out and what encoders expect back.
"""

import numpy as np
import torch
from PIL import Image

from .errors import InvalidDimensions

CHANNELS = 3


def check_image(image: torch.Tensor) -> None:
    """Raise InvalidDimensions unless `image` is a uint8 (3, H, W) tensor."""
    if image.dim() != 3 or image.shape[0] != CHANNELS:
        raise InvalidDimensions(
            f"Expected an RGB image of shape (3, H, W), got {tuple(image.shape)}")
    if image.dtype != torch.uint8:
        raise InvalidDimensions(
            f"Expected 8-bit channels (torch.uint8), got {image.dtype}")


def check_energy_map(energy: torch.Tensor) -> None:
    """Raise InvalidDimensions unless `energy` is a (H, W) tensor."""
    if energy.dim() != 2:
        raise InvalidDimensions(
            f"Expected an energy map of shape (H, W), got {tuple(energy.shape)}")


def _check_size(width: int, height: int) -> None:
    if width < 0 or height < 0:
        raise InvalidDimensions(f"Negative image size: {width}x{height}")


def _flat_array(buffer, dtype) -> np.ndarray:
    if isinstance(buffer, (bytes, bytearray, memoryview)):
        return np.frombuffer(buffer, dtype=dtype)
    return np.asarray(buffer, dtype=dtype).reshape(-1)


def image_from_buffer(buffer, width: int, height: int) -> torch.Tensor:
    """
    Build an image from a row-major interleaved RGB buffer.

    Args:
        buffer: bytes-like object or sequence of ints, length width*height*3
        width, height: Image dimensions

    Returns:
        uint8 image tensor (3, H, W)
    """
    _check_size(width, height)
    data = _flat_array(buffer, np.uint8)
    expected = width * height * CHANNELS
    if data.size != expected:
        raise InvalidDimensions(
            f"Buffer holds {data.size} values, {width}x{height} RGB needs {expected}")

    pixels = data.reshape(height, width, CHANNELS).copy()
    return torch.from_numpy(pixels).permute(2, 0, 1).contiguous()


def image_to_buffer(image: torch.Tensor) -> bytes:
    """Flatten an image back into a row-major interleaved RGB buffer."""
    check_image(image)
    pixels = image.permute(1, 2, 0).cpu().numpy().astype(np.uint8)
    return pixels.tobytes()


def energy_map_from_buffer(buffer, width: int, height: int) -> torch.Tensor:
    """Build an energy map (H, W) from a row-major buffer of width*height floats."""
    _check_size(width, height)
    data = _flat_array(buffer, np.float32)
    if data.size != width * height:
        raise InvalidDimensions(
            f"Buffer holds {data.size} values, {width}x{height} energy map needs "
            f"{width * height}")
    return torch.from_numpy(data.reshape(height, width).copy())


def to_pil_image(image: torch.Tensor) -> Image.Image:
    """Convert an image tensor to a PIL RGB image."""
    check_image(image)
    pixels = np.ascontiguousarray(image.permute(1, 2, 0).cpu().numpy(), dtype=np.uint8)
    return Image.fromarray(pixels)


def load_image(path) -> torch.Tensor:
    """Load an image file as a uint8 RGB tensor (3, H, W)."""
    with Image.open(path) as img:
        pixels = np.array(img.convert('RGB'), dtype=np.uint8)
    return torch.from_numpy(pixels).permute(2, 0, 1).contiguous()


def save_image(image: torch.Tensor, path) -> None:
    """Save an image tensor; the format follows the file extension."""
    to_pil_image(image).save(path)
