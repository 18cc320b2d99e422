"""
Content-aware image width reduction by seam carving.

Based on "Seam Carving for Content-Aware Image Resizing"
by Avidan & Shamir, 2007.
"""

__version__ = "0.1.0"

from .errors import (SeamCarvingError, InvalidDimensions, MalformedSeam,
                     UpsampleRejected, DegenerateImage)
from .image import (image_from_buffer, image_to_buffer, energy_map_from_buffer,
                    load_image, save_image)
from .energy import compute_energy_map
from .seam import (cumulative_energy, find_minimum_seam, remove_seam,
                   seam_from_coordinates, seam_to_coordinates)
from .carving import iter_resize, resize_to_width
from .streaming import BackgroundResize, drain_latest

__all__ = [
    'SeamCarvingError',
    'InvalidDimensions',
    'MalformedSeam',
    'UpsampleRejected',
    'DegenerateImage',
    'image_from_buffer',
    'image_to_buffer',
    'energy_map_from_buffer',
    'load_image',
    'save_image',
    'compute_energy_map',
    'cumulative_energy',
    'find_minimum_seam',
    'remove_seam',
    'seam_from_coordinates',
    'seam_to_coordinates',
    'iter_resize',
    'resize_to_width',
    'BackgroundResize',
    'drain_latest',
]
