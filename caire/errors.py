"""
Error kinds raised by the seam carving engine.

Every error is a ``ValueError`` so callers that already guard against bad
arguments keep working.
"""


class SeamCarvingError(ValueError):
    """Base class for all validation failures raised by caire."""


class InvalidDimensions(SeamCarvingError):
    """A buffer or tensor does not match its declared size or 8-bit RGB layout."""


class MalformedSeam(SeamCarvingError):
    """A seam does not have exactly one in-bounds column per image row."""


class UpsampleRejected(SeamCarvingError):
    """The requested width is larger than the image; seams cannot be inserted."""


class DegenerateImage(SeamCarvingError):
    """Width or height is zero, so there is nothing to compute energy on."""
