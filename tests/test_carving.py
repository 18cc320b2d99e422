"""
Tests for the resize loop.

Organized into:
  1. Dimension bookkeeping and argument validation
  2. Seam selection behaviour on known images
  3. Generator form
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from caire.carving import iter_resize, resize_to_width
from caire.errors import DegenerateImage, InvalidDimensions, UpsampleRejected
from caire.image import image_to_buffer

from conftest import make_edge_image, make_uniform_image


# ---------------------------------------------------------------------------
# 1. Dimensions and validation
# ---------------------------------------------------------------------------

class TestResizeDimensions:
    def test_reduces_width(self, random_image):
        carved = resize_to_width(random_image, 25)
        assert carved.shape == (3, 20, 25)
        assert carved.dtype == torch.uint8

    def test_multiple_targets(self, random_image):
        for target in [29, 20, 1]:
            assert resize_to_width(random_image, target).shape == (3, 20, target)

    def test_same_width_returns_input(self, random_image):
        assert resize_to_width(random_image, 30) is random_image

    def test_down_to_zero_width(self):
        image = make_uniform_image(3, 4)
        assert resize_to_width(image, 0).shape == (3, 3, 0)

    def test_upsample_rejected(self, random_image):
        with pytest.raises(UpsampleRejected):
            resize_to_width(random_image, 31)

    def test_negative_target(self, random_image):
        with pytest.raises(InvalidDimensions):
            resize_to_width(random_image, -1)

    def test_wrong_channel_count(self):
        with pytest.raises(InvalidDimensions):
            resize_to_width(torch.zeros(1, 5, 5, dtype=torch.uint8), 3)

    def test_float_image_rejected(self):
        with pytest.raises(InvalidDimensions):
            resize_to_width(torch.rand(3, 4, 6), 3)

    def test_zero_height(self):
        with pytest.raises(DegenerateImage):
            resize_to_width(torch.zeros(3, 0, 5, dtype=torch.uint8), 3)

    def test_invalid_neighborhood(self, random_image):
        with pytest.raises(ValueError):
            resize_to_width(random_image, 20, neighborhood='diagonal')

    def test_input_not_modified(self, random_image):
        before = random_image.clone()
        resize_to_width(random_image, 10)
        assert torch.equal(random_image, before)


# ---------------------------------------------------------------------------
# 2. Seam selection
# ---------------------------------------------------------------------------

class TestResizeContent:
    def test_uniform_image_stays_uniform(self):
        """Zero energy everywhere: column 0 goes each time, colours unchanged."""
        image = make_uniform_image(3, 5, color=(30, 60, 90))
        carved = resize_to_width(image, 3)
        assert carved.shape == (3, 3, 3)
        assert torch.equal(carved, make_uniform_image(3, 3, color=(30, 60, 90)))

    def test_removes_first_column_on_ties(self):
        """Columns that differ only vertically have zero energy; column 0 goes."""
        image = torch.zeros(3, 4, 5, dtype=torch.uint8)
        for y in range(4):
            image[:, y, :] = 50 * y
        carved = resize_to_width(image, 4)
        assert torch.equal(carved, image[:, :, 1:])

    def test_edge_survives(self):
        """Seams should avoid crossing a sharp vertical edge."""
        H, W = 30, 40
        image = make_edge_image(H, W, 20)
        carved = resize_to_width(image, 35)
        values = carved[0, H // 2, :].int()
        diffs = (values[1:] - values[:-1]).abs()
        assert diffs.max() == 255, "Edge disappeared"

    def test_full_neighborhood(self, random_image):
        carved = resize_to_width(random_image, 24, neighborhood='full')
        assert carved.shape == (3, 20, 24)

    def test_deterministic(self, random_image):
        first = resize_to_width(random_image, 18)
        second = resize_to_width(random_image, 18)
        assert image_to_buffer(first) == image_to_buffer(second)

    def test_worker_count_does_not_change_result(self, random_image):
        assert torch.equal(resize_to_width(random_image, 22, n_workers=1),
                           resize_to_width(random_image, 22, n_workers=5))

    def test_progress_bar(self, random_image):
        carved = resize_to_width(random_image, 27, show_progress=True)
        assert carved.shape == (3, 20, 27)


# ---------------------------------------------------------------------------
# 3. Generator form
# ---------------------------------------------------------------------------

class TestIterResize:
    def test_yields_one_frame_per_seam(self, random_image):
        frames = list(iter_resize(random_image, 26))
        assert [f.shape[2] for f in frames] == [29, 28, 27, 26]
        assert all(f.shape[:2] == (3, 20) for f in frames)

    def test_last_frame_is_result(self, random_image):
        frames = list(iter_resize(random_image, 26))
        assert torch.equal(frames[-1], resize_to_width(random_image, 26))

    def test_frames_are_distinct_objects(self, random_image):
        frames = list(iter_resize(random_image, 27))
        assert len({id(f) for f in frames + [random_image]}) == 4

    def test_no_frames_at_target(self, random_image):
        assert list(iter_resize(random_image, 30)) == []

    def test_validates_before_first_frame(self, random_image):
        with pytest.raises(UpsampleRejected):
            iter_resize(random_image, 40)
        with pytest.raises(ValueError):
            iter_resize(random_image, 10, neighborhood='up')
