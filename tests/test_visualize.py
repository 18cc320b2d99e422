"""Tests for seam overlays, energy previews and GIF export."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from PIL import Image
from caire.carving import iter_resize
from caire.visualize import energy_to_image, every_nth_frame, save_resize_gif, visualize_seam

from conftest import make_uniform_image


class TestVisualizeSeam:
    def test_paints_seam_only(self):
        image = make_uniform_image(3, 4, color=(0, 0, 0))
        vis = visualize_seam(image, torch.tensor([0, 1, 1]))
        assert vis[:, 0, 0].tolist() == [255, 0, 0]
        assert vis[:, 1, 1].tolist() == [255, 0, 0]
        assert vis[:, 2, 1].tolist() == [255, 0, 0]
        assert int(vis.sum()) == 3 * 255
        assert int(image.sum()) == 0


class TestEnergyToImage:
    def test_range_and_shape(self):
        energy = torch.tensor([[0.0, 5.0], [10.0, 2.5]])
        img = energy_to_image(energy)
        assert img.shape == (3, 2, 2)
        assert img.dtype == torch.uint8
        assert img[0, 0, 0].item() == 0
        assert img[0, 1, 0].item() == 255

    def test_flat_energy_is_black(self):
        assert energy_to_image(torch.ones(3, 3)).max().item() == 0


class TestSaveResizeGif:
    def test_writes_all_frames(self, tmp_path, random_image):
        frames = [random_image] + list(iter_resize(random_image, 27))
        path = tmp_path / 'resize.gif'
        assert save_resize_gif(frames, path, fps=5) == 4
        with Image.open(path) as gif:
            assert gif.n_frames == 4
            assert gif.size == (30, 20)

    def test_no_frames(self, tmp_path):
        with pytest.raises(ValueError):
            save_resize_gif([], tmp_path / 'empty.gif')


class TestEveryNthFrame:
    def test_keeps_every_nth_and_last(self):
        assert list(every_nth_frame(range(1, 8), 3)) == [3, 6, 7]

    def test_last_not_repeated(self):
        assert list(every_nth_frame(range(1, 7), 3)) == [3, 6]

    def test_step_one_keeps_all(self):
        assert list(every_nth_frame(range(1, 4), 1)) == [1, 2, 3]

    def test_empty(self):
        assert list(every_nth_frame([], 4)) == []

    def test_consumes_lazily(self, random_image):
        """Frames are taken from the resize as they are produced."""
        frames = every_nth_frame(iter_resize(random_image, 20), 4)
        assert next(frames).shape == (3, 20, 26)

    def test_invalid_step(self):
        with pytest.raises(ValueError):
            list(every_nth_frame(range(3), 0))
