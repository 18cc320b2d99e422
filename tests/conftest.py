"""Shared test fixtures for caire test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest


def make_image(rows):
    """Build a (3, H, W) uint8 image from rows of RGB triplets."""
    return torch.tensor(rows, dtype=torch.uint8).permute(2, 0, 1).contiguous()


def make_uniform_image(H, W, color=(10, 10, 10)):
    """Every pixel the same colour."""
    return torch.tensor(color, dtype=torch.uint8).view(3, 1, 1).expand(3, H, W).clone()


def make_edge_image(H, W, edge_col):
    """Black left of `edge_col`, white from `edge_col` on."""
    img = torch.zeros(3, H, W, dtype=torch.uint8)
    img[:, :, edge_col:] = 255
    return img


@pytest.fixture
def scenario_image():
    """3x2 image with one red pixel at (2, 0)."""
    return make_image([
        [(10, 10, 10), (10, 10, 10), (200, 10, 10)],
        [(10, 10, 10), (10, 10, 10), (10, 10, 10)],
    ])


@pytest.fixture
def random_image():
    """Reproducible random 20x30 RGB image."""
    torch.manual_seed(42)
    return torch.randint(0, 256, (3, 20, 30), dtype=torch.uint8)
