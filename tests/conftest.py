"""Shared fixtures for the line_morph test suite."""

import logging

import numpy as np
import pytest
import torch
from PIL import Image

from line_morph.core import FeatureLinePair


@pytest.fixture
def red_raster():
    raster = torch.zeros(4, 4, 3, dtype=torch.uint8)
    raster[..., 0] = 255
    return raster


@pytest.fixture
def blue_raster():
    raster = torch.zeros(4, 4, 3, dtype=torch.uint8)
    raster[..., 2] = 255
    return raster


@pytest.fixture
def gradient_raster():
    """12x16 raster whose colors vary along both axes."""
    ys, xs = torch.meshgrid(torch.arange(12), torch.arange(16), indexing='ij')
    return torch.stack([xs * 15, ys * 20, (xs + ys) * 7], dim=-1).to(torch.uint8)


@pytest.fixture
def checker_raster():
    ys, xs = torch.meshgrid(torch.arange(12), torch.arange(16), indexing='ij')
    value = ((xs // 4 + ys // 4) % 2 * 200 + 30).to(torch.uint8)
    return torch.stack([value, 255 - value, value // 2], dim=-1)


@pytest.fixture
def identity_pair():
    return FeatureLinePair.from_coordinates((0, 0), (3, 3), (0, 0), (3, 3))


@pytest.fixture
def shifted_pairs():
    """Two pairs whose destination lines are moved and tilted."""
    return [
        FeatureLinePair.from_coordinates((2, 2), (12, 3), (3, 4), (13, 2)),
        FeatureLinePair.from_coordinates((4, 9), (10, 10), (2, 8), (11, 11)),
    ]


@pytest.fixture
def image_files(tmp_path):
    """Two small PNG files of different sizes."""
    source_path = tmp_path / "source.png"
    dest_path = tmp_path / "dest.png"

    source = np.zeros((10, 12, 3), dtype=np.uint8)
    source[..., 0] = 255
    dest = np.zeros((8, 8, 3), dtype=np.uint8)
    dest[..., 2] = 255

    Image.fromarray(source).save(source_path)
    Image.fromarray(dest).save(dest_path)
    return source_path, dest_path


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers a CLI test attached to the package logger."""
    yield
    logger = logging.getLogger("line_morph")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
