"""Tests for clamping and bilinear sampling."""

import pytest
import torch

from line_morph.core import bilinear_sample, clip_point


def test_clip_point_clamps_each_axis():
    assert clip_point((-3.5, 12.0), rows=10, cols=8).tolist() == [0.0, 9.0]
    assert clip_point((9.5, -1.0), rows=10, cols=8).tolist() == [7.0, 0.0]
    assert clip_point((2.25, 3.5), rows=10, cols=8).tolist() == [2.25, 3.5]


def test_clip_point_containment():
    generator = torch.Generator().manual_seed(11)
    points = (torch.rand(1000, 2, generator=generator, dtype=torch.float64) - 0.5) * 1e4

    clipped = clip_point(points, rows=7, cols=13)

    assert torch.all(clipped[:, 0] >= 0) and torch.all(clipped[:, 0] <= 12)
    assert torch.all(clipped[:, 1] >= 0) and torch.all(clipped[:, 1] <= 6)


def test_integer_coordinate_returns_exact_pixel(gradient_raster):
    for x, y in [(0, 0), (2, 3), (15, 11), (7, 0)]:
        color = bilinear_sample(gradient_raster, (float(x), float(y)))
        assert torch.equal(color, gradient_raster[y, x].to(torch.float64))


def test_half_pixel_averages_neighbours():
    image = torch.zeros(2, 2, 3, dtype=torch.uint8)
    image[0, 1] = 100
    image[1, 0] = 40
    image[1, 1] = 200

    assert bilinear_sample(image, (0.5, 0.0)).tolist() == pytest.approx([50.0] * 3)
    assert bilinear_sample(image, (0.0, 0.5)).tolist() == pytest.approx([20.0] * 3)
    assert bilinear_sample(image, (0.5, 0.5)).tolist() == pytest.approx([85.0] * 3)


def test_fractional_weights():
    image = torch.zeros(1, 2, 1, dtype=torch.float32)
    image[0, 1, 0] = 10.0

    assert bilinear_sample(image, (0.25, 0.0)).item() == pytest.approx(2.5)


def test_last_row_and_column_are_readable(gradient_raster):
    color = bilinear_sample(gradient_raster, (15.0, 11.0))

    assert torch.equal(color, gradient_raster[11, 15].to(torch.float64))


def test_batch_sampling_shape(gradient_raster):
    points = torch.rand(4, 5, 2, dtype=torch.float64) * 10

    assert bilinear_sample(gradient_raster, points).shape == (4, 5, 3)
