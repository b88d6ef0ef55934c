"""Tests for image loading, saving and resizing."""

import pytest
import torch

from line_morph.core import (
    DimensionError,
    ImageLoadError,
    load_image,
    match_dimensions,
    resize_image,
    save_image,
)


def test_save_then_load_preserves_pixels(tmp_path, gradient_raster):
    path = tmp_path / "out" / "frame.png"

    save_image(gradient_raster, path)
    loaded = load_image(path)

    assert loaded.dtype == torch.uint8
    assert torch.equal(loaded, gradient_raster)


def test_load_converts_to_rgb(image_files):
    source_path, _ = image_files

    image = load_image(source_path)

    assert image.shape == (10, 12, 3)
    assert image[0, 0].tolist() == [255, 0, 0]


def test_load_missing_file(tmp_path):
    with pytest.raises(ImageLoadError):
        load_image(tmp_path / "missing.png")


def test_load_non_image(tmp_path):
    path = tmp_path / "notes.png"
    path.write_text("not an image")

    with pytest.raises(ImageLoadError):
        load_image(path)


def test_resize_image(gradient_raster):
    resized = resize_image(gradient_raster, (6, 8))

    assert resized.shape == (6, 8, 3)
    assert resized.dtype == torch.uint8


def test_match_dimensions_resizes_destination(red_raster, gradient_raster):
    source, dest = match_dimensions(gradient_raster, red_raster)

    assert source is gradient_raster
    assert dest.shape == gradient_raster.shape
    assert dest[..., 0].unique().tolist() == [255]


def test_match_dimensions_keeps_equal_rasters(red_raster, blue_raster):
    source, dest = match_dimensions(red_raster, blue_raster)

    assert source is red_raster and dest is blue_raster


def test_match_dimensions_rejects_channel_mismatch(red_raster):
    with pytest.raises(DimensionError):
        match_dimensions(red_raster, torch.zeros(4, 4, 1, dtype=torch.uint8))
