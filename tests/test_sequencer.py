"""Tests for blend ratio sequencing."""

import pytest
import torch

from line_morph.core import (
    ConfigurationError,
    ValidationError,
    clamp_ratios,
    generate_blend_ratios,
    generate_sequence,
    warp_image,
)


def test_generate_blend_ratios():
    assert generate_blend_ratios(4) == [0.0, 0.25, 0.5, 0.75, 1.0]
    assert generate_blend_ratios(1) == [0.0, 1.0]
    assert len(generate_blend_ratios(10)) == 11


@pytest.mark.parametrize("frame_count", [0, -3, 2.5])
def test_generate_blend_ratios_rejects_bad_counts(frame_count):
    with pytest.raises(ValidationError):
        generate_blend_ratios(frame_count)


def test_clamp_ratios():
    assert clamp_ratios([-0.5, 0.3, 1.2]) == [0.0, 0.3, 1.0]


def test_clamp_ratios_rejects_nan_and_empty():
    with pytest.raises(ValidationError):
        clamp_ratios([0.2, float('nan')])
    with pytest.raises(ValidationError):
        clamp_ratios([])


def test_sequence_from_frame_count(gradient_raster, checker_raster, shifted_pairs):
    frames = generate_sequence(gradient_raster, checker_raster, shifted_pairs, frame_count=2)

    assert len(frames) == 3
    assert torch.equal(frames[0], warp_image(gradient_raster, checker_raster, shifted_pairs, 0.0))
    assert torch.equal(frames[1], warp_image(gradient_raster, checker_raster, shifted_pairs, 0.5))
    assert torch.equal(frames[2], warp_image(gradient_raster, checker_raster, shifted_pairs, 1.0))


def test_sequence_keeps_ratio_order(gradient_raster, checker_raster, shifted_pairs):
    ratios = [1.0, 0.2, 0.6, 0.0]

    frames = generate_sequence(gradient_raster, checker_raster, shifted_pairs, ratios=ratios)

    for frame, alpha in zip(frames, ratios):
        assert torch.equal(frame, warp_image(gradient_raster, checker_raster, shifted_pairs, alpha))


def test_parallel_sequence_matches_sequential(gradient_raster, checker_raster, shifted_pairs):
    sequential = generate_sequence(gradient_raster, checker_raster, shifted_pairs, frame_count=4)
    parallel = generate_sequence(gradient_raster, checker_raster, shifted_pairs, frame_count=4, num_workers=3)

    assert len(parallel) == len(sequential)
    for a, b in zip(sequential, parallel):
        assert torch.equal(a, b)


def test_sequence_clamps_out_of_range_ratios(gradient_raster, checker_raster, shifted_pairs):
    frames = generate_sequence(gradient_raster, checker_raster, shifted_pairs, ratios=[1.5])

    assert torch.equal(frames[0], warp_image(gradient_raster, checker_raster, shifted_pairs, 1.0))


def test_sequence_needs_exactly_one_ratio_source(gradient_raster, checker_raster, shifted_pairs):
    with pytest.raises(ConfigurationError):
        generate_sequence(gradient_raster, checker_raster, shifted_pairs)
    with pytest.raises(ConfigurationError):
        generate_sequence(gradient_raster, checker_raster, shifted_pairs, ratios=[0.5], frame_count=3)


def test_sequence_validates_before_rendering(gradient_raster, checker_raster):
    with pytest.raises(ConfigurationError):
        generate_sequence(gradient_raster, checker_raster, [], frame_count=3)
