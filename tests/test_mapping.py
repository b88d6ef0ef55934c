"""Tests for the inverse warp field."""

import pytest
import torch

from line_morph.core import (
    ConfigurationError,
    FeatureLinePair,
    compute_warp_field,
    pixel_grid,
    warp_point,
)


def test_empty_pair_list_is_rejected():
    with pytest.raises(ConfigurationError):
        warp_point((1, 1), [], 0.5)


def test_identical_lines_give_identity_field(identity_pair):
    field = warp_point((2, 1), [identity_pair], 0.5)

    assert field.source.tolist() == pytest.approx([2.0, 1.0])
    assert field.dest.tolist() == pytest.approx([2.0, 1.0])


def test_alpha_zero_samples_source_in_place(shifted_pairs):
    grid = pixel_grid(12, 16)

    field = compute_warp_field(grid, shifted_pairs, 0.0)

    assert torch.allclose(field.source, grid, atol=1e-9)


def test_alpha_one_samples_dest_in_place(shifted_pairs):
    grid = pixel_grid(12, 16)

    field = compute_warp_field(grid, shifted_pairs, 1.0)

    assert torch.allclose(field.dest, grid, atol=1e-9)


def test_translation_is_inverted():
    # Destination line is the source line moved by (5, 5)
    pair = FeatureLinePair.from_coordinates((0, 0), (10, 0), (5, 5), (15, 5))

    field = warp_point((8, 9), [pair], 1.0)

    assert field.source.tolist() == pytest.approx([3.0, 4.0])
    assert field.dest.tolist() == pytest.approx([8.0, 9.0])


def test_halfway_translation_splits_the_offset():
    pair = FeatureLinePair.from_coordinates((0, 0), (10, 0), (4, 2), (14, 2))

    field = warp_point((6, 6), [pair], 0.5)

    assert field.source.tolist() == pytest.approx([4.0, 5.0])
    assert field.dest.tolist() == pytest.approx([8.0, 7.0])


def test_single_point_matches_grid(shifted_pairs):
    grid = pixel_grid(12, 16)
    field = compute_warp_field(grid, shifted_pairs, 0.3)

    for x, y in [(0, 0), (5, 7), (15, 11)]:
        single = warp_point((x, y), shifted_pairs, 0.3)
        assert torch.allclose(single.source, field.source[y, x])
        assert torch.allclose(single.dest, field.dest[y, x])


def test_field_keeps_grid_shape(shifted_pairs):
    field = compute_warp_field(pixel_grid(3, 4), shifted_pairs, 0.5)

    assert field.source.shape == (3, 4, 2)
    assert field.dest.shape == (3, 4, 2)
    assert torch.all(torch.isfinite(field.source))
    assert torch.all(torch.isfinite(field.dest))


def test_nearer_line_dominates():
    # Left line moves up by 4, right line stays put
    pairs = [
        FeatureLinePair.from_coordinates((0, 0), (0, 10), (0, -4), (0, 6)),
        FeatureLinePair.from_coordinates((100, 0), (100, 10), (100, 0), (100, 10)),
    ]

    near_left = warp_point((1, 5), pairs, 1.0)
    near_right = warp_point((99, 5), pairs, 1.0)

    assert near_left.source[1].item() == pytest.approx(9.0, abs=0.1)
    assert near_right.source[1].item() == pytest.approx(5.0, abs=0.1)
