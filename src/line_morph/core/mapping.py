"""
Inverse Field Mapping
=====================

Single responsibility: Map destination-raster pixels to sample coordinates.

For every pixel p and every line pair, p is expressed in the local (u, v)
frame of the pair's interpolated line, rebuilt against the pair's source and
destination lines, and weighted by each line's influence. The weighted
means over all pairs give where p samples the source image and where it
samples the destination image.

The per-pair accumulation is a fold: each step returns a fresh FieldSums,
nothing is mutated in place.
"""

from functools import reduce
from typing import NamedTuple, Sequence, Tuple

import torch

from .exceptions import ConfigurationError
from .geometry import DEFAULT_WEIGHTS, PointLike, WeightParams, as_points
from .interpolation import FeatureLinePair


class FieldSums(NamedTuple):
    """Running weighted sums for both sample spaces."""

    source_points: torch.Tensor  # (..., 2)
    source_weights: torch.Tensor  # (...)
    dest_points: torch.Tensor
    dest_weights: torch.Tensor


class WarpField(NamedTuple):
    """Sample coordinates for a set of destination pixels."""

    source: torch.Tensor  # (..., 2) where to sample the source image
    dest: torch.Tensor  # (..., 2) where to sample the destination image


def _empty_sums(points: torch.Tensor) -> FieldSums:
    zeros_points = torch.zeros_like(points)
    zeros_weights = torch.zeros_like(points[..., 0])
    return FieldSums(zeros_points, zeros_weights, zeros_points, zeros_weights)


def _accumulate_pair(
    sums: FieldSums,
    pair: FeatureLinePair,
    points: torch.Tensor,
    alpha: float,
    params: WeightParams,
) -> FieldSums:
    current = pair.interpolate(alpha)

    u = current.local_u(points)
    v = current.local_v(points)

    source_candidate = pair.source.point_from_local(u, v)
    dest_candidate = pair.dest.point_from_local(u, v)

    source_weight = pair.source.weight(source_candidate, params)
    dest_weight = pair.dest.weight(dest_candidate, params)

    return FieldSums(
        source_points=sums.source_points + source_candidate * source_weight.unsqueeze(-1),
        source_weights=sums.source_weights + source_weight,
        dest_points=sums.dest_points + dest_candidate * dest_weight.unsqueeze(-1),
        dest_weights=sums.dest_weights + dest_weight,
    )


def validate_pairs(pairs: Sequence[FeatureLinePair]) -> Tuple[FeatureLinePair, ...]:
    """
    Ensure there is at least one correspondence to build a field from.

    Raises:
        ConfigurationError: If pairs is empty
    """
    pairs = tuple(pairs)
    if not pairs:
        raise ConfigurationError(
            "At least one feature line pair is required; "
            "no displacement field can be defined without correspondences"
        )
    return pairs


def compute_warp_field(
    points: PointLike,
    pairs: Sequence[FeatureLinePair],
    alpha: float,
    params: WeightParams = DEFAULT_WEIGHTS,
) -> WarpField:
    """
    Sample coordinates for many destination pixels at once.

    Args:
        points: (..., 2) destination pixel coordinates (x, y)
        pairs: Ordered feature line pairs (non-empty)
        alpha: Blend ratio; values outside [0, 1] extrapolate
        params: Weight tuning constants

    Returns:
        WarpField with (..., 2) source and destination sample coordinates,
        possibly outside the raster bounds

    Raises:
        ConfigurationError: If pairs is empty

    Example:
        >>> ys, xs = torch.meshgrid(torch.arange(4.), torch.arange(4.), indexing='ij')
        >>> field = compute_warp_field(torch.stack([xs, ys], -1), pairs, 0.5)
        >>> field.source.shape
        torch.Size([4, 4, 2])
    """
    pairs = validate_pairs(pairs)
    points = as_points(points)

    sums = reduce(
        lambda acc, pair: _accumulate_pair(acc, pair, points, alpha, params),
        pairs,
        _empty_sums(points),
    )

    return WarpField(
        source=sums.source_points / sums.source_weights.unsqueeze(-1),
        dest=sums.dest_points / sums.dest_weights.unsqueeze(-1),
    )


def warp_point(
    point: PointLike,
    pairs: Sequence[FeatureLinePair],
    alpha: float,
    params: WeightParams = DEFAULT_WEIGHTS,
) -> WarpField:
    """
    Sample coordinates for a single destination pixel.

    Args:
        point: (x, y) destination pixel
        pairs: Ordered feature line pairs (non-empty)
        alpha: Blend ratio
        params: Weight tuning constants

    Returns:
        WarpField of two (2,) tensors: source and destination sample points
    """
    return compute_warp_field(point, pairs, alpha, params)
