"""
Raster Resampling
=================

Single responsibility: Clamp sample coordinates and read colors bilinearly.
"""

import torch

from .geometry import PointLike, as_points


def clip_point(points: PointLike, rows: int, cols: int) -> torch.Tensor:
    """
    Clamp coordinates into the raster, each axis independently.

    Args:
        points: (..., 2) points (x, y)
        rows: Raster height
        cols: Raster width

    Returns:
        (..., 2) tensor with 0 <= x <= cols - 1 and 0 <= y <= rows - 1

    Example:
        >>> clip_point((-3.5, 12.0), rows=10, cols=8)
        tensor([0., 9.], dtype=torch.float64)
    """
    points = as_points(points)
    x = points[..., 0].clamp(0, cols - 1)
    y = points[..., 1].clamp(0, rows - 1)
    return torch.stack([x, y], dim=-1)


def bilinear_sample(image: torch.Tensor, points: PointLike) -> torch.Tensor:
    """
    Bilinear color lookup.

    Reads the four lattice neighbours (floor/ceil on each axis) and blends
    them with the fractional offsets, first along x, then along y. On an
    integer coordinate floor and ceil coincide and the exact pixel color
    comes back.

    Points must already lie inside the raster (see clip_point); nothing
    here guards against out-of-range reads.

    Args:
        image: (H, W, C) raster
        points: (..., 2) sample points (x, y)

    Returns:
        (..., C) float64 colors
    """
    points = as_points(points).to(image.device)
    x, y = points[..., 0], points[..., 1]

    x_floor, y_floor = x.floor(), y.floor()
    x_ceil, y_ceil = x.ceil().long(), y.ceil().long()

    u = (x - x_floor).unsqueeze(-1)
    v = (y - y_floor).unsqueeze(-1)
    x_floor, y_floor = x_floor.long(), y_floor.long()

    pixels = image.to(torch.float64)
    top_left = pixels[y_floor, x_floor]
    top_right = pixels[y_floor, x_ceil]
    bottom_left = pixels[y_ceil, x_floor]
    bottom_right = pixels[y_ceil, x_ceil]

    return (1 - v) * ((1 - u) * top_left + u * top_right) + v * ((1 - u) * bottom_left + u * bottom_right)
