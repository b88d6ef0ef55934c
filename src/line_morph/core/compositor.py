"""
Frame Compositing
=================

Single responsibility: Render one morph frame at a blend ratio.

Every output pixel is mapped through the warp field, sampled once in each
input raster and cross-dissolved. Pixels are independent, so the raster is
processed as tensors in row bands.
"""

from typing import Optional, Sequence

import torch

from .exceptions import DimensionError
from .geometry import DEFAULT_WEIGHTS, WeightParams
from .interpolation import FeatureLinePair
from .mapping import compute_warp_field, validate_pairs
from .sampling import bilinear_sample, clip_point
from .validator import validate_ratio
from line_morph.utils.logging import get_logger

# Get logger for this module
logger = get_logger(__name__)


def validate_rasters(source: torch.Tensor, dest: torch.Tensor) -> None:
    """
    Check both rasters are non-empty (H, W, C) with identical shape.

    Raises:
        DimensionError: If shapes differ, are not 3-dimensional or have no pixels
    """
    if source.dim() != 3 or dest.dim() != 3 or source.shape != dest.shape:
        raise DimensionError(tuple(source.shape), tuple(dest.shape))
    if 0 in source.shape[:2]:
        raise DimensionError(tuple(source.shape), tuple(dest.shape))


def pixel_grid(rows: int, cols: int, device: Optional[torch.device] = None) -> torch.Tensor:
    """
    (rows, cols, 2) tensor of (x, y) pixel coordinates.

    Example:
        >>> pixel_grid(2, 3)[1, 2]
        tensor([2., 1.], dtype=torch.float64)
    """
    ys, xs = torch.meshgrid(
        torch.arange(rows, dtype=torch.float64, device=device),
        torch.arange(cols, dtype=torch.float64, device=device),
        indexing='ij',
    )
    return torch.stack([xs, ys], dim=-1)


def _to_output_dtype(colors: torch.Tensor, dtype: torch.dtype) -> torch.Tensor:
    if dtype == torch.uint8:
        return colors.round().clamp(0, 255).to(torch.uint8)
    return colors.to(dtype)


def warp_image(
    source: torch.Tensor,
    dest: torch.Tensor,
    pairs: Sequence[FeatureLinePair],
    alpha: float,
    params: WeightParams = DEFAULT_WEIGHTS,
    chunk_rows: Optional[int] = None,
) -> torch.Tensor:
    """
    Render the morph frame at blend ratio alpha.

    Output pixel = (1 - alpha) * source color + alpha * destination color,
    each color read bilinearly at the clipped warp-field coordinates.

    Args:
        source: (H, W, C) source raster
        dest: (H, W, C) destination raster, same shape as source
        pairs: Ordered feature line pairs (non-empty)
        alpha: Blend ratio in [0, 1]
        params: Weight tuning constants
        chunk_rows: Rows per band (None = whole raster in one band)

    Returns:
        (H, W, C) raster with the dtype of source (uint8 is rounded and saturated)

    Raises:
        DimensionError: If the rasters differ in shape
        ConfigurationError: If pairs is empty
        ValidationError: If alpha is outside [0, 1]

    Example:
        >>> frame = warp_image(source, dest, pairs, alpha=0.5)
        >>> frame.shape == source.shape
        True
    """
    validate_rasters(source, dest)
    pairs = validate_pairs(pairs)
    alpha = validate_ratio(alpha)

    rows, cols = source.shape[0], source.shape[1]
    band = rows if chunk_rows is None else max(1, int(chunk_rows))
    dest = dest.to(source.device)

    logger.debug(
        f"Warping {cols}x{rows} raster: {len(pairs)} line pairs, alpha={alpha:.3f}, "
        f"{(rows + band - 1) // band} band(s)"
    )

    grid = pixel_grid(rows, cols, device=source.device)
    bands = []

    with torch.no_grad():
        for top in range(0, rows, band):
            field = compute_warp_field(grid[top:top + band], pairs, alpha, params)

            color_source = bilinear_sample(source, clip_point(field.source, rows, cols))
            color_dest = bilinear_sample(dest, clip_point(field.dest, rows, cols))

            bands.append((1 - alpha) * color_source + alpha * color_dest)

        return _to_output_dtype(torch.cat(bands, dim=0), source.dtype)
