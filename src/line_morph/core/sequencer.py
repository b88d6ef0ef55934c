"""
Frame Sequencing
================

Single responsibility: Turn a frame count or ratio list into ordered frames.
"""

import math
from functools import partial
from typing import List, Optional, Sequence

import torch

from .compositor import validate_rasters, warp_image
from .exceptions import ConfigurationError, ValidationError
from .geometry import DEFAULT_WEIGHTS, WeightParams
from .interpolation import FeatureLinePair
from .mapping import validate_pairs
from line_morph.utils.logging import get_logger
from line_morph.utils.parallel import create_worker_pool

logger = get_logger(__name__)


def generate_blend_ratios(frame_count: int) -> List[float]:
    """
    Evenly spaced ratios from source to destination.

    Args:
        frame_count: Number of steps n; n + 1 ratios are produced

    Returns:
        [i / n for i in 0..n]

    Example:
        >>> generate_blend_ratios(4)
        [0.0, 0.25, 0.5, 0.75, 1.0]
    """
    if isinstance(frame_count, bool) or int(frame_count) != frame_count or frame_count < 1:
        raise ValidationError(f"frame_count must be a positive integer, got {frame_count}")

    frame_count = int(frame_count)
    return [i / frame_count for i in range(frame_count + 1)]


def clamp_ratios(ratios: Sequence[float]) -> List[float]:
    """
    Clamp output-frame ratios into [0, 1].

    Args:
        ratios: Requested blend ratios, in playback order

    Returns:
        Clamped ratios, same order

    Raises:
        ValidationError: If ratios is empty or holds a non-finite value
    """
    if len(ratios) == 0:
        raise ValidationError("Ratio list is empty")

    clamped = []
    for idx, ratio in enumerate(ratios):
        ratio = float(ratio)
        if not math.isfinite(ratio):
            raise ValidationError(f"Invalid ratio at index {idx}: {ratio}")

        bounded = min(1.0, max(0.0, ratio))
        if bounded != ratio:
            logger.warning(f"Ratio at index {idx} clamped from {ratio} to {bounded}")
        clamped.append(bounded)

    return clamped


def _render_frame(
    alpha: float,
    source: torch.Tensor,
    dest: torch.Tensor,
    pairs: Sequence[FeatureLinePair],
    params: WeightParams,
    chunk_rows: Optional[int],
) -> torch.Tensor:
    frame = warp_image(source, dest, pairs, alpha, params, chunk_rows=chunk_rows)
    logger.debug(f"Frame at alpha={alpha:.3f} complete")
    return frame


def generate_sequence(
    source: torch.Tensor,
    dest: torch.Tensor,
    pairs: Sequence[FeatureLinePair],
    ratios: Optional[Sequence[float]] = None,
    frame_count: Optional[int] = None,
    params: WeightParams = DEFAULT_WEIGHTS,
    num_workers: int = 1,
    chunk_rows: Optional[int] = None,
) -> List[torch.Tensor]:
    """
    Render a morph animation.

    Frames are independent; with num_workers > 1 they are rendered on a
    thread pool (torch kernels release the GIL). Output order always follows
    the ratio order.

    Args:
        source: (H, W, C) source raster
        dest: (H, W, C) destination raster
        pairs: Ordered feature line pairs (non-empty)
        ratios: Explicit blend ratios (clamped into [0, 1])
        frame_count: Alternative to ratios: n gives n + 1 evenly spaced frames
        params: Weight tuning constants
        num_workers: Frames rendered concurrently
        chunk_rows: Rows per band inside each frame

    Returns:
        List of (H, W, C) frames, one per ratio

    Raises:
        ConfigurationError: If both or neither of ratios/frame_count are given
    """
    if (ratios is None) == (frame_count is None):
        raise ConfigurationError("Provide exactly one of ratios or frame_count")

    # Fail before any frame is rendered
    validate_rasters(source, dest)
    pairs = validate_pairs(pairs)

    if ratios is None:
        ratios = generate_blend_ratios(frame_count)
    ratios = clamp_ratios(ratios)

    render = partial(
        _render_frame,
        source=source,
        dest=dest,
        pairs=pairs,
        params=params,
        chunk_rows=chunk_rows,
    )

    logger.debug(f"Rendering {len(ratios)} frames with {num_workers} worker(s)")

    if num_workers <= 1 or len(ratios) == 1:
        return [render(alpha) for alpha in ratios]

    with create_worker_pool("render", max_workers=num_workers) as pool:
        return pool.map(render, ratios)
