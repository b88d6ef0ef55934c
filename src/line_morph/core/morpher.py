"""
Core Morphing Facade
====================

Single responsibility: Bind a set of line correspondences to a device.

LineMorpher keeps the pair list, weight constants and device together so
callers warp points, single frames and whole sequences with one object.
"""

from typing import List, Optional, Sequence

import torch

from .compositor import warp_image
from .geometry import DEFAULT_WEIGHTS, PointLike, WeightParams, as_points
from .interpolation import FeatureLinePair
from .mapping import WarpField, validate_pairs, warp_point
from .sequencer import generate_sequence
from line_morph.utils.logging import get_logger

# Get logger for this module
logger = get_logger(__name__)


class LineMorpher:
    """
    Feature-line morphing between two equally sized rasters.

    Single responsibility: Morph rasters guided by line correspondences.
    """

    def __init__(
        self,
        pairs: Sequence[FeatureLinePair],
        params: WeightParams = DEFAULT_WEIGHTS,
        device: torch.device = torch.device('cpu'),
    ):
        """
        Initialize morpher.

        Args:
            pairs: Ordered feature line pairs (non-empty)
            params: Weight tuning constants
            device: PyTorch device for the raster math

        Raises:
            ConfigurationError: If pairs is empty
        """
        self.pairs = validate_pairs(pairs)
        self.params = params
        self.device = torch.device(device)

    def warp_point(self, point: PointLike, alpha: float) -> WarpField:
        """
        Source and destination sample points of one destination pixel.

        Args:
            point: (x, y) pixel
            alpha: Blend ratio

        Returns:
            WarpField of two (2,) tensors
        """
        return warp_point(as_points(point).to(self.device), self.pairs, alpha, self.params)

    def warp_image(
        self,
        source: torch.Tensor,
        dest: torch.Tensor,
        alpha: float,
        chunk_rows: Optional[int] = None,
    ) -> torch.Tensor:
        """
        Render a single frame.

        Args:
            source: (H, W, C) source raster
            dest: (H, W, C) destination raster
            alpha: Blend ratio in [0, 1]
            chunk_rows: Rows per band (None = whole raster)

        Returns:
            (H, W, C) frame on this morpher's device
        """
        return warp_image(
            source.to(self.device),
            dest.to(self.device),
            self.pairs,
            alpha,
            self.params,
            chunk_rows=chunk_rows,
        )

    def morph_sequence(
        self,
        source: torch.Tensor,
        dest: torch.Tensor,
        ratios: Optional[Sequence[float]] = None,
        frame_count: Optional[int] = None,
        num_workers: int = 1,
        chunk_rows: Optional[int] = None,
    ) -> List[torch.Tensor]:
        """
        Render an animation, frames in ratio order.

        Args:
            source: (H, W, C) source raster
            dest: (H, W, C) destination raster
            ratios: Explicit blend ratios (clamped into [0, 1])
            frame_count: Alternative to ratios: n gives n + 1 frames
            num_workers: Frames rendered concurrently
            chunk_rows: Rows per band inside each frame

        Returns:
            List of (H, W, C) frames
        """
        logger.debug(f"Morphing sequence on {self.device} with {len(self.pairs)} line pairs")
        return generate_sequence(
            source.to(self.device),
            dest.to(self.device),
            self.pairs,
            ratios=ratios,
            frame_count=frame_count,
            params=self.params,
            num_workers=num_workers,
            chunk_rows=chunk_rows,
        )


def create_morpher(
    pairs: Sequence[FeatureLinePair],
    params: WeightParams = DEFAULT_WEIGHTS,
    device: torch.device = torch.device('cpu'),
) -> LineMorpher:
    """
    Factory function to create morpher.

    Args:
        pairs: Ordered feature line pairs
        params: Weight tuning constants
        device: PyTorch device

    Returns:
        LineMorpher instance
    """
    return LineMorpher(pairs, params, device)
