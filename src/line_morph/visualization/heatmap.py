"""Heatmap Generation Utilities - Single responsibility: Visualize warp displacement."""

from pathlib import Path
from typing import Sequence, Tuple

import matplotlib
import numpy as np
import torch

matplotlib.use('Agg')
import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.cm import ScalarMappable  # noqa: E402
from matplotlib.colors import Normalize  # noqa: E402

from line_morph.core.compositor import pixel_grid
from line_morph.core.geometry import DEFAULT_WEIGHTS, WeightParams
from line_morph.core.interpolation import FeatureLinePair
from line_morph.core.mapping import compute_warp_field
from line_morph.utils.logging import get_logger

# Get logger for this module
logger = get_logger(__name__)


def compute_displacement_magnitude(
    rows: int,
    cols: int,
    pairs: Sequence[FeatureLinePair],
    alpha: float,
    params: WeightParams = DEFAULT_WEIGHTS,
    device: torch.device = torch.device('cpu'),
) -> Tuple[torch.Tensor, torch.Tensor]:
    """Per-pixel distance between each output pixel and its sample points.

    Args:
        rows: Raster height
        cols: Raster width
        pairs: Ordered feature line pairs
        alpha: Blend ratio
        params: Weight tuning constants
        device: PyTorch device

    Returns:
        Tuple of (source_displacement, dest_displacement), each (rows, cols)
    """
    grid = pixel_grid(rows, cols, device=device)
    field = compute_warp_field(grid, pairs, alpha, params)

    source_disp = torch.linalg.vector_norm(field.source - grid, dim=-1)
    dest_disp = torch.linalg.vector_norm(field.dest - grid, dim=-1)

    logger.debug(
        f"Displacement at alpha={alpha:.3f}: source max {source_disp.max().item():.2f}px, "
        f"destination max {dest_disp.max().item():.2f}px"
    )
    return source_disp, dest_disp


def displacement_to_colors(values: torch.Tensor, colormap: str = 'hot') -> torch.Tensor:
    """Map a 2D scalar field to RGB colors.

    Args:
        values: (H, W) values to visualize
        colormap: Matplotlib colormap name

    Returns:
        uint8 RGB raster (H, W, 3)
    """
    vmin = values.min()
    vmax = values.max()

    if vmax > vmin:
        normalized = (values - vmin) / (vmax - vmin)
    else:
        normalized = torch.zeros_like(values)

    cmap = matplotlib.colormaps[colormap]
    colors = cmap(normalized.cpu().numpy())[..., :3]

    return torch.from_numpy((colors * 255).round().astype(np.uint8))


def create_heatmap_image(
    panels: Sequence[Tuple[str, np.ndarray]],
    output_path: Path,
    title: str = "Warp displacement",
    colormap: str = 'hot',
    dpi: int = 100,
) -> bool:
    """Save side-by-side heatmaps with color bars.

    Args:
        panels: (label, 2D array) pairs, one subplot each
        output_path: Path to save image (PNG recommended)
        title: Figure title
        colormap: Matplotlib colormap name
        dpi: Dots per inch for output image

    Returns:
        True if successful, False otherwise
    """
    try:
        fig, axes = plt.subplots(1, len(panels), figsize=(5 * len(panels), 4), dpi=dpi, squeeze=False)

        for ax, (label, data) in zip(axes[0], panels):
            values = torch.as_tensor(np.asarray(data, dtype=np.float64))
            ax.imshow(displacement_to_colors(values, colormap).numpy())

            # The panel is pre-colored, so the bar needs its own mappable
            scale = ScalarMappable(
                norm=Normalize(vmin=values.min().item(), vmax=values.max().item()),
                cmap=colormap,
            )
            cbar = fig.colorbar(scale, ax=ax)
            cbar.set_label('Displacement (px)', rotation=270, labelpad=15)
            ax.set_title(label)
            ax.set_xticks([])
            ax.set_yticks([])

        fig.suptitle(title, fontsize=14, fontweight='bold')
        fig.tight_layout()
        fig.savefig(output_path, dpi=dpi, bbox_inches='tight')
        plt.close(fig)

        return Path(output_path).exists()

    except (OSError, ValueError) as e:
        plt.close('all')
        logger.error(f"Error creating heatmap: {e}")
        return False
