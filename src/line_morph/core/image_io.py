"""
Image I/O Operations
====================

Single responsibility: Load, save and resize rasters.

Rasters are uint8 torch tensors (H, W, 3) in RGB order.
"""

from pathlib import Path
from typing import Tuple, Union

import numpy as np
import torch
import torch.nn.functional as F
from PIL import Image

from .exceptions import DimensionError, ImageLoadError, ImageSaveError
from line_morph.utils.logging import get_logger

logger = get_logger(__name__)


def load_image(filepath: Union[str, Path], device: torch.device = torch.device('cpu')) -> torch.Tensor:
    """
    Load an image file as an RGB raster.

    Args:
        filepath: Path to image
        device: PyTorch device

    Returns:
        uint8 tensor (H, W, 3)

    Raises:
        ImageLoadError: If the file cannot be opened or decoded
    """
    filepath = Path(filepath)

    try:
        with Image.open(filepath) as img:
            array = np.asarray(img.convert('RGB'), dtype=np.uint8).copy()
    except (OSError, ValueError) as e:
        raise ImageLoadError(f"Failed to load {filepath}: {e}") from e

    logger.debug(f"Loaded {filepath.name}: {array.shape[1]}x{array.shape[0]}")
    return torch.from_numpy(array).to(device)


def to_numpy_image(raster: torch.Tensor) -> np.ndarray:
    """
    Convert a raster to a uint8 numpy array for Pillow.

    Floating rasters are taken to be in [0, 255].
    """
    array = raster.detach().cpu()
    if array.dtype != torch.uint8:
        array = array.round().clamp(0, 255).to(torch.uint8)
    return array.numpy()


def save_image(raster: torch.Tensor, filepath: Union[str, Path], format: str = 'png') -> None:
    """
    Save a raster to an image file.

    Args:
        raster: (H, W, 3) tensor
        filepath: Output path
        format: Image format ('png', 'jpeg')

    Raises:
        ImageSaveError: If the raster cannot be encoded or written
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    try:
        Image.fromarray(to_numpy_image(raster)).save(filepath, format=format.upper())
    except (OSError, ValueError, TypeError) as e:
        raise ImageSaveError(f"Failed to save to {filepath}: {e}") from e


def resize_image(
    raster: torch.Tensor,
    target_size: Tuple[int, int],
    mode: str = 'bilinear'
) -> torch.Tensor:
    """
    Resize a raster to target dimensions.

    Args:
        raster: Input raster (H, W, C)
        target_size: (height, width)
        mode: Interpolation mode

    Returns:
        Resized raster with the input dtype
    """
    # Permute to (C, H, W) and add batch dim
    chw = raster.permute(2, 0, 1).unsqueeze(0).to(torch.float32)

    resized = F.interpolate(
        chw,
        size=target_size,
        mode=mode,
        align_corners=False
    )

    # Back to (H, W, C)
    resized = resized.squeeze(0).permute(1, 2, 0)

    if raster.dtype == torch.uint8:
        return resized.round().clamp(0, 255).to(torch.uint8)
    return resized.to(raster.dtype)


def match_dimensions(source: torch.Tensor, dest: torch.Tensor) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Resize the destination raster to the source size if they differ.

    Args:
        source: (H, W, C) source raster
        dest: (H', W', C) destination raster

    Returns:
        Tuple of (source, dest) with identical shapes

    Raises:
        DimensionError: If the channel counts differ
    """
    if source.shape == dest.shape:
        return source, dest

    if source.dim() != 3 or dest.dim() != 3 or source.shape[2] != dest.shape[2]:
        raise DimensionError(tuple(source.shape), tuple(dest.shape))

    logger.warning(
        f"Destination is {dest.shape[1]}x{dest.shape[0]}, source is "
        f"{source.shape[1]}x{source.shape[0]}; resizing destination"
    )
    return source, resize_image(dest, (source.shape[0], source.shape[1]))
