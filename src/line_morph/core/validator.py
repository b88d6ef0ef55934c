"""
Input Validation
================

Single responsibility: Validate inputs before processing.
"""

import math
from pathlib import Path
from typing import Union

import torch

from .exceptions import ValidationError

SUPPORTED_IMAGE_FORMATS = {'.png', '.jpg', '.jpeg', '.bmp', '.tif', '.tiff', '.webp'}


def validate_input_file(filepath: Union[str, Path], label: str = "Input") -> Path:
    """
    Validate that an input image exists and has a supported format.

    Args:
        filepath: Path to image file
        label: Name used in error messages ("Source", "Destination")

    Returns:
        Path object

    Raises:
        ValidationError: If the file is missing or its format is not supported
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise ValidationError(f"{label} image not found: {filepath}")

    if filepath.suffix.lower() not in SUPPORTED_IMAGE_FORMATS:
        raise ValidationError(
            f"Unsupported format for {label.lower()} image: {filepath.suffix}\n"
            f"Supported: {', '.join(sorted(SUPPORTED_IMAGE_FORMATS))}"
        )

    return filepath


def validate_device(device: Union[str, torch.device]) -> torch.device:
    """
    Validate and create torch device.

    Args:
        device: Device string ('cpu', 'cuda', etc.)

    Returns:
        torch.device object

    Raises:
        ValidationError: If CUDA requested but not available
    """
    device = torch.device(device)

    if device.type == 'cuda' and not torch.cuda.is_available():
        raise ValidationError(
            "CUDA requested but not available.\n"
            "Options:\n"
            "  1. Use CPU: pass --cpu\n"
            "  2. Reinstall PyTorch with CUDA support"
        )

    return device


def validate_ratio(alpha: float) -> float:
    """
    Validate a blend ratio about to select an output frame.

    Out-of-range ratios are a caller bug and are rejected, not clamped.

    Args:
        alpha: Blend ratio

    Returns:
        alpha as float

    Raises:
        ValidationError: If alpha is not finite or outside [0, 1]
    """
    alpha = float(alpha)

    if not math.isfinite(alpha) or not 0.0 <= alpha <= 1.0:
        raise ValidationError(f"Blend ratio must be in [0, 1], got {alpha}")

    return alpha
