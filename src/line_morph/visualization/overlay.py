"""
Feature Line Overlays
=====================

Single responsibility: Draw feature lines onto a raster for review.
"""

from typing import Iterable, Tuple

import numpy as np
import torch
from PIL import Image, ImageDraw

from line_morph.core.geometry import FeatureLine
from line_morph.core.image_io import to_numpy_image

LINE_COLOR = (0, 255, 0)


def draw_feature_lines(
    raster: torch.Tensor,
    lines: Iterable[FeatureLine],
    color: Tuple[int, int, int] = LINE_COLOR,
    width: int = 2,
    mark_start: bool = True,
) -> torch.Tensor:
    """
    Draw lines on a copy of a raster.

    Args:
        raster: (H, W, 3) raster
        lines: Lines to draw, in the raster's pixel coordinates
        color: RGB line color
        width: Line width in pixels
        mark_start: Dot the start point so line direction is visible

    Returns:
        New uint8 raster (H, W, 3); the input is left untouched
    """
    image = Image.fromarray(to_numpy_image(raster))
    draw = ImageDraw.Draw(image)

    for line in lines:
        draw.line([line.start, line.end], fill=color, width=width)
        if mark_start:
            x, y = line.start
            r = width + 1
            draw.ellipse([x - r, y - r, x + r, y + r], fill=color)

    return torch.from_numpy(np.asarray(image, dtype=np.uint8).copy())
