"""
Pipeline Worker Functions
==========================

Single responsibility: Output layout and parallel save helpers.

Worker functions must be module-level for multiprocessing.Pool to pickle them.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
from PIL import Image

from line_morph.utils.logging import get_logger

logger = get_logger(__name__)


def create_output_structure(
    output_dir: Path,
    source_name: str,
    dest_name: str,
    timestamp: Optional[str] = None
) -> Tuple[Path, Path, Path, Path]:
    """
    Create output directory structure for a morph run.

    Structure:
        results/<timestamp>/<source>_<dest>/
        ├── session.log
        ├── png/
        │   ├── frame_0000.png
        │   └── ...
        ├── displacement.png
        ├── source_lines.png
        ├── dest_lines.png
        └── animation.mp4

    Args:
        output_dir: Base output directory
        source_name: Source image name (filename without extension)
        dest_name: Destination image name (filename without extension)
        timestamp: Optional timestamp string (generated if None)

    Returns:
        Tuple of (run_dir, png_dir, log_file, video_file)

    Example:
        >>> run_dir, png_dir, log, video = create_output_structure(
        ...     Path("results"), "cat", "dog", "20260101_120000"
        ... )
        >>> run_dir
        PosixPath('results/20260101_120000/cat_dog')
    """
    if timestamp is None:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')

    run_dir = output_dir / timestamp / f"{source_name}_{dest_name}"
    png_dir = run_dir / 'png'
    png_dir.mkdir(parents=True, exist_ok=True)

    log_file = run_dir / 'session.log'
    video_file = run_dir / 'animation.mp4'

    logger.debug(f"Created output structure: {run_dir}")

    return run_dir, png_dir, log_file, video_file


def generate_frame_filename(index: int) -> str:
    """
    Numbered frame filename, matching the ffmpeg input pattern.

    Example:
        >>> generate_frame_filename(7)
        'frame_0007.png'
    """
    return f"frame_{index:04d}.png"


def _save_png_worker(task: Tuple) -> Tuple[str, bool]:
    """
    Save single PNG image (worker for parallel processing).

    Must be module-level for multiprocessing.Pool to pickle it.

    Args:
        task: Tuple of (img_array, path, name)
              - img_array: uint8 numpy array (H, W, 3)
              - path: Output path for PNG file
              - name: Frame name for logging

    Returns:
        Tuple of (name, success)
    """
    img_array, path, name = task

    try:
        Image.fromarray(np.ascontiguousarray(img_array)).save(path)
        return (name, True)
    except (OSError, ValueError, TypeError) as e:
        logger.error(f"Failed to save {name}: {e}")
        return (name, False)
