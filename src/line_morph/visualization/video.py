"""
Animation Encoding
==================

Single responsibility: Turn a directory of numbered morph frames into an mp4.

Encoding shells out to ffmpeg; when it is missing the pipeline keeps the
PNG frames and skips the video.
"""

import platform
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from line_morph.utils.logging import get_logger

logger = get_logger(__name__)

FRAME_PATTERN = "frame_%04d.png"

_INSTALL_HINTS = {
    'Linux': "sudo apt install ffmpeg  (or your distribution's package manager)",
    'Darwin': "brew install ffmpeg",
    'Windows': "choco install ffmpeg, or download from https://ffmpeg.org/download.html and add it to PATH",
}


def find_ffmpeg() -> Optional[str]:
    """Path of the ffmpeg executable on PATH, or None."""
    return shutil.which('ffmpeg')


def ffmpeg_install_hint() -> str:
    """One-line install instruction for the current platform."""
    return _INSTALL_HINTS.get(platform.system(), "install ffmpeg and make sure it is on PATH")


def build_ffmpeg_command(
    ffmpeg_path: str,
    frame_dir: Path,
    output_video: Path,
    fps: int = 10,
    pattern: str = FRAME_PATTERN,
) -> List[str]:
    """
    Command line that encodes frame_dir/pattern to H.264.

    Morph frames keep the input raster size, which may be odd; yuv420p needs
    even dimensions, so the last row/column is padded when necessary.
    """
    return [
        ffmpeg_path,
        '-y',
        '-framerate', str(fps),
        '-i', str(Path(frame_dir) / pattern),
        '-vf', 'pad=ceil(iw/2)*2:ceil(ih/2)*2',
        '-c:v', 'libx264',
        '-pix_fmt', 'yuv420p',
        '-crf', '23',
        str(output_video),
    ]


def create_video_from_frames(
    frame_dir: Path,
    output_video: Path,
    fps: int = 10,
    pattern: str = FRAME_PATTERN,
) -> bool:
    """
    Encode numbered PNG frames into an mp4.

    Args:
        frame_dir: Directory containing the frames
        output_video: Output video path
        fps: Frames per second
        pattern: printf-style frame filename pattern

    Returns:
        True if the video was written
    """
    ffmpeg_path = find_ffmpeg()
    if ffmpeg_path is None:
        logger.warning("ffmpeg not found, skipping video")
        return False

    cmd = build_ffmpeg_command(ffmpeg_path, frame_dir, output_video, fps, pattern)
    logger.debug(f"Running: {' '.join(cmd)}")

    try:
        result = subprocess.run(cmd, capture_output=True, timeout=300)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning(f"ffmpeg failed to run: {e}")
        return False

    if result.returncode != 0:
        logger.warning(f"ffmpeg exited with code {result.returncode}")
        logger.debug(result.stderr.decode(errors='replace'))
        return False

    return Path(output_video).exists()


def check_ffmpeg_available() -> bool:
    """
    Whether ffmpeg can be run; logs how to install it when it cannot.
    """
    ffmpeg_path = find_ffmpeg()

    if ffmpeg_path is None:
        logger.warning(f"ffmpeg not found, video will be skipped. To enable: {ffmpeg_install_hint()}")
        return False

    try:
        result = subprocess.run([ffmpeg_path, '-version'], capture_output=True, timeout=5)
    except (OSError, subprocess.TimeoutExpired):
        logger.warning(f"ffmpeg at {ffmpeg_path} could not be run")
        return False

    return result.returncode == 0
