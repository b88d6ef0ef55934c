"""Visualization of morph results.

Displacement heatmaps, feature-line overlays and video encoding.
"""

from .heatmap import compute_displacement_magnitude, displacement_to_colors, create_heatmap_image
from .overlay import draw_feature_lines
from .video import create_video_from_frames, check_ffmpeg_available

__all__ = [
    "compute_displacement_magnitude",
    "displacement_to_colors",
    "create_heatmap_image",
    "draw_feature_lines",
    "create_video_from_frames",
    "check_ffmpeg_available",
]
