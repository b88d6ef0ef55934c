"""Core morphing algorithms and I/O operations.

This module contains the fundamental operations for feature-line morphing:
- Feature line geometry and weights
- Line pair interpolation
- Inverse warp field mapping
- Bilinear resampling and frame compositing
- Blend ratio sequencing
- Image loading and saving
- Input validation
"""

from .geometry import FeatureLine, WeightParams, DEFAULT_WEIGHTS
from .interpolation import FeatureLinePair, pairs_from_lines, reconcile_angles
from .mapping import WarpField, compute_warp_field, warp_point
from .sampling import clip_point, bilinear_sample
from .compositor import warp_image, pixel_grid
from .sequencer import generate_blend_ratios, clamp_ratios, generate_sequence
from .morpher import LineMorpher, create_morpher
from .image_io import load_image, save_image, resize_image, match_dimensions
from .validator import validate_input_file, validate_device, validate_ratio
from .exceptions import *

__all__ = [
    # Geometry
    "FeatureLine",
    "WeightParams",
    "DEFAULT_WEIGHTS",
    # Interpolation
    "FeatureLinePair",
    "pairs_from_lines",
    "reconcile_angles",
    # Mapping
    "WarpField",
    "compute_warp_field",
    "warp_point",
    # Resampling and compositing
    "clip_point",
    "bilinear_sample",
    "warp_image",
    "pixel_grid",
    # Sequencing
    "generate_blend_ratios",
    "clamp_ratios",
    "generate_sequence",
    # Morphing
    "LineMorpher",
    "create_morpher",
    # Image I/O
    "load_image",
    "save_image",
    "resize_image",
    "match_dimensions",
    # Validation
    "validate_input_file",
    "validate_device",
    "validate_ratio",
    # Exceptions
    "LineMorphError",
    "GeometryError",
    "ConfigurationError",
    "DimensionError",
    "ValidationError",
    "AnnotationError",
    "ImageLoadError",
    "ImageSaveError",
]
