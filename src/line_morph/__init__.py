"""Line Morph - feature-line (Beier-Neely) image morphing.

This package warps and cross-dissolves two equally sized images guided by
corresponding line segments drawn on both, producing in-between frames for
any sequence of blend ratios.

Quick Start:
    >>> from line_morph.core import FeatureLinePair, load_image, create_morpher
    >>> from line_morph.utils.logging import setup_logger
    >>>
    >>> logger = setup_logger(verbose=True)
    >>> source = load_image('cat.png')
    >>> dest = load_image('dog.png')
    >>>
    >>> pairs = [FeatureLinePair.from_coordinates((30, 40), (90, 40), (28, 50), (95, 45))]
    >>> morpher = create_morpher(pairs)
    >>> frames = morpher.morph_sequence(source, dest, frame_count=10)

Modules:
    core: Geometry, interpolation, warp field, resampling, compositing, sequencing
    annotation: State machine for drawing feature line pairs
    visualization: Displacement heatmaps, line overlays and video
    pipeline: Configuration and end-to-end orchestration
    cli: Command-line interface
    utils: Logging, worker pools, platform helpers
"""

__version__ = "1.0.0"
__author__ = "Line Morph Contributors"
__license__ = "MIT"

# Expose key classes and functions at package level
from .core.exceptions import (
    LineMorphError,
    GeometryError,
    ConfigurationError,
    DimensionError,
    ValidationError,
    AnnotationError,
    ImageLoadError,
    ImageSaveError,
)

from .utils.logging import setup_logger, get_logger

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
    # Exceptions
    "LineMorphError",
    "GeometryError",
    "ConfigurationError",
    "DimensionError",
    "ValidationError",
    "AnnotationError",
    "ImageLoadError",
    "ImageSaveError",
    # Logging
    "setup_logger",
    "get_logger",
]
