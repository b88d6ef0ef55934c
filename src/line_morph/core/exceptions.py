"""Custom exceptions for line-based image morphing.

This module defines domain-specific exceptions that provide clear,
actionable error messages for common failure modes in feature-line morphing.
"""

from typing import Tuple


class LineMorphError(Exception):
    """Base exception for all line morphing errors.

    All custom exceptions in the line_morph package inherit from this base class.
    This allows catching all line_morph-related errors with a single except clause.

    Example:
        >>> try:
        ...     warp_image(source, dest, pairs, alpha=0.5)
        ... except LineMorphError as e:
        ...     print(f"Morphing failed: {e}")
    """
    pass


class GeometryError(LineMorphError):
    """Raised when a feature line is geometrically degenerate.

    A feature line needs distinct endpoints: its length divides the local
    coordinate and weight formulas, so a zero-length line would turn the
    whole warp field into NaN/Inf.

    Example:
        >>> FeatureLine.from_endpoints((3, 3), (3, 3))
        GeometryError: Feature line has zero length: start=(3.0, 3.0), end=(3.0, 3.0)
    """
    pass


class ConfigurationError(LineMorphError):
    """Raised when the morph is configured in an unusable way.

    Common causes:
    - Empty feature-line-pair list (no displacement field can be defined)
    - Source and destination line lists of different lengths
    - Invalid weight parameters (a <= 0, non-finite b or p)
    - Both or neither of ratios/frame_count given to the sequencer
    """
    pass


class DimensionError(LineMorphError):
    """Raised when source and destination rasters do not share dimensions.

    Dimension reconciliation (resizing) must happen before the compositor
    is invoked; the compositor never resizes on its own.

    Attributes:
        source_shape: Shape of the source raster
        dest_shape: Shape of the destination raster

    Example:
        >>> raise DimensionError((480, 640, 3), (512, 512, 3))
        DimensionError: Dimension mismatch: source is 480x640x3, destination is
        512x512x3. Resize the destination before morphing.
    """

    def __init__(self, source_shape: Tuple[int, ...], dest_shape: Tuple[int, ...]):
        """Initialize dimension mismatch error.

        Args:
            source_shape: Shape of the source raster
            dest_shape: Shape of the destination raster
        """
        self.source_shape = tuple(source_shape)
        self.dest_shape = tuple(dest_shape)

        msg = (
            f"Dimension mismatch: source is {_format_shape(self.source_shape)}, "
            f"destination is {_format_shape(self.dest_shape)}. "
            f"Resize the destination before morphing."
        )

        super().__init__(msg)


class ValidationError(LineMorphError):
    """Raised when input validation fails.

    Used for general input validation failures where a more specific
    exception type doesn't exist.

    Example:
        >>> if alpha < 0 or alpha > 1:
        ...     raise ValidationError(f"Blend ratio must be in [0, 1], got {alpha}")
    """
    pass


class AnnotationError(LineMorphError):
    """Raised when an annotation event arrives in a state that cannot accept it.

    Example:
        >>> session.begin_pair()
        >>> session.begin_pair()
        AnnotationError: Cannot begin a new pair while awaiting_source_start
    """
    pass


class ImageLoadError(LineMorphError):
    """Raised when image loading fails.

    Common causes:
    - File not found
    - Unsupported or corrupted image data

    Example:
        >>> try:
        ...     image = load_image(path)
        ... except Exception as e:
        ...     raise ImageLoadError(f"Failed to load {path}: {e}") from e
    """
    pass


class ImageSaveError(LineMorphError):
    """Raised when image saving fails.

    Common causes:
    - Invalid output path
    - Permission denied
    - Raster with an unsupported shape
    """
    pass


__all__ = [
    "LineMorphError",
    "GeometryError",
    "ConfigurationError",
    "DimensionError",
    "ValidationError",
    "AnnotationError",
    "ImageLoadError",
    "ImageSaveError",
]


def _format_shape(shape: Tuple[int, ...]) -> str:
    return "x".join(str(dim) for dim in shape)
