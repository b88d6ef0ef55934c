"""
Pipeline Configuration
======================

Single responsibility: Configure a morphing run with validation.
"""

from dataclasses import dataclass, field
from multiprocessing import cpu_count
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import torch

from line_morph.core.exceptions import ConfigurationError, ValidationError
from line_morph.core.geometry import WeightParams
from line_morph.core.interpolation import FeatureLinePair
from line_morph.core.sequencer import generate_blend_ratios
from line_morph.core.validator import validate_device, validate_input_file

# ((src_x1, src_y1), (src_x2, src_y2), (dst_x1, dst_y1), (dst_x2, dst_y2))
PairCoordinates = Tuple[Tuple[float, float], Tuple[float, float], Tuple[float, float], Tuple[float, float]]


@dataclass
class MorphConfig:
    """
    Configuration for a feature-line morphing run.

    This dataclass encapsulates all settings needed for morphing,
    with validation in __post_init__ to catch errors early.

    Attributes:
        source_image: Path to the source image
        dest_image: Path to the destination image
        line_pairs: Feature line coordinates, one 4-tuple of points per pair
        output_dir: Base output directory (default: 'results')
        frame_count: n, giving n + 1 evenly spaced frames (ignored if ratios is set)
        ratios: Explicit blend ratios, overriding frame_count
        weight_a: Weight distance offset (> 0)
        weight_b: Weight falloff exponent
        weight_p: Weight length exponent
        device: PyTorch device (cpu or cuda)
        verbose: Enable console output
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        num_workers: Parallel workers (frames rendered concurrently, PNG writers)
        chunk_rows: Rows per band when rendering (None = whole raster)
        create_video: Encode animation.mp4 with ffmpeg
        video_fps: Frames per second for video output
        export_heatmap: Save displacement heatmaps at the middle ratio
        export_overlays: Save the inputs with their feature lines drawn on
        timestamp: Optional shared timestamp for the output folder

    Example:
        >>> config = MorphConfig(
        ...     source_image=Path("cat.png"),
        ...     dest_image=Path("dog.png"),
        ...     line_pairs=[((10, 10), (50, 10), (12, 14), (55, 12))],
        ...     frame_count=10,
        ... )
        >>> len(config.blend_ratios)
        11
    """

    # Input/Output
    source_image: Path
    dest_image: Path
    line_pairs: List[PairCoordinates] = field(default_factory=list)
    output_dir: Path = Path("results")

    # Morphing parameters
    frame_count: int = 10
    ratios: Optional[List[float]] = None
    weight_a: float = 1.0
    weight_b: float = 2.0
    weight_p: float = 2.0

    # Hardware
    device: torch.device = field(default_factory=lambda: torch.device('cpu'))

    # Logging
    verbose: bool = True
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # Performance
    num_workers: int = field(default_factory=lambda: max(1, cpu_count() - 1))
    chunk_rows: Optional[int] = None

    # Extra outputs
    create_video: bool = False
    video_fps: int = 10
    export_heatmap: bool = False
    export_overlays: bool = False

    timestamp: Optional[str] = None

    def __post_init__(self):
        """
        Validate and normalize configuration after initialization.

        Raises:
            ValidationError: If paths, ratios or numeric settings are invalid
            ConfigurationError: If no line pairs are given or weights are invalid
            GeometryError: If a feature line has zero length
        """
        self.source_image = validate_input_file(self.source_image, "Source")
        self.dest_image = validate_input_file(self.dest_image, "Destination")
        self.output_dir = Path(self.output_dir)
        self.device = validate_device(self.device)

        if not self.line_pairs:
            raise ConfigurationError("line_pairs cannot be empty")

        # Build once so bad geometry fails here, not mid-run
        self._pairs = [
            FeatureLinePair.from_coordinates(*self._unpack_pair(idx, coords))
            for idx, coords in enumerate(self.line_pairs)
        ]
        self._weights = WeightParams(self.weight_a, self.weight_b, self.weight_p)

        if self.ratios is not None:
            if len(self.ratios) == 0:
                raise ValidationError("ratios cannot be empty")
            for idx, ratio in enumerate(self.ratios):
                if not 0.0 <= ratio <= 1.0:
                    raise ValidationError(
                        f"Invalid ratio at index {idx}: {ratio}\n"
                        f"Ratios must be in range [0.0, 1.0]"
                    )
        else:
            generate_blend_ratios(self.frame_count)

        valid_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR'}
        if self.log_level.upper() not in valid_levels:
            raise ValidationError(
                f"Invalid log_level: {self.log_level}\n"
                f"Must be one of: {valid_levels}"
            )
        self.log_level = self.log_level.upper()

        if self.num_workers < 1:
            raise ValidationError(f"num_workers must be >= 1, got {self.num_workers}")
        if self.chunk_rows is not None and self.chunk_rows < 1:
            raise ValidationError(f"chunk_rows must be >= 1, got {self.chunk_rows}")
        if self.video_fps < 1:
            raise ValidationError(f"video_fps must be >= 1, got {self.video_fps}")

    @staticmethod
    def _unpack_pair(idx: int, coords: Sequence) -> Tuple:
        if len(coords) != 4:
            raise ValidationError(
                f"Line pair {idx} needs 4 points (source start/end, destination start/end), "
                f"got {len(coords)}"
            )
        return tuple(coords)

    @property
    def feature_pairs(self) -> List[FeatureLinePair]:
        """Line pairs built from line_pairs."""
        return list(self._pairs)

    @property
    def weights(self) -> WeightParams:
        """Weight constants built from weight_a/b/p."""
        return self._weights

    @property
    def blend_ratios(self) -> List[float]:
        """Ratios to render: explicit ratios, or frame_count evenly spaced steps."""
        if self.ratios is not None:
            return list(self.ratios)
        return generate_blend_ratios(self.frame_count)

    def __repr__(self) -> str:
        return (
            f"MorphConfig(\n"
            f"  source={self.source_image.name},\n"
            f"  dest={self.dest_image.name},\n"
            f"  line_pairs={len(self.line_pairs)},\n"
            f"  frames={len(self.blend_ratios)},\n"
            f"  device={self.device}\n"
            f")"
        )
