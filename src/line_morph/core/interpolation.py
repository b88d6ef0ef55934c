"""
Line Pair Interpolation
=======================

Single responsibility: Produce the in-between line of a correspondence.
"""

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .exceptions import ConfigurationError
from .geometry import FeatureLine

# Differences within this distance of pi count as a half turn
ANGLE_TOLERANCE = 1e-9


def reconcile_angles(source_angle: float, dest_angle: float, alpha: float) -> Tuple[float, float]:
    """
    Bring two line angles onto the same branch before blending.

    While the two angles are more than pi apart, the smaller one is advanced
    by a full turn, so the blend takes the shorter way around the circle.
    A pair exactly a half turn apart has no shorter way: both directions
    sweep through the perpendicular. Such a pair holds the orientation of the
    nearer end (source below alpha 0.5, destination from 0.5 on).

    Only differences within ANGLE_TOLERANCE of pi count as a half turn. A
    pair that is slightly less than a half turn apart (pi - 1e-6, say) is
    blended normally and does pass through the perpendicular at alpha 0.5,
    so the in-between orientation jumps by about 90 degrees across the
    tolerance edge. Lines drawn that close to opposite directions have no
    well-defined rotation sense; redraw one of them to pick one.

    Args:
        source_angle: Angle of the source line
        dest_angle: Angle of the destination line
        alpha: Blend ratio the angles will be blended at

    Returns:
        Tuple of (source_angle, dest_angle) working copies

    Example:
        >>> src, dst = reconcile_angles(math.radians(170), math.radians(-170), 0.5)
        >>> round(math.degrees(src)), round(math.degrees(dst))
        (170, 190)
    """
    while abs(source_angle - dest_angle) > math.pi + ANGLE_TOLERANCE:
        if source_angle < dest_angle:
            source_angle += 2 * math.pi
        else:
            dest_angle += 2 * math.pi

    if abs(abs(source_angle - dest_angle) - math.pi) <= ANGLE_TOLERANCE:
        if alpha < 0.5:
            dest_angle = source_angle
        else:
            source_angle = dest_angle

    return source_angle, dest_angle


@dataclass(frozen=True)
class FeatureLinePair:
    """
    Correspondence between a source-image line and a destination-image line.

    Attributes:
        source: Line in the source image
        dest: Line marking the same feature in the destination image
    """

    source: FeatureLine
    dest: FeatureLine

    @classmethod
    def from_coordinates(
        cls,
        source_start: Sequence[float],
        source_end: Sequence[float],
        dest_start: Sequence[float],
        dest_end: Sequence[float],
    ) -> 'FeatureLinePair':
        """Build a pair straight from the four endpoints."""
        return cls(
            FeatureLine.from_endpoints(source_start, source_end),
            FeatureLine.from_endpoints(dest_start, dest_end),
        )

    def interpolate(self, alpha: float) -> FeatureLine:
        """
        In-between line at blend ratio alpha.

        Midpoint, length and (reconciled) angle are blended linearly and the
        line is rebuilt from them. alpha=0 reproduces the source line and
        alpha=1 the destination line.

        Args:
            alpha: Blend ratio (0=source, 1=dest); values outside [0, 1] extrapolate

        Returns:
            Interpolated FeatureLine

        Raises:
            GeometryError: If extrapolation drives the blended length to <= 0
        """
        source_angle, dest_angle = reconcile_angles(self.source.angle, self.dest.angle, alpha)

        middle = (
            (1 - alpha) * self.source.middle[0] + alpha * self.dest.middle[0],
            (1 - alpha) * self.source.middle[1] + alpha * self.dest.middle[1],
        )
        length = (1 - alpha) * self.source.length + alpha * self.dest.length
        angle = (1 - alpha) * source_angle + alpha * dest_angle

        return FeatureLine.from_midpoint(middle, length, angle)


def pairs_from_lines(
    source_lines: Sequence[FeatureLine],
    dest_lines: Sequence[FeatureLine],
) -> List[FeatureLinePair]:
    """
    Pair two line lists positionally.

    Args:
        source_lines: Lines drawn on the source image
        dest_lines: Lines drawn on the destination image, same order

    Returns:
        List of FeatureLinePair

    Raises:
        ConfigurationError: If the lists differ in length
    """
    if len(source_lines) != len(dest_lines):
        raise ConfigurationError(
            f"Feature lines do not match: {len(source_lines)} source lines, "
            f"{len(dest_lines)} destination lines"
        )
    return [FeatureLinePair(source, dest) for source, dest in zip(source_lines, dest_lines)]
