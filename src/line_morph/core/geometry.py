"""
Feature Line Geometry
=====================

Single responsibility: Model one directed feature line.

A feature line P->Q carries its derived quantities (midpoint, length, angle)
and the local-coordinate and weight functions that drive the warp field.
All point arguments broadcast over tensors of shape (..., 2) holding (x, y),
so the same formulas serve a single pixel and a whole raster.
"""

import math
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import torch

from .exceptions import ConfigurationError, GeometryError

Point = Tuple[float, float]
PointLike = Union[torch.Tensor, Sequence[float]]


def as_points(points: PointLike) -> torch.Tensor:
    """
    Convert point-like input to a float64 tensor of shape (..., 2).

    Tensors keep their device; tuples and lists land on the CPU.

    Args:
        points: Tensor, tuple or nested list of (x, y) coordinates

    Returns:
        float64 tensor with last dimension 2
    """
    tensor = torch.as_tensor(points, dtype=torch.float64)
    if tensor.shape[-1:] != (2,):
        raise ValueError(f"Points must have a trailing dimension of 2, got shape {tuple(tensor.shape)}")
    return tensor


def _normalize_angle(angle: float) -> float:
    # Fold into (-pi, pi], the range atan2 produces
    folded = math.remainder(angle, 2 * math.pi)
    return math.pi if folded == -math.pi else folded


@dataclass(frozen=True)
class WeightParams:
    """
    Tuning constants of the line influence weight.

    weight = (length ** p / (a + distance)) ** b

    Attributes:
        a: Distance offset; keeps the weight finite on the line itself (> 0)
        b: Falloff exponent; larger values make influence more local
        p: Length exponent; larger values favour long lines
    """

    a: float = 1.0
    b: float = 2.0
    p: float = 2.0

    def __post_init__(self):
        for name in ('a', 'b', 'p'):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigurationError(f"Weight parameter {name} must be finite, got {value}")
        if self.a <= 0:
            raise ConfigurationError(f"Weight parameter a must be > 0, got {self.a}")


DEFAULT_WEIGHTS = WeightParams()


@dataclass(frozen=True)
class FeatureLine:
    """
    Directed line segment marking a visual feature.

    Use the named factories rather than the constructor:
    from_endpoints() derives midpoint/length/angle from P and Q,
    from_midpoint() reconstructs P and Q from midpoint/length/angle.

    Attributes:
        start: P, the start point (x, y)
        end: Q, the end point (x, y)
        middle: M = (P + Q) / 2
        length: |Q - P|, always > 0
        angle: atan2 of Q - P, in (-pi, pi]
    """

    start: Point
    end: Point
    middle: Point
    length: float
    angle: float

    def __post_init__(self):
        if not (self.length > 0 and math.isfinite(self.length)):
            raise GeometryError(
                f"Feature line has zero length: start={self.start}, end={self.end}"
                if self.length == 0
                else f"Feature line length must be positive and finite, got {self.length}"
            )

    @classmethod
    def from_endpoints(cls, start: Sequence[float], end: Sequence[float]) -> 'FeatureLine':
        """
        Build a line from its two endpoints.

        Args:
            start: P as (x, y)
            end: Q as (x, y)

        Returns:
            FeatureLine with derived quantities

        Raises:
            GeometryError: If P == Q or a coordinate is not finite
        """
        px, py = float(start[0]), float(start[1])
        qx, qy = float(end[0]), float(end[1])

        if not all(math.isfinite(c) for c in (px, py, qx, qy)):
            raise GeometryError(f"Feature line endpoints must be finite: start={start}, end={end}")

        dx, dy = qx - px, qy - py
        return cls(
            start=(px, py),
            end=(qx, qy),
            middle=((px + qx) / 2, (py + qy) / 2),
            length=math.hypot(dx, dy),
            angle=math.atan2(dy, dx),
        )

    @classmethod
    def from_midpoint(cls, middle: Sequence[float], length: float, angle: float) -> 'FeatureLine':
        """
        Restore a line from its midpoint, length and angle.

        Used to rebuild interpolated lines. The angle may lie outside
        (-pi, pi] (after wraparound reconciliation); it is folded back.

        Args:
            middle: M as (x, y)
            length: Segment length (> 0)
            angle: Direction of Q - P in radians

        Returns:
            FeatureLine whose endpoints are M -/+ (length / 2) * (cos, sin)

        Raises:
            GeometryError: If length <= 0 or not finite
        """
        mx, my = float(middle[0]), float(middle[1])
        length = float(length)

        if not (length > 0 and math.isfinite(length)):
            raise GeometryError(f"Feature line length must be positive and finite, got {length}")

        delta_x = length / 2 * math.cos(angle)
        delta_y = length / 2 * math.sin(angle)

        return cls(
            start=(mx - delta_x, my - delta_y),
            end=(mx + delta_x, my + delta_y),
            middle=(mx, my),
            length=length,
            angle=_normalize_angle(float(angle)),
        )

    @property
    def direction(self) -> Point:
        """Q - P."""
        return (self.end[0] - self.start[0], self.end[1] - self.start[1])

    def perpendicular(self) -> Point:
        """
        Vector orthogonal to Q - P, same length, rotated by -90 degrees.

        The rotation direction fixes the sign of v; point_from_local()
        relies on the same convention.
        """
        dx, dy = self.direction
        return (dy, -dx)

    def local_u(self, points: PointLike) -> torch.Tensor:
        """
        Position along P->Q, normalized by length squared.

        0 at P, 1 at Q; values outside [0, 1] project beyond the segment.

        Args:
            points: (..., 2) points

        Returns:
            (...) tensor of u values
        """
        points = as_points(points)
        dx, dy = self.direction
        return (
            (points[..., 0] - self.start[0]) * dx + (points[..., 1] - self.start[1]) * dy
        ) / (self.length * self.length)

    def local_v(self, points: PointLike) -> torch.Tensor:
        """
        Signed perpendicular distance from the P->Q axis, in pixels.

        Args:
            points: (..., 2) points

        Returns:
            (...) tensor of v values
        """
        points = as_points(points)
        nx, ny = self.perpendicular()
        return (
            (points[..., 0] - self.start[0]) * nx + (points[..., 1] - self.start[1]) * ny
        ) / self.length

    def point_from_local(self, u, v) -> torch.Tensor:
        """
        Inverse of local_u/local_v.

        point_from_local(local_u(X), local_v(X)) == X up to rounding.

        Args:
            u: Scalar or tensor of u values
            v: Scalar or tensor of v values (same shape as u)

        Returns:
            (..., 2) tensor of points
        """
        u = torch.as_tensor(u, dtype=torch.float64)
        v = torch.as_tensor(v, dtype=torch.float64)
        dx, dy = self.direction
        nx, ny = self.perpendicular()
        x = self.start[0] + u * dx + v * nx / self.length
        y = self.start[1] + u * dy + v * ny / self.length
        return torch.stack(torch.broadcast_tensors(x, y), dim=-1)

    def weight(self, points: PointLike, params: WeightParams = DEFAULT_WEIGHTS) -> torch.Tensor:
        """
        Influence of this line at each point.

        Distance is |X - Q| beyond Q (u > 1), |X - P| before P (u < 0),
        and |v| alongside the segment.

        Args:
            points: (..., 2) points
            params: Weight tuning constants

        Returns:
            (...) tensor of strictly positive weights
        """
        points = as_points(points)
        u = self.local_u(points)

        to_start = torch.hypot(points[..., 0] - self.start[0], points[..., 1] - self.start[1])
        to_end = torch.hypot(points[..., 0] - self.end[0], points[..., 1] - self.end[1])
        to_axis = self.local_v(points).abs()

        distance = torch.where(u > 1, to_end, torch.where(u < 0, to_start, to_axis))
        return (self.length ** params.p / (params.a + distance)) ** params.b
