"""Bezier curve definitions used as path segments.

A BezierCurve of degree n is defined by n + 1 control points and evaluated in
Bernstein form:

    B(t) = sum_i C(n, i) * (1 - t)^(n - i) * t^i * P_i,   t in [0, 1]

BezierLine is the degree-one special case used for straight segments.
"""

import math
from typing import List

import numpy as np
import numpy.typing as npt

from .config import BEZIER_APPROXIMATION_STEPS, PARAMETER_EPSILON
from .geometry import Point, Vector


def _clamp_t(t: float) -> float:
    return max(0.0, min(1.0, float(t)))


def bernstein_basis(degree: int, t: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Evaluate all Bernstein basis polynomials of a given degree.

    Args:
        degree: Polynomial degree n (n >= 0).
        t: Scalar or array of curve parameters in [0, 1].

    Returns:
        Array of shape (len(t), degree + 1) with basis values.
    """
    t_arr = np.atleast_1d(np.asarray(t, dtype=float))
    i = np.arange(degree + 1)
    coefficients = np.array([math.comb(degree, k) for k in i], dtype=float)
    return coefficients * (1.0 - t_arr[:, None]) ** (degree - i) * t_arr[:, None] ** i


class BezierCurve:
    """Bezier curve through an ordered list of control points.

    Attributes:
        control_points: Control points in order. The curve starts at the first
            and ends at the last.
        length: Arc length approximated with BEZIER_APPROXIMATION_STEPS chords.
    """

    def __init__(self, *control_points: Point) -> None:
        if len(control_points) < 2:
            raise ValueError(
                f"BezierCurve requires at least two control points, got {len(control_points)}"
            )
        self._control_points: List[Point] = list(control_points)
        self._control_array = np.array([p.as_array() for p in self._control_points])
        self.length = self._approximate_length()

    @property
    def control_points(self) -> List[Point]:
        return list(self._control_points)

    @property
    def degree(self) -> int:
        return len(self._control_points) - 1

    @property
    def first_control_point(self) -> Point:
        return self._control_points[0]

    @property
    def last_control_point(self) -> Point:
        return self._control_points[-1]

    def _evaluate(self, points: npt.NDArray[np.float64], t: npt.ArrayLike) -> npt.NDArray[np.float64]:
        degree = len(points) - 1
        return bernstein_basis(degree, t) @ points

    def sample(self, num_samples: int) -> npt.NDArray[np.float64]:
        """Sample the curve at evenly spaced parameters.

        Args:
            num_samples: Number of samples (>= 2), including both endpoints.

        Returns:
            Array of shape (num_samples, 2) with x, y columns.
        """
        if num_samples < 2:
            raise ValueError(f"num_samples must be at least 2, got {num_samples}")
        return self._evaluate(self._control_array, np.linspace(0.0, 1.0, num_samples))

    def get_point(self, t: float) -> Point:
        """Return the point on the curve at parameter t (clamped to [0, 1])."""
        x, y = self._evaluate(self._control_array, _clamp_t(t))[0]
        return Point(float(x), float(y))

    def get_derivative(self, t: float) -> Vector:
        """Return the first derivative dB/dt as a vector."""
        n = self.degree
        deltas = n * np.diff(self._control_array, axis=0)
        dx, dy = self._evaluate(deltas, _clamp_t(t))[0]
        return Vector.from_components(float(dx), float(dy))

    def get_second_derivative(self, t: float) -> Vector:
        n = self.degree
        if n < 2:
            return Vector()
        deltas = n * (n - 1) * np.diff(self._control_array, n=2, axis=0)
        dx, dy = self._evaluate(deltas, _clamp_t(t))[0]
        return Vector.from_components(float(dx), float(dy))

    def get_curvature(self, t: float) -> float:
        """Return the signed curvature at t (positive turns counter-clockwise)."""
        first = self.get_derivative(t)
        if first.magnitude <= PARAMETER_EPSILON:
            return 0.0
        second = self.get_second_derivative(t)
        return first.cross(second) / first.magnitude**3

    def _approximate_length(self) -> float:
        samples = self.sample(BEZIER_APPROXIMATION_STEPS + 1)
        return float(np.sum(np.hypot(*np.diff(samples, axis=0).T)))

    def __repr__(self) -> str:
        points = ", ".join(f"({p.x:.3f}, {p.y:.3f})" for p in self._control_points)
        return f"{type(self).__name__}({points})"


class BezierLine(BezierCurve):
    """Straight segment between two points."""

    def __init__(self, start: Point, end: Point) -> None:
        super().__init__(start, end)

    def _approximate_length(self) -> float:
        return self.first_control_point.distance_to(self.last_control_point)

    def get_point(self, t: float) -> Point:
        t = _clamp_t(t)
        start, end = self.first_control_point, self.last_control_point
        return Point(start.x + (end.x - start.x) * t, start.y + (end.y - start.y) * t)

    def get_derivative(self, t: float) -> Vector:
        return self.last_control_point - self.first_control_point

    def get_curvature(self, t: float) -> float:
        return 0.0
