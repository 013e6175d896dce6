"""Path segments: a curve plus a heading interpolation policy.

A Path wraps a single BezierCurve and answers two questions for any curve
parameter t in [0, 1]: where should the robot be, and which way should it face.
The heading policy is one of:

- CONSTANT: a fixed heading for the whole path
- LINEAR: heading swept from a start to an end heading along the shortest turn
- TANGENT: heading follows the curve derivative (flipped when reversed)
"""

import enum
from typing import Dict

import numpy as np
import numpy.typing as npt

from .bezier import BezierCurve
from .config import (
    DEFAULT_LINEAR_HEADING_END_TIME,
    PATH_SAMPLES_PER_SEGMENT,
    REVERSED_HEADING_OFFSET,
)
from .geometry import Point, Pose, Vector, normalize_angle, smallest_angle_difference, turn_direction


class HeadingInterpolation(enum.Enum):
    """Heading policy applied along a path."""

    CONSTANT = "constant"
    LINEAR = "linear"
    TANGENT = "tangent"


class Path:
    """A single curve with heading interpolation.

    Attributes:
        curve: Underlying bezier curve.
        heading_interpolation: Active heading policy (default: TANGENT).
        reversed: If True, tangent heading points backwards along the curve.
    """

    def __init__(self, curve: BezierCurve) -> None:
        self.curve = curve
        self.heading_interpolation = HeadingInterpolation.TANGENT
        self.reversed = False
        self._start_heading = 0.0
        self._end_heading = 0.0
        self._end_time = DEFAULT_LINEAR_HEADING_END_TIME

    def set_constant_heading_interpolation(self, heading: float) -> None:
        """Hold a fixed heading (rad) along the whole path."""
        self.heading_interpolation = HeadingInterpolation.CONSTANT
        self._start_heading = heading
        self._end_heading = heading

    def set_linear_heading_interpolation(
        self, start_heading: float, end_heading: float, end_time: float = DEFAULT_LINEAR_HEADING_END_TIME
    ) -> None:
        """Sweep the heading from start_heading to end_heading.

        The sweep takes the shortest turn and completes at parameter end_time;
        the heading holds end_heading for the rest of the path.

        Args:
            start_heading: Heading at t = 0 (rad).
            end_heading: Heading at t = end_time (rad).
            end_time: Parameter in (0, 1] at which end_heading is reached.

        Raises:
            ValueError: If end_time is outside (0, 1].
        """
        if not 0.0 < end_time <= 1.0:
            raise ValueError(f"end_time must be in (0, 1], got {end_time}")
        self.heading_interpolation = HeadingInterpolation.LINEAR
        self._start_heading = start_heading
        self._end_heading = end_heading
        self._end_time = end_time

    def set_tangent_heading_interpolation(self) -> None:
        self.heading_interpolation = HeadingInterpolation.TANGENT

    def set_reversed(self, reverse: bool) -> None:
        self.reversed = reverse

    @property
    def start_heading(self) -> float:
        return self._start_heading

    @property
    def end_heading(self) -> float:
        return self._end_heading

    @property
    def length(self) -> float:
        return self.curve.length

    def get_point(self, t: float) -> Point:
        return self.curve.get_point(t)

    def get_tangent_vector(self, t: float) -> Vector:
        return self.curve.get_derivative(t)

    def get_heading_goal(self, t: float) -> float:
        """Return the heading (rad, normalized to [0, 2*pi)) the robot should hold at t."""
        t = max(0.0, min(1.0, float(t)))
        if self.heading_interpolation is HeadingInterpolation.CONSTANT:
            return normalize_angle(self._start_heading)
        if self.heading_interpolation is HeadingInterpolation.LINEAR:
            fraction = min(t / self._end_time, 1.0)
            sweep = smallest_angle_difference(self._end_heading, self._start_heading)
            direction = turn_direction(self._start_heading, self._end_heading)
            return normalize_angle(self._start_heading + direction * sweep * fraction)
        heading = self.get_tangent_vector(t).theta
        if self.reversed:
            heading += REVERSED_HEADING_OFFSET
        return normalize_angle(heading)

    def get_pose(self, t: float) -> Pose:
        point = self.get_point(t)
        return Pose(point.x, point.y, self.get_heading_goal(t))

    def sample(self, num_samples: int = PATH_SAMPLES_PER_SEGMENT) -> Dict[str, npt.NDArray[np.float64]]:
        """Sample positions and heading goals at evenly spaced parameters.

        Args:
            num_samples: Number of samples including both endpoints.

        Returns:
            Dictionary containing:
                't': Curve parameter array
                'x': X position array
                'y': Y position array
                'heading': Heading goal array (rad)
        """
        t_array = np.linspace(0.0, 1.0, num_samples)
        xy = self.curve.sample(num_samples)
        headings = np.array([self.get_heading_goal(t) for t in t_array])
        return {"t": t_array, "x": xy[:, 0], "y": xy[:, 1], "heading": headings}

    def __repr__(self) -> str:
        return f"Path({self.curve!r}, heading={self.heading_interpolation.value})"


def heading_error(goal: float, current: float) -> float:
    """Signed shortest rotation (rad) from current to goal, in [-pi, pi]."""
    return turn_direction(current, goal) * smallest_angle_difference(goal, current)
