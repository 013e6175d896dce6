"""Planar geometry primitives: points, vectors and poses.

All angles are in radians, measured counter-clockwise from the +x axis.
"""

import math
from dataclasses import dataclass
from typing import Union

import numpy as np
import numpy.typing as npt

from .config import PARAMETER_EPSILON


def normalize_angle(angle: float) -> float:
    """Wrap an angle into the range [0, 2*pi).

    Args:
        angle: Angle in radians.

    Returns:
        Equivalent angle in [0, 2*pi).
    """
    wrapped = math.fmod(angle, 2.0 * math.pi)
    if wrapped < 0.0:
        wrapped += 2.0 * math.pi
    # fmod of a tiny negative value can round up to exactly 2*pi
    if wrapped >= 2.0 * math.pi:
        wrapped = 0.0
    return wrapped


def smallest_angle_difference(one: float, two: float) -> float:
    """Return the magnitude of the smallest rotation between two angles.

    Args:
        one: First angle (rad).
        two: Second angle (rad).

    Returns:
        Non-negative angle in [0, pi].
    """
    return min(normalize_angle(one - two), normalize_angle(two - one))


def turn_direction(start: float, goal: float) -> float:
    """Return +1.0 if the shortest turn from start to goal is counter-clockwise, else -1.0."""
    if normalize_angle(goal - start) <= math.pi:
        return 1.0
    return -1.0


@dataclass(frozen=True)
class Point:
    """Immutable cartesian point in the field frame."""

    x: float
    y: float

    @classmethod
    def from_polar(cls, r: float, theta: float) -> "Point":
        """Create a point from polar coordinates (radius, angle)."""
        return cls(r * math.cos(theta), r * math.sin(theta))

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def as_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y], dtype=float)

    def __add__(self, other: Union["Point", "Vector"]) -> "Point":
        if isinstance(other, Vector):
            return Point(self.x + other.x_component, self.y + other.y_component)
        if isinstance(other, Point):
            return Point(self.x + other.x, self.y + other.y)
        return NotImplemented

    def __sub__(self, other: Union["Point", "Vector"]):
        # Point - Point is the displacement vector, Point - Vector is a point
        if isinstance(other, Vector):
            return Point(self.x - other.x_component, self.y - other.y_component)
        if isinstance(other, Point):
            return Vector.from_components(self.x - other.x, self.y - other.y)
        return NotImplemented


class Vector:
    """Mutable 2D vector stored as a magnitude and a direction.

    Unlike Point and Pose, vectors are mutated in place by rotate_vector so that
    every holder of the same instance observes the rotation.

    Attributes:
        magnitude: Non-negative length of the vector.
        theta: Direction in radians, normalized to [0, 2*pi).
    """

    def __init__(self, magnitude: float = 0.0, theta: float = 0.0) -> None:
        """Initialize the vector.

        Args:
            magnitude: Length of the vector. A negative magnitude is stored as
                its absolute value with the direction flipped.
            theta: Direction in radians.
        """
        self.magnitude = 0.0
        self.theta = 0.0
        self.set_orthogonal_components(magnitude * math.cos(theta), magnitude * math.sin(theta))
        if abs(magnitude) <= PARAMETER_EPSILON:
            # Keep the requested direction for zero-length vectors
            self.theta = normalize_angle(theta)

    @classmethod
    def from_components(cls, x: float, y: float) -> "Vector":
        """Create a vector from its cartesian components."""
        vector = cls()
        vector.set_orthogonal_components(x, y)
        return vector

    @property
    def x_component(self) -> float:
        return self.magnitude * math.cos(self.theta)

    @property
    def y_component(self) -> float:
        return self.magnitude * math.sin(self.theta)

    def set_orthogonal_components(self, x: float, y: float) -> None:
        """Replace the vector in place from cartesian components."""
        self.magnitude = math.hypot(x, y)
        if self.magnitude > PARAMETER_EPSILON:
            self.theta = normalize_angle(math.atan2(y, x))

    def rotate_vector(self, angle: float) -> None:
        """Rotate the vector in place by the given angle (rad)."""
        self.theta = normalize_angle(self.theta + angle)

    def copy(self) -> "Vector":
        return Vector(self.magnitude, self.theta)

    def dot(self, other: "Vector") -> float:
        return self.x_component * other.x_component + self.y_component * other.y_component

    def cross(self, other: "Vector") -> float:
        """Return the z component of the 3D cross product."""
        return self.x_component * other.y_component - self.y_component * other.x_component

    def as_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x_component, self.y_component], dtype=float)

    def __neg__(self) -> "Vector":
        return Vector.from_components(-self.x_component, -self.y_component)

    def __repr__(self) -> str:
        return f"Vector(magnitude={self.magnitude:.4f}, theta={self.theta:.4f})"


@dataclass(frozen=True)
class Pose:
    """Immutable robot pose: position plus heading (rad)."""

    x: float = 0.0
    y: float = 0.0
    heading: float = 0.0

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    def heading_vector(self) -> Vector:
        """Unit vector pointing along the pose heading."""
        return Vector(1.0, self.heading)

    def distance_to(self, other: "Pose") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)
