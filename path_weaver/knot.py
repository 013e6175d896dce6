"""Knots: waypoints that carry a pose and a tangent vector.

While not a mathematical knot, a Knot stores the position, the heading at that
position, and a tangent vector used to shape the cubic curves entering and
leaving it.
"""

import math
import numbers
from typing import Union

from .geometry import Point, Pose, Vector


class Knot:
    """A pose plus a tangent vector.

    The tangent is stored by reference. tangent_vector returns that same live
    instance, so a reflect_tangent() call is visible to anyone holding it.

    Attributes:
        pose: Position of the knot and the heading at the knot (read-only).
        tangent_vector: Tangent relative to the knot position (live reference).
    """

    def __init__(self, pose: Pose, tangent: Union[Vector, float]) -> None:
        """Initialize the knot.

        Args:
            pose: Knot position and heading.
            tangent: Either an explicit tangent vector, stored as given, or a
                tangent length, in which case the tangent points along
                pose.heading with that magnitude.

        Raises:
            TypeError: If tangent is neither a Vector nor a real number.
        """
        if isinstance(tangent, Vector):
            self._tangent = tangent
        elif isinstance(tangent, numbers.Real) and not isinstance(tangent, bool):
            self._tangent = Vector(float(tangent), pose.heading)
        else:
            raise TypeError(f"tangent must be a Vector or a length, got {type(tangent).__name__}")
        self._pose = pose

    @classmethod
    def aligned(cls, pose: Pose, tangent_length: float) -> "Knot":
        """Create a knot whose tangent is aligned with the pose heading."""
        return cls(pose, Vector(tangent_length, pose.heading))

    @property
    def pose(self) -> Pose:
        return self._pose

    @property
    def tangent_vector(self) -> Vector:
        return self._tangent

    def tangent_point(self) -> Point:
        """Return the tip of the tangent: pose position + tangent."""
        return Point(
            self._pose.x + self._tangent.x_component, self._pose.y + self._tangent.y_component
        )

    def reflected_tangent_point(self) -> Point:
        """Return the tip of the reflected tangent: pose position - tangent."""
        return Point(
            self._pose.x - self._tangent.x_component, self._pose.y - self._tangent.y_component
        )

    def reflect_tangent(self) -> None:
        """Flip the stored tangent in place by rotating it pi radians."""
        self._tangent.rotate_vector(math.pi)

    def pos_point(self) -> Point:
        return Point(self._pose.x, self._pose.y)

    def __repr__(self) -> str:
        return (
            f"Knot(pose=({self._pose.x:.3f}, {self._pose.y:.3f}, {self._pose.heading:.3f}), "
            f"tangent={self._tangent!r})"
        )
