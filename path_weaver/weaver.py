"""PathWeaver: stitches knots together into path chains.

PathWeaver operates alongside a PathBuilder (usually obtained from a Follower)
and turns an ordered list of knots into one PathChain per weave call:

- Lines: one straight segment between consecutive knot positions
- Cubics: one cubic bezier per pair, with control points
      current.pos, current.tangent_point, next.reflected_tangent_point, next.pos

With cubics the outgoing tangent of one segment and the incoming tangent of the
next are both built from the shared knot's tangent, so the chain keeps a
continuous tangent direction across every joint.
"""

import logging
from typing import Callable, List

from .bezier import BezierCurve, BezierLine
from .chain import PathBuilder, PathChain
from .knot import Knot
from .path import HeadingInterpolation, Path

HeadingMode = HeadingInterpolation
"""Heading modes accepted by PathWeaver.weave (CONSTANT, LINEAR, TANGENT)."""


class PathWeaver:
    """Fluent builder that weaves knots into path chains.

    Every weave-family method appends exactly one chain to history and returns
    the weaver itself so calls can be chained:

        >>> weaver.weave_line(HeadingMode.CONSTANT, a, b).weave_cubic(HeadingMode.TANGENT, b, c)

    Attributes:
        builder: The PathBuilder this weaver is paired with.
        history: Chains woven so far, oldest first.
    """

    def __init__(self, builder: PathBuilder) -> None:
        self._builder = builder
        self._history: List[PathChain] = []

    @classmethod
    def from_follower(cls, follower) -> "PathWeaver":
        """Create a weaver around the path builder supplied by a follower."""
        return cls(follower.path_builder())

    def weave(self, heading_mode: HeadingMode, use_lines: bool, *knots: Knot) -> "PathWeaver":
        """Weave the given knots together with cubic bezier curves or lines.

        Args:
            heading_mode: Heading interpolation applied to every segment.
            use_lines: If True, segments are straight lines instead of cubics.
            *knots: Two or more knots, in driving order.

        Returns:
            This weaver, for chaining.

        Raises:
            ValueError: If heading_mode is not a HeadingMode or fewer than two
                knots are given. History is left unchanged.
        """
        if not isinstance(heading_mode, HeadingMode):
            raise ValueError(
                f"Unknown heading mode {heading_mode!r}; expected one of "
                f"{', '.join(mode.name for mode in HeadingMode)}"
            )
        if len(knots) < 2:
            raise ValueError(
                f"PathWeaver.weave() expects at least two knots, got {len(knots)} "
                "(pass knots as separate arguments, e.g. weave(mode, use_lines, *knots))"
            )

        paths = []
        for current, following in zip(knots, knots[1:]):
            if use_lines:
                curve = BezierLine(current.pos_point(), following.pos_point())
            else:
                curve = BezierCurve(
                    current.pos_point(),
                    current.tangent_point(),
                    following.reflected_tangent_point(),
                    following.pos_point(),
                )
            path = Path(curve)
            if heading_mode is HeadingMode.CONSTANT:
                path.set_constant_heading_interpolation(current.pose.heading)
            elif heading_mode is HeadingMode.LINEAR:
                path.set_linear_heading_interpolation(current.pose.heading, following.pose.heading)
            elif heading_mode is HeadingMode.TANGENT:
                path.set_tangent_heading_interpolation()
            paths.append(path)

        chain = PathChain(*paths)
        self._history.append(chain)
        logging.debug(
            "Wove %d %s segment(s) with %s heading (length %.2f)",
            len(paths),
            "line" if use_lines else "cubic",
            heading_mode.value,
            chain.length,
        )
        return self

    def weave_line(self, heading_mode: HeadingMode, start_knot: Knot, end_knot: Knot) -> "PathWeaver":
        """Weave a single straight segment between two knots."""
        return self.weave(heading_mode, True, start_knot, end_knot)

    def weave_cubic(self, heading_mode: HeadingMode, start_knot: Knot, end_knot: Knot) -> "PathWeaver":
        """Weave a single cubic bezier segment between two knots."""
        return self.weave(heading_mode, False, start_knot, end_knot)

    def repeat(self, count: int, action: Callable[[int, "PathWeaver"], object]) -> "PathWeaver":
        """Call action(i, self) for i = 0 .. count - 1.

        Useful for scripting repeated patterns such as zig-zags. Exceptions
        raised by action propagate unchanged; count <= 0 does nothing.

        Args:
            count: Number of iterations.
            action: Callable taking the iteration index and this weaver.

        Returns:
            This weaver, for chaining.
        """
        for i in range(count):
            action(i, self)
        return self

    @property
    def builder(self) -> PathBuilder:
        return self._builder

    @builder.setter
    def builder(self, builder: PathBuilder) -> None:
        self._builder = builder

    @property
    def history(self) -> List[PathChain]:
        return self._history

    @history.setter
    def history(self, chains: List[PathChain]) -> None:
        self._history = chains

    @property
    def last_chain(self) -> PathChain:
        """Most recently woven chain.

        Raises:
            IndexError: If nothing has been woven yet.
        """
        if not self._history:
            raise IndexError("PathWeaver has not woven any chains yet")
        return self._history[-1]

    def clear(self) -> "PathWeaver":
        """Forget all woven chains."""
        self._history = []
        return self
