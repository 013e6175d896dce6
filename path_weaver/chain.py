"""Path chains and the fluent builder that assembles them."""

from typing import Dict, Iterator, List, Optional, Union

import numpy as np
import numpy.typing as npt

from .bezier import BezierCurve, BezierLine
from .config import DEFAULT_LINEAR_HEADING_END_TIME, PATH_SAMPLES_PER_SEGMENT
from .geometry import Point
from .path import Path


class PathChain:
    """Ordered sequence of paths driven back to back."""

    def __init__(self, *paths: Path) -> None:
        self._paths: List[Path] = list(paths)

    def get_path(self, index: int) -> Path:
        return self._paths[index]

    def size(self) -> int:
        return len(self._paths)

    @property
    def paths(self) -> List[Path]:
        return list(self._paths)

    @property
    def length(self) -> float:
        """Total arc length of all paths."""
        return float(sum(path.length for path in self._paths))

    def sample(self, samples_per_path: int = PATH_SAMPLES_PER_SEGMENT) -> Dict[str, npt.NDArray[np.float64]]:
        """Sample every path and concatenate the results in chain order.

        Args:
            samples_per_path: Samples taken from each path, endpoints included.

        Returns:
            Dictionary containing:
                'segment': Index of the path each sample came from
                't': Curve parameter within that path
                'x', 'y': Positions
                'heading': Heading goals (rad)
        """
        if not self._paths:
            empty = np.array([], dtype=float)
            return {"segment": np.array([], dtype=int), "t": empty, "x": empty, "y": empty, "heading": empty}

        parts = [path.sample(samples_per_path) for path in self._paths]
        result = {key: np.concatenate([part[key] for part in parts]) for key in ("t", "x", "y", "heading")}
        result["segment"] = np.repeat(np.arange(len(parts)), samples_per_path)
        return result

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[Path]:
        return iter(self._paths)

    def __getitem__(self, index: int) -> Path:
        return self._paths[index]

    def __repr__(self) -> str:
        return f"PathChain({len(self._paths)} paths, length={self.length:.2f})"


class PathBuilder:
    """Fluent builder for PathChains.

    Heading and direction setters apply to the most recently added path. The
    builder keeps its paths after build(), so a chain can be extended and
    rebuilt.

    Example:
        >>> chain = (
        ...     PathBuilder()
        ...     .add_bezier_line(Point(0, 0), Point(24, 0))
        ...     .set_constant_heading_interpolation(0.0)
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        self._paths: List[Path] = []

    def add_path(self, path: Union[Path, BezierCurve]) -> "PathBuilder":
        """Append a path, wrapping bare curves in a Path with tangent heading."""
        if isinstance(path, BezierCurve):
            path = Path(path)
        elif not isinstance(path, Path):
            raise TypeError(f"Expected Path or BezierCurve, got {type(path).__name__}")
        self._paths.append(path)
        return self

    def add_paths(self, *paths: Union[Path, BezierCurve]) -> "PathBuilder":
        for path in paths:
            self.add_path(path)
        return self

    def add_bezier_line(self, start: Point, end: Point) -> "PathBuilder":
        return self.add_path(BezierLine(start, end))

    def add_bezier_curve(self, *control_points: Point) -> "PathBuilder":
        return self.add_path(BezierCurve(*control_points))

    def _last_path(self) -> Path:
        if not self._paths:
            raise ValueError("PathBuilder has no paths to configure; add a path first")
        return self._paths[-1]

    def set_constant_heading_interpolation(self, heading: float) -> "PathBuilder":
        self._last_path().set_constant_heading_interpolation(heading)
        return self

    def set_linear_heading_interpolation(
        self, start_heading: float, end_heading: float, end_time: float = DEFAULT_LINEAR_HEADING_END_TIME
    ) -> "PathBuilder":
        self._last_path().set_linear_heading_interpolation(start_heading, end_heading, end_time)
        return self

    def set_tangent_heading_interpolation(self) -> "PathBuilder":
        self._last_path().set_tangent_heading_interpolation()
        return self

    def set_reversed(self, reverse: bool) -> "PathBuilder":
        self._last_path().set_reversed(reverse)
        return self

    def build(self) -> PathChain:
        return PathChain(*self._paths)

    @property
    def last_path(self) -> Optional[Path]:
        return self._paths[-1] if self._paths else None

    def __len__(self) -> int:
        return len(self._paths)
