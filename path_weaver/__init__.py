"""Path Weaver - Multi-segment Path Authoring for Ground Robots

A small toolkit for authoring robot paths from waypoints ("knots") and turning
them into chains of bezier or line segments with configurable heading
interpolation.

## Architecture Overview

### Authoring Layer
- `knot.py` - Knot: a pose plus a tangent vector
- `weaver.py` - PathWeaver: fluent builder that weaves knots into path chains

### Path Layer
- `geometry.py` - Point, Vector and Pose primitives
- `bezier.py` - BezierCurve and BezierLine segments
- `path.py` - Path: a curve plus a heading interpolation policy
- `chain.py` - PathChain and PathBuilder

### Execution Layer
- `follower.py` - Pure Pursuit follower for chains
- `model.py` - Differential drive kinematics

### Output
- `export.py` - CSV export of sampled chains
- `plot_styles.py`, `visualization.py` - matplotlib plots
- `cli.py` - Command-line demo (`python -m path_weaver`)

## Quick Start

```python
from path_weaver import Follower, HeadingMode, Knot, PathWeaver, Pose

weaver = PathWeaver.from_follower(Follower())
a = Knot(Pose(0, 0, 0), 12.0)
b = Knot(Pose(48, 24, 0), 12.0)
weaver.weave_cubic(HeadingMode.TANGENT, a, b).weave_line(HeadingMode.CONSTANT, b, a)
print(weaver.history)
```

## Configuration

All tunable parameters are centralized in `config.py`.
"""

__version__ = "0.1.0"

# Export key classes for convenience
from .bezier import BezierCurve, BezierLine
from .chain import PathBuilder, PathChain
from .follower import Follower
from .geometry import Point, Pose, Vector
from .knot import Knot
from .path import HeadingInterpolation, Path
from .weaver import HeadingMode, PathWeaver

__all__ = [
    "Point",
    "Vector",
    "Pose",
    "BezierCurve",
    "BezierLine",
    "HeadingInterpolation",
    "Path",
    "PathChain",
    "PathBuilder",
    "Follower",
    "Knot",
    "HeadingMode",
    "PathWeaver",
]
