"""Configuration parameters for the path weaving toolkit.

This module centralizes all configuration parameters including:
- Curve approximation and sampling resolution
- Heading interpolation defaults
- Physical robot parameters used by the follower simulation
- Pure pursuit follower gains
- Visualization settings

All parameters are documented with their purpose and valid ranges.
"""

import math

# ============================================================================
# Curve Approximation Parameters
# ============================================================================

BEZIER_APPROXIMATION_STEPS = 1000
"""Number of chord steps used to approximate bezier arc length.

Higher values = more accurate length, slower construction.
1000 steps keeps the chord error well under a millimeter for field-sized curves.
"""

PATH_SAMPLES_PER_SEGMENT = 50
"""Default number of samples taken from each path when sampling a chain.

Used by the follower, the CSV exporter and the plots.
"""

PARAMETER_EPSILON = 1e-9
"""Tolerance used when comparing curve parameters and vector magnitudes."""


# ============================================================================
# Knot and Heading Defaults
# ============================================================================

DEFAULT_TANGENT_LENGTH = 12.0
"""Default tangent length for heading-aligned knots (field units).

Longer tangents pull the curve further along the knot heading before it bends
toward the next knot.
"""

DEFAULT_LINEAR_HEADING_END_TIME = 1.0
"""Path parameter at which linear heading interpolation reaches the end heading.

Range: (0, 1]. 1.0 spreads the turn over the whole path.
"""

REVERSED_HEADING_OFFSET = math.pi
"""Offset added to the tangent heading when a path is driven in reverse (rad)."""


# ============================================================================
# Physical Robot Parameters
# ============================================================================

WHEELBASE = 14.0
"""Distance between left and right wheels (field units, inches)."""

V_MIN = -60.0
"""Minimum wheel velocity (in/s). Hardware limit."""

V_MAX = 60.0
"""Maximum wheel velocity (in/s). Hardware limit."""


# ============================================================================
# Path Following Parameters (Pure Pursuit)
# ============================================================================

FOLLOWER_CRUISE_VELOCITY = 40.0
"""Nominal forward velocity while following a chain (in/s)."""

FOLLOWER_LOOKAHEAD_TIME = 0.3
"""Time-based lookahead gain for adaptive mode (seconds).

Lookahead distance = FOLLOWER_LOOKAHEAD_TIME * |v| + FOLLOWER_LOOKAHEAD_OFFSET
"""

FOLLOWER_LOOKAHEAD_OFFSET = 4.0
"""Minimum base lookahead offset (in).

Ensures minimum lookahead even at zero velocity.
"""

FOLLOWER_MIN_LOOKAHEAD = 6.0
"""Minimum adaptive lookahead distance (in)."""

FOLLOWER_MAX_LOOKAHEAD = 24.0
"""Maximum adaptive lookahead distance (in)."""

FOLLOWER_END_TOLERANCE = 1.0
"""Distance to the final chain point at which following is considered done (in)."""

FOLLOWER_SLOWDOWN_DISTANCE = 12.0
"""Distance from the end of the chain over which velocity ramps down (in)."""

SIMULATION_DT = 0.02
"""Integration time step for follower simulation (seconds)."""

SIMULATION_MAX_TIME = 30.0
"""Upper bound on simulated time before giving up (seconds)."""


# ============================================================================
# Visualization Colors
# ============================================================================

COLOR_ORANGE = "#f74823"
"""Primary color - used for woven chains and simulated trajectories."""

COLOR_BLUE = "#2374f7"
"""Secondary color - used for knots and reference geometry."""

COLOR_CREAM = "#fffdee"
"""Light color for text and labels on dark backgrounds."""

COLOR_TAUPE = "#686a5f"
"""Neutral color for guides, grids, and tangent handles."""

COLOR_YELLOW_ORANGE = "#ffa726"
"""Accent color for highlights such as heading arrows."""

COLOR_DARK_BLUE = "#0d1b2a"
"""Dark background color for dark mode displays."""

# Terminal color codes (ANSI escape sequences)
TERM_ORANGE = "\033[38;2;247;72;35m"
"""Terminal color code for orange (RGB: 247, 72, 35)."""

TERM_BLUE = "\033[38;2;35;116;247m"
"""Terminal color code for complementary blue (RGB: 35, 116, 247)."""

TERM_RESET = "\033[0m"
"""Terminal color reset code."""
