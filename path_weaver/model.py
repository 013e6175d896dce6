"""
Differential drive kinematic model used by the follower simulation.

This module converts between body velocities (v, omega) and individual wheel
velocities, and integrates a pose forward in time.
"""

import math

from .config import V_MAX, V_MIN, WHEELBASE
from .geometry import Pose


def inverse_kinematics(v_cmd: float, omega_cmd: float, wheelbase: float = WHEELBASE) -> tuple[float, float]:
    """
    Compute wheel velocities from desired linear and angular velocities.

    For a differential drive robot:
        v_left = v - (L/2) * omega
        v_right = v + (L/2) * omega

    where L is the wheelbase (distance between wheels).

    Args:
        v_cmd: Desired linear velocity of the robot center (in/s)
        omega_cmd: Desired angular velocity of the robot (rad/s)
                   Positive omega results in counter-clockwise rotation
        wheelbase: Distance between the wheels (in)

    Returns:
        tuple[float, float]: (v_left, v_right) wheel velocities in in/s,
                            clamped to the range [V_MIN, V_MAX]
    """
    v_left = v_cmd - (wheelbase / 2.0) * omega_cmd
    v_right = v_cmd + (wheelbase / 2.0) * omega_cmd

    # Clamp velocities to respect actuator limits
    v_left = max(V_MIN, min(V_MAX, v_left))
    v_right = max(V_MIN, min(V_MAX, v_right))

    return v_left, v_right


def forward_kinematics(v_left: float, v_right: float, wheelbase: float = WHEELBASE) -> tuple[float, float]:
    """Compute body velocities (v, omega) from wheel velocities."""
    v = (v_left + v_right) / 2.0
    omega = (v_right - v_left) / wheelbase
    return v, omega


def integrate_pose(pose: Pose, v: float, omega: float, dt: float) -> Pose:
    """Advance a pose by one time step using exact unicycle integration.

    Args:
        pose: Current pose.
        v: Linear velocity (in/s).
        omega: Angular velocity (rad/s).
        dt: Time step (s).

    Returns:
        Pose after dt seconds.
    """
    heading = pose.heading
    if abs(omega) < 1e-9:
        x = pose.x + v * math.cos(heading) * dt
        y = pose.y + v * math.sin(heading) * dt
    else:
        # Arc of radius v / omega
        radius = v / omega
        new_heading = heading + omega * dt
        x = pose.x + radius * (math.sin(new_heading) - math.sin(heading))
        y = pose.y - radius * (math.cos(new_heading) - math.cos(heading))
        heading = new_heading
    return Pose(x, y, heading)
