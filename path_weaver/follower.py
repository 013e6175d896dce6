"""Pure Pursuit follower for woven path chains.

This module implements a pure pursuit path following algorithm that:
- Hands out PathBuilders for constructing chains
- Samples the chain it is asked to follow
- Finds a lookahead point on the sampled chain
- Computes velocity and angular velocity commands
- Optionally simulates the robot driving the chain with a differential drive model
"""

import logging
import math
from typing import Dict, Optional, Tuple

import numpy as np
import numpy.typing as npt

from .chain import PathBuilder, PathChain
from .config import (
    FOLLOWER_CRUISE_VELOCITY,
    FOLLOWER_END_TOLERANCE,
    FOLLOWER_LOOKAHEAD_OFFSET,
    FOLLOWER_LOOKAHEAD_TIME,
    FOLLOWER_MAX_LOOKAHEAD,
    FOLLOWER_MIN_LOOKAHEAD,
    FOLLOWER_SLOWDOWN_DISTANCE,
    PATH_SAMPLES_PER_SEGMENT,
    SIMULATION_DT,
    SIMULATION_MAX_TIME,
)
from .geometry import Pose
from .model import forward_kinematics, integrate_pose, inverse_kinematics
from .path import heading_error


class Follower:
    """Pure Pursuit follower driving PathChains.

    Attributes:
        pose: Current pose estimate of the robot.
        chain: Chain currently being followed, or None.
    """

    def __init__(
        self,
        start_pose: Optional[Pose] = None,
        cruise_velocity: float = FOLLOWER_CRUISE_VELOCITY,
        adaptive: bool = True,
        lookahead_time: float = FOLLOWER_LOOKAHEAD_TIME,
        lookahead_offset: float = FOLLOWER_LOOKAHEAD_OFFSET,
        min_lookahead: float = FOLLOWER_MIN_LOOKAHEAD,
        max_lookahead: float = FOLLOWER_MAX_LOOKAHEAD,
        end_tolerance: float = FOLLOWER_END_TOLERANCE,
        samples_per_path: int = PATH_SAMPLES_PER_SEGMENT,
    ):
        """Initialize the follower.

        Args:
            start_pose: Initial robot pose. Default: origin facing +x.
            cruise_velocity: Forward velocity away from the chain end (in/s).
            adaptive: If True, use velocity-adaptive lookahead. Default: True.
            lookahead_time: Time-based lookahead gain (seconds).
                Lookahead = lookahead_time * |v| + lookahead_offset
            lookahead_offset: Minimum base lookahead (in).
            min_lookahead: Minimum lookahead distance (in).
            max_lookahead: Maximum lookahead distance (in). Also used as the
                fixed lookahead when adaptive=False.
            end_tolerance: Distance to the final point that ends following (in).
                Only checked once progress has reached the chain's last path.
            samples_per_path: Resolution used when sampling the chain.
        """
        self.pose = start_pose if start_pose is not None else Pose()
        self.cruise_velocity = cruise_velocity
        self.adaptive = adaptive
        self.lookahead_time = lookahead_time
        self.lookahead_offset = lookahead_offset
        self.min_lookahead = min_lookahead
        self.max_lookahead = max_lookahead
        self.end_tolerance = end_tolerance
        self.samples_per_path = samples_per_path
        self.lookahead_distance = min_lookahead  # Updated every control step

        self.chain: Optional[PathChain] = None
        self.path_x: npt.NDArray[np.float64] = np.array([])
        self.path_y: npt.NDArray[np.float64] = np.array([])
        self.path_heading: npt.NDArray[np.float64] = np.array([])
        self.path_arc: npt.NDArray[np.float64] = np.array([])  # Cumulative arc length per sample
        self.progress_idx = 0
        self._finished = True

    def path_builder(self) -> PathBuilder:
        """Return a fresh PathBuilder for constructing chains."""
        return PathBuilder()

    def follow_path(self, chain: PathChain) -> None:
        """Start following a chain from its beginning.

        Raises:
            ValueError: If the chain has no paths.
        """
        if len(chain) == 0:
            raise ValueError("Cannot follow an empty PathChain")
        samples = chain.sample(self.samples_per_path)
        self.chain = chain
        self.path_x = samples["x"]
        self.path_y = samples["y"]
        self.path_heading = samples["heading"]
        self.path_arc = np.concatenate(([0.0], np.cumsum(np.hypot(np.diff(self.path_x), np.diff(self.path_y)))))
        self.progress_idx = 0
        self._finished = False
        logging.debug(f"Following chain with {len(chain)} path(s), length {chain.length:.2f}")

    def is_busy(self) -> bool:
        return self.chain is not None and not self._finished

    def compute_adaptive_lookahead(self, velocity: float) -> float:
        """Compute velocity-adaptive lookahead distance, clamped to [min, max]."""
        if not self.adaptive:
            return self.max_lookahead

        lookahead = self.lookahead_time * abs(velocity) + self.lookahead_offset
        return max(self.min_lookahead, min(self.max_lookahead, lookahead))

    def find_closest_point(self, current_x: float, current_y: float) -> int:
        """Find index of the closest sample ahead of the current progress.

        The search window only spans one path's worth of samples so that a
        chain crossing itself does not make the follower skip ahead.
        """
        end_idx = min(len(self.path_x), self.progress_idx + self.samples_per_path)
        window_x = self.path_x[self.progress_idx:end_idx]
        window_y = self.path_y[self.progress_idx:end_idx]
        distances = np.hypot(window_x - current_x, window_y - current_y)
        return self.progress_idx + int(np.argmin(distances))

    def find_lookahead_point(
        self, current_x: float, current_y: float, start_idx: int
    ) -> Tuple[float, float, int]:
        """Find lookahead point on the chain at the target distance ahead.

        Returns:
            Tuple of (lookahead_x, lookahead_y, lookahead_idx)
        """
        for i in range(start_idx, len(self.path_x)):
            distance = math.hypot(self.path_x[i] - current_x, self.path_y[i] - current_y)
            if distance >= self.lookahead_distance:
                return float(self.path_x[i]), float(self.path_y[i]), i

        # Past the end of the chain: aim at the last point
        return float(self.path_x[-1]), float(self.path_y[-1]), len(self.path_x) - 1

    def heading_goal(self) -> float:
        """Heading goal of the chain at the current progress (rad)."""
        if self.chain is None:
            raise RuntimeError("Follower has no chain to follow")
        return float(self.path_heading[self.progress_idx])

    def compute_control(self, pose: Optional[Pose] = None) -> Tuple[float, float]:
        """Compute velocity commands using the pure pursuit algorithm.

        Args:
            pose: Robot pose. Default: the follower's own pose estimate.

        Returns:
            Tuple of (v_cmd, omega_cmd) in in/s and rad/s. Both are zero once
            the end of the chain has been reached.

        Raises:
            RuntimeError: If no chain is being followed.
        """
        if self.chain is None:
            raise RuntimeError("Follower has no chain to follow; call follow_path() first")
        if pose is None:
            pose = self.pose

        self.progress_idx = self.find_closest_point(pose.x, pose.y)

        # Only the final path can finish the chain; a closed chain starts at its end
        end_distance = math.hypot(self.path_x[-1] - pose.x, self.path_y[-1] - pose.y)
        on_final_path = self.progress_idx >= len(self.path_x) - self.samples_per_path
        if on_final_path and end_distance <= self.end_tolerance:
            self._finished = True
            return 0.0, 0.0

        # Ramp velocity down over the last stretch of the chain
        remaining = max(float(self.path_arc[-1] - self.path_arc[self.progress_idx]), end_distance)
        v_cmd = self.cruise_velocity * min(1.0, remaining / FOLLOWER_SLOWDOWN_DISTANCE)

        self.lookahead_distance = self.compute_adaptive_lookahead(v_cmd)
        lookahead_x, lookahead_y, _ = self.find_lookahead_point(pose.x, pose.y, self.progress_idx)

        angle_to_goal = math.atan2(lookahead_y - pose.y, lookahead_x - pose.x)
        alpha = heading_error(angle_to_goal, pose.heading)

        actual_distance = math.hypot(lookahead_x - pose.x, lookahead_y - pose.y)
        if actual_distance > 1e-3:
            # Curvature formula: kappa = 2*sin(alpha)/L
            curvature = 2.0 * math.sin(alpha) / actual_distance
            omega_cmd = v_cmd * curvature
        else:
            omega_cmd = 0.0

        return v_cmd, omega_cmd

    def update(self, dt: float) -> Tuple[float, float]:
        """Run one control step and advance the internal pose estimate.

        Returns:
            Tuple of (v_left, v_right) wheel velocities commanded this step.
        """
        v_cmd, omega_cmd = self.compute_control(self.pose)
        v_left, v_right = inverse_kinematics(v_cmd, omega_cmd)
        v, omega = forward_kinematics(v_left, v_right)
        self.pose = integrate_pose(self.pose, v, omega, dt)
        return v_left, v_right

    def simulate(
        self, dt: float = SIMULATION_DT, max_time: float = SIMULATION_MAX_TIME
    ) -> Dict[str, npt.NDArray[np.float64]]:
        """Drive the current chain to completion with the kinematic model.

        Args:
            dt: Integration time step (seconds).
            max_time: Simulated time limit (seconds).

        Returns:
            Dictionary containing:
                't': Time array in seconds
                'x', 'y', 'heading': Simulated pose arrays
                'v_left', 'v_right': Commanded wheel velocities

        Raises:
            RuntimeError: If no chain is being followed.
        """
        if self.chain is None:
            raise RuntimeError("Follower has no chain to follow; call follow_path() first")

        times = [0.0]
        xs = [self.pose.x]
        ys = [self.pose.y]
        headings = [self.pose.heading]
        v_lefts = [0.0]
        v_rights = [0.0]

        t = 0.0
        while t < max_time:
            v_left, v_right = self.update(dt)
            if not self.is_busy():
                break
            t += dt
            times.append(t)
            xs.append(self.pose.x)
            ys.append(self.pose.y)
            headings.append(self.pose.heading)
            v_lefts.append(v_left)
            v_rights.append(v_right)

        if self.is_busy():
            logging.warning(f"Simulation stopped after {max_time:.1f}s before reaching the chain end")
        else:
            logging.info(f"Chain completed in {t:.2f}s, final pose ({self.pose.x:.2f}, {self.pose.y:.2f})")

        return {
            "t": np.array(times),
            "x": np.array(xs),
            "y": np.array(ys),
            "heading": np.array(headings),
            "v_left": np.array(v_lefts),
            "v_right": np.array(v_rights),
        }
