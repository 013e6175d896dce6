# tests/test_follower.py
import math

import pytest

from path_weaver.chain import PathBuilder, PathChain
from path_weaver.follower import Follower
from path_weaver.geometry import Point, Pose
from path_weaver.knot import Knot
from path_weaver.model import forward_kinematics, integrate_pose, inverse_kinematics
from path_weaver.weaver import HeadingMode, PathWeaver


# ---- kinematics ----
def test_inverse_and_forward_kinematics_round_trip():
    v_left, v_right = inverse_kinematics(20.0, 1.0, wheelbase=14.0)
    assert (v_left, v_right) == pytest.approx((13.0, 27.0))
    assert forward_kinematics(v_left, v_right, wheelbase=14.0) == pytest.approx((20.0, 1.0))


def test_inverse_kinematics_clamps_wheels():
    v_left, v_right = inverse_kinematics(100.0, 0.0)
    assert v_left == v_right == 60.0


def test_integrate_pose_straight_and_arc():
    straight = integrate_pose(Pose(0.0, 0.0, 0.0), 10.0, 0.0, 0.5)
    assert (straight.x, straight.y, straight.heading) == pytest.approx((5.0, 0.0, 0.0))

    # quarter circle of radius 10
    arc = integrate_pose(Pose(0.0, 0.0, 0.0), 10.0 * math.pi / 2, math.pi / 2, 1.0)
    assert (arc.x, arc.y, arc.heading) == pytest.approx((10.0, 10.0, math.pi / 2))


# ---- follower ----
def test_path_builder_is_fresh_each_call():
    follower = Follower()
    first, second = follower.path_builder(), follower.path_builder()
    assert isinstance(first, PathBuilder)
    assert first is not second


def test_control_requires_chain():
    follower = Follower()
    assert not follower.is_busy()
    with pytest.raises(RuntimeError):
        follower.compute_control()
    with pytest.raises(RuntimeError):
        follower.simulate()
    with pytest.raises(ValueError):
        follower.follow_path(PathChain())


def test_adaptive_lookahead_is_clamped():
    follower = Follower(min_lookahead=6.0, max_lookahead=24.0, lookahead_time=0.3, lookahead_offset=4.0)
    assert follower.compute_adaptive_lookahead(0.0) == 6.0
    assert follower.compute_adaptive_lookahead(20.0) == pytest.approx(10.0)
    assert follower.compute_adaptive_lookahead(500.0) == 24.0
    assert Follower(adaptive=False, max_lookahead=18.0).compute_adaptive_lookahead(5.0) == 18.0


def test_straight_chain_commands_no_turn():
    follower = Follower()
    chain = follower.path_builder().add_bezier_line(Point(0, 0), Point(48, 0)).build()
    follower.follow_path(chain)
    v_cmd, omega_cmd = follower.compute_control(Pose(0.0, 0.0, 0.0))
    assert v_cmd == pytest.approx(follower.cruise_velocity)
    assert omega_cmd == pytest.approx(0.0, abs=1e-9)
    assert follower.is_busy()


def test_simulate_straight_line_reaches_end():
    follower = Follower(start_pose=Pose(0.0, 0.0, 0.0))
    chain = follower.path_builder().add_bezier_line(Point(0, 0), Point(48, 0)).build()
    follower.follow_path(chain)
    trajectory = follower.simulate()

    assert not follower.is_busy()
    assert math.hypot(follower.pose.x - 48.0, follower.pose.y) <= follower.end_tolerance
    assert len(trajectory["t"]) == len(trajectory["x"]) > 1
    assert trajectory["t"][-1] < 5.0


def test_simulate_woven_cubic_reaches_end():
    follower = Follower(start_pose=Pose(0.0, 0.0, 0.0))
    a = Knot(Pose(0.0, 0.0, 0.0), 12.0)
    b = Knot(Pose(48.0, 24.0, 0.0), 12.0)
    chain = PathWeaver.from_follower(follower).weave_cubic(HeadingMode.TANGENT, a, b).last_chain

    follower.follow_path(chain)
    follower.simulate()
    assert not follower.is_busy()
    assert math.hypot(follower.pose.x - 48.0, follower.pose.y - 24.0) <= follower.end_tolerance


def test_simulate_closed_square_drives_whole_loop():
    follower = Follower(start_pose=Pose(0.0, 0.0, 0.0))
    a = Knot(Pose(0.0, 0.0, 0.0), 12.0)
    b = Knot(Pose(48.0, 0.0, math.pi / 2), 12.0)
    c = Knot(Pose(48.0, 48.0, math.pi), 12.0)
    d = Knot(Pose(0.0, 48.0, 3 * math.pi / 2), 12.0)
    chain = PathWeaver.from_follower(follower).weave(HeadingMode.TANGENT, False, a, b, c, d, a).last_chain

    follower.follow_path(chain)
    # Starting on the closed chain's end point does not finish it
    assert follower.compute_control() != (0.0, 0.0)
    assert follower.is_busy()

    trajectory = follower.simulate()
    assert not follower.is_busy()
    assert trajectory["x"].max() > 40.0
    assert trajectory["y"].max() > 40.0
    assert math.hypot(follower.pose.x, follower.pose.y) <= follower.end_tolerance


def test_heading_goal_tracks_chain():
    follower = Follower()
    chain = (
        follower.path_builder()
        .add_bezier_line(Point(0, 0), Point(24, 0))
        .set_constant_heading_interpolation(1.0)
        .build()
    )
    follower.follow_path(chain)
    assert follower.heading_goal() == pytest.approx(1.0)
