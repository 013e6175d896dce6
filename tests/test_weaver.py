# tests/test_weaver.py
import math

import pytest

from path_weaver.bezier import BezierLine
from path_weaver.chain import PathBuilder
from path_weaver.follower import Follower
from path_weaver.geometry import Pose
from path_weaver.knot import Knot
from path_weaver.weaver import HeadingMode, PathWeaver


# ---- helpers ----
def _knots(n=4):
    headings = [0.3, 1.2, 0.8, 2.0, 0.1]
    return [Knot(Pose(24.0 * i, 12.0 * (i % 2), headings[i % len(headings)]), 8.0) for i in range(n)]


def _weaver():
    return PathWeaver(PathBuilder())


# ---- weave ----
@pytest.mark.parametrize("count", [0, 1])
def test_weave_needs_two_knots(count):
    weaver = _weaver()
    with pytest.raises(ValueError, match="at least two knots"):
        weaver.weave(HeadingMode.TANGENT, False, *_knots(count))
    assert weaver.history == []


def test_weave_rejects_knot_list_with_hint():
    weaver = _weaver()
    with pytest.raises(ValueError, match="separate arguments"):
        weaver.weave(HeadingMode.TANGENT, False, _knots(2))
    assert weaver.history == []


@pytest.mark.parametrize("mode", ["linear", None, 1])
def test_weave_rejects_unknown_heading_mode_without_mutation(mode):
    weaver = _weaver()
    with pytest.raises(ValueError, match="heading mode"):
        weaver.weave(mode, False, *_knots(2))
    assert weaver.history == []


@pytest.mark.parametrize("n", [2, 3, 5])
def test_weave_appends_one_chain_of_n_minus_one_segments(n):
    weaver = _weaver()
    result = weaver.weave(HeadingMode.LINEAR, False, *_knots(n))
    assert result is weaver
    assert len(weaver.history) == 1
    assert len(weaver.history[0]) == n - 1


def test_weave_line_is_straight_between_positions():
    a, b = _knots(2)
    chain = _weaver().weave_line(HeadingMode.TANGENT, a, b).last_chain
    assert len(chain) == 1
    curve = chain[0].curve
    assert isinstance(curve, BezierLine)
    assert curve.control_points == [a.pos_point(), b.pos_point()]


def test_weave_cubic_control_points():
    a, b = _knots(2)
    chain = _weaver().weave_cubic(HeadingMode.TANGENT, a, b).last_chain
    assert len(chain) == 1
    assert chain[0].curve.control_points == [
        a.pos_point(),
        a.tangent_point(),
        b.reflected_tangent_point(),
        b.pos_point(),
    ]


def test_constant_heading_uses_segment_start_knot():
    knots = _knots(3)
    chain = _weaver().weave(HeadingMode.CONSTANT, False, *knots).last_chain
    for i, path in enumerate(chain):
        for t in (0.0, 0.5, 1.0):
            assert path.get_heading_goal(t) == pytest.approx(knots[i].pose.heading)


def test_constant_heading_normalizes_negative_knot_heading():
    a = Knot(Pose(0.0, 0.0, -math.pi / 2), 6.0)
    b = Knot(Pose(24.0, 0.0, -math.pi / 2), 6.0)
    path = _weaver().weave_cubic(HeadingMode.CONSTANT, a, b).last_chain[0]
    for t in (0.0, 0.5, 1.0):
        goal = path.get_heading_goal(t)
        assert goal == pytest.approx(3 * math.pi / 2)
        assert goal % (2 * math.pi) == pytest.approx(a.pose.heading % (2 * math.pi))


def test_linear_heading_spans_knot_headings():
    knots = _knots(3)
    chain = _weaver().weave(HeadingMode.LINEAR, True, *knots).last_chain
    for i, path in enumerate(chain):
        assert path.get_heading_goal(0.0) == pytest.approx(knots[i].pose.heading)
        assert path.get_heading_goal(1.0) == pytest.approx(knots[i + 1].pose.heading)


def test_tangent_heading_follows_line_direction():
    a = Knot(Pose(0.0, 0.0, 2.0), 5.0)
    b = Knot(Pose(10.0, 10.0, 2.0), 5.0)
    path = _weaver().weave_line(HeadingMode.TANGENT, a, b).last_chain[0]
    assert path.get_heading_goal(0.3) == pytest.approx(math.pi / 4)


def test_cubic_chain_keeps_tangent_direction_across_joints():
    knots = _knots(4)
    chain = _weaver().weave(HeadingMode.TANGENT, False, *knots).last_chain
    for incoming, outgoing in zip(chain, chain.paths[1:]):
        end = incoming.get_tangent_vector(1.0)
        start = outgoing.get_tangent_vector(0.0)
        assert end.cross(start) == pytest.approx(0.0, abs=1e-6)
        assert end.dot(start) > 0.0


def test_weave_does_not_touch_builder():
    builder = PathBuilder()
    weaver = PathWeaver(builder)
    weaver.weave(HeadingMode.TANGENT, False, *_knots(3))
    assert weaver.builder is builder
    assert len(builder) == 0


def test_fluent_chaining_accumulates_history_in_order():
    a, b, c = _knots(3)
    weaver = _weaver().weave_line(HeadingMode.CONSTANT, a, b).weave_cubic(HeadingMode.TANGENT, b, c)
    assert len(weaver.history) == 2
    assert isinstance(weaver.history[0][0].curve, BezierLine)
    assert weaver.last_chain is weaver.history[1]


# ---- repeat ----
def test_repeat_zero_does_nothing():
    calls = []
    weaver = _weaver()
    assert weaver.repeat(0, lambda i, w: calls.append(i)) is weaver
    assert weaver.repeat(-2, lambda i, w: calls.append(i)) is weaver
    assert calls == []
    assert weaver.history == []


def test_repeat_passes_index_and_same_weaver():
    seen = []
    weaver = _weaver()
    weaver.repeat(3, lambda i, w: seen.append((i, w)))
    assert [i for i, _ in seen] == [0, 1, 2]
    assert all(w is weaver for _, w in seen)


def test_repeat_scripts_a_zigzag():
    knots = _knots(5)
    weaver = _weaver().repeat(4, lambda i, w: w.weave_cubic(HeadingMode.TANGENT, knots[i], knots[i + 1]))
    assert len(weaver.history) == 4
    assert all(len(chain) == 1 for chain in weaver.history)


def test_repeat_propagates_errors():
    def boom(i, w):
        raise RuntimeError(f"failed on {i}")

    with pytest.raises(RuntimeError, match="failed on 0"):
        _weaver().repeat(2, boom)

    weaver = _weaver()
    with pytest.raises(ValueError):
        weaver.repeat(2, lambda i, w: w.weave(HeadingMode.TANGENT, True, _knots(1)[0]))


# ---- accessors ----
def test_history_can_be_replaced_wholesale():
    weaver = _weaver().weave(HeadingMode.TANGENT, True, *_knots(3))
    weaver.history = []
    weaver.weave(HeadingMode.TANGENT, True, *_knots(2))
    assert len(weaver.history) == 1


def test_builder_can_be_replaced():
    weaver = _weaver()
    other = PathBuilder()
    weaver.builder = other
    assert weaver.builder is other


def test_last_chain_and_clear():
    weaver = _weaver()
    with pytest.raises(IndexError):
        weaver.last_chain
    weaver.weave(HeadingMode.TANGENT, True, *_knots(2))
    assert weaver.clear() is weaver
    assert weaver.history == []


def test_from_follower_takes_its_path_builder():
    weaver = PathWeaver.from_follower(Follower())
    assert isinstance(weaver.builder, PathBuilder)
