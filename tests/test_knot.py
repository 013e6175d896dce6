# tests/test_knot.py
import math

import pytest

from path_weaver.geometry import Point, Pose, Vector
from path_weaver.knot import Knot


def _knot():
    return Knot(Pose(3.0, 4.0, 0.5), Vector(2.0, 1.0))


def test_pos_point_is_pose_position():
    knot = _knot()
    assert knot.pos_point() == Point(3.0, 4.0)


def test_tangent_points_offset_by_tangent():
    knot = _knot()
    tangent = knot.tangent_vector
    forward = knot.tangent_point()
    reflected = knot.reflected_tangent_point()

    assert (forward.x - 3.0, forward.y - 4.0) == pytest.approx((tangent.x_component, tangent.y_component))
    assert (reflected.x - 3.0, reflected.y - 4.0) == pytest.approx((-tangent.x_component, -tangent.y_component))


def test_reflect_tangent_rotates_by_pi_and_back():
    knot = _knot()
    x0, y0 = knot.tangent_vector.x_component, knot.tangent_vector.y_component

    knot.reflect_tangent()
    assert knot.tangent_vector.x_component == pytest.approx(-x0)
    assert knot.tangent_vector.y_component == pytest.approx(-y0)
    assert knot.tangent_vector.magnitude == pytest.approx(2.0)

    knot.reflect_tangent()
    assert knot.tangent_vector.x_component == pytest.approx(x0)
    assert knot.tangent_vector.y_component == pytest.approx(y0)


def test_reflect_swaps_tangent_points():
    knot = _knot()
    forward = knot.tangent_point()
    knot.reflect_tangent()
    reflected_after = knot.reflected_tangent_point()
    assert (reflected_after.x, reflected_after.y) == pytest.approx((forward.x, forward.y))


def test_tangent_vector_is_live_alias():
    tangent = Vector(1.0, 0.0)
    knot = Knot(Pose(0.0, 0.0, 0.0), tangent)
    assert knot.tangent_vector is tangent

    held = knot.tangent_vector
    knot.reflect_tangent()
    assert held.theta == pytest.approx(math.pi)


def test_length_constructor_aligns_with_heading():
    pose = Pose(1.0, 1.0, math.pi / 2)
    for knot in (Knot(pose, 5.0), Knot.aligned(pose, 5.0)):
        assert knot.pose is pose
        assert knot.tangent_vector.magnitude == pytest.approx(5.0)
        assert knot.tangent_vector.x_component == pytest.approx(0.0, abs=1e-9)
        assert knot.tangent_vector.y_component == pytest.approx(5.0)
        tip = knot.tangent_point()
        assert (tip.x, tip.y) == pytest.approx((1.0, 6.0))

    assert Knot(pose, 3).tangent_vector.magnitude == pytest.approx(3.0)


def test_rejects_bad_tangent():
    with pytest.raises(TypeError):
        Knot(Pose(), "12")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        Knot(Pose(), True)
