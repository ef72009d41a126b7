import math

import pytest

from dwbnav.messages import (
    Header,
    Path2D,
    PoseStamped,
    Quaternion,
    Trajectory2D,
    quaternion_from_rpy,
    quaternion_from_yaw,
    yaw_from_quaternion,
)


def test_default_quaternion_is_identity():
    q = Quaternion()
    assert (q.x, q.y, q.z, q.w) == (0.0, 0.0, 0.0, 1.0)


def test_zero_yaw_gives_identity():
    assert quaternion_from_yaw(0.0) == Quaternion(0.0, 0.0, 0.0, 1.0)


def test_half_turn_about_z():
    q = quaternion_from_yaw(math.pi)
    assert q.x == 0.0
    assert q.y == 0.0
    assert q.z == pytest.approx(1.0)
    assert q.w == pytest.approx(0.0, abs=1e-12)


def test_yaw_matches_rpy_with_zero_roll_pitch():
    assert quaternion_from_yaw(0.987) == quaternion_from_rpy(0.0, 0.0, 0.987)


@pytest.mark.parametrize("yaw", [0.0, 0.123, -0.5, 1.5, 3.0, -3.0, math.pi / 2])
def test_yaw_round_trip(yaw):
    assert yaw_from_quaternion(quaternion_from_yaw(yaw)) == pytest.approx(yaw)


@pytest.mark.parametrize("rpy", [(0.5, 1.0, 1.5), (0.1, -0.2, 0.3), (2.0, 0.4, -1.0)])
def test_rpy_gives_unit_quaternion(rpy):
    q = quaternion_from_rpy(*rpy)
    norm = math.sqrt(q.x**2 + q.y**2 + q.z**2 + q.w**2)
    assert norm == pytest.approx(1.0)


def test_yaw_independent_of_quaternion_scale():
    q = quaternion_from_yaw(0.7)
    scaled = Quaternion(q.x * 2, q.y * 2, q.z * 2, q.w * 2)
    assert yaw_from_quaternion(scaled) == pytest.approx(0.7)


def test_yaw_with_small_roll_pitch():
    q = quaternion_from_rpy(0.1, 0.2, 0.3)
    assert yaw_from_quaternion(q) == pytest.approx(0.3)


def test_containers_do_not_share_defaults():
    a, b = Path2D(), Path2D()
    a.poses.append(None)
    assert b.poses == []
    t1, t2 = Trajectory2D(), Trajectory2D()
    t1.time_offsets.append(1.0)
    assert t2.time_offsets == []


def test_stamped_defaults():
    ps = PoseStamped()
    assert ps.header == Header("", 0.0)
    assert ps.pose.orientation == Quaternion()