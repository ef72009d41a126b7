import math

import pytest

from dwbnav.conversions import (
    path_2d_to_path,
    path_to_path_2d,
    pose_2d_stamped_to_pose_stamped,
    pose_2d_to_pose,
    pose_2d_to_pose_stamped,
    pose_stamped_to_pose_2d,
    pose_to_pose_2d,
    poses_2d_to_path,
    poses_to_path,
    twist_2d_to_3d,
    twist_3d_to_2d,
)
from dwbnav.messages import (
    Header,
    Path2D,
    Point,
    Pose,
    Pose2D,
    Pose2DStamped,
    PoseStamped,
    Twist2D,
    quaternion_from_rpy,
)


def _pose_stamped(x, y, yaw, frame, stamp):
    return PoseStamped(
        header=Header(frame, stamp),
        pose=Pose(position=Point(x, y, 0.0), orientation=quaternion_from_rpy(0, 0, yaw)),
    )


def test_poses_to_path_empty():
    path = poses_to_path([])
    assert len(path.poses) == 0


def test_poses_to_path_non_empty():
    time1, time2 = 10.5, 11.25
    poses = [
        _pose_stamped(1.0, 2.0, 0.123, "frame1_id", time1),
        _pose_stamped(4.0, 5.0, 0.987, "frame2_id", time2),
    ]
    path = poses_to_path(poses)
    assert len(path.poses) == 2
    assert path.poses[0].pose.position.x == 1.0
    assert path.poses[0].pose.position.y == 2.0
    assert path.poses[0].header.stamp == time1
    assert path.poses[0].header.frame_id == "frame1_id"
    assert path.poses[1].pose.position.x == 4.0
    assert path.poses[1].pose.position.y == 5.0
    assert path.poses[1].header.frame_id == "frame2_id"
    assert path.header.stamp == time1
    assert path.header.frame_id == "frame1_id"


def test_poses_to_path_copies_poses():
    pose = _pose_stamped(1.0, 2.0, 0.0, "a", 0.0)
    path = poses_to_path([pose])
    pose.pose.position.x = 99.0
    assert path.poses[0].pose.position.x == 1.0


def test_path_to_path_empty():
    path = path_2d_to_path(Path2D())
    assert len(path.poses) == 0


def test_path_to_path_non_empty():
    path2d = Path2D(poses=[Pose2D(1.0, 2.0, math.pi / 2.0), Pose2D(4.0, 5.0, math.pi)])
    path = path_2d_to_path(path2d)
    assert len(path.poses) == 2
    assert path.poses[0].pose.position.x == 1.0
    assert path.poses[0].pose.position.y == 2.0

    quat = quaternion_from_rpy(0, 0, math.pi / 2.0)
    assert path.poses[0].pose.orientation.w == quat.w
    assert path.poses[0].pose.orientation.x == quat.x
    assert path.poses[0].pose.orientation.y == quat.y
    assert path.poses[0].pose.orientation.z == quat.z

    assert path.poses[1].pose.position.x == 4.0
    assert path.poses[1].pose.position.y == 5.0
    quat = quaternion_from_rpy(0, 0, math.pi)
    assert path.poses[1].pose.orientation.w == quat.w
    assert path.poses[1].pose.orientation.x == quat.x
    assert path.poses[1].pose.orientation.y == quat.y
    assert path.poses[1].pose.orientation.z == quat.z


def test_path_2d_to_path_uses_path_header_for_each_pose():
    path2d = Path2D(header=Header("map", 3.0), poses=[Pose2D(1, 1, 0), Pose2D(2, 2, 0)])
    path = path_2d_to_path(path2d)
    assert path.header == Header("map", 3.0)
    assert all(p.header == Header("map", 3.0) for p in path.poses)


def test_twist_round_trip():
    twist = Twist2D(0.5, -0.25, 1.2)
    twist3d = twist_2d_to_3d(twist)
    assert twist3d.linear.x == 0.5
    assert twist3d.linear.y == -0.25
    assert twist3d.angular.z == 1.2
    assert twist_3d_to_2d(twist3d) == twist


@pytest.mark.parametrize("theta", [0.0, 0.4, -1.3, 2.9])
def test_pose_round_trip(theta):
    pose2d = Pose2D(3.0, -4.0, theta)
    back = pose_to_pose_2d(pose_2d_to_pose(pose2d))
    assert back.x == 3.0
    assert back.y == -4.0
    assert back.theta == pytest.approx(theta)


def test_stamped_pose_round_trip():
    stamped = Pose2DStamped(header=Header("odom", 7.5), pose=Pose2D(1.0, 2.0, 0.3))
    pose3d = pose_2d_stamped_to_pose_stamped(stamped)
    assert pose3d.header == Header("odom", 7.5)
    back = pose_stamped_to_pose_2d(pose3d)
    assert back.header == Header("odom", 7.5)
    assert back.pose.x == 1.0
    assert back.pose.theta == pytest.approx(0.3)


def test_pose_2d_to_pose_stamped_sets_header():
    ps = pose_2d_to_pose_stamped(Pose2D(1.0, 2.0, 0.5), "base", 4.0)
    assert ps.header == Header("base", 4.0)
    assert ps.pose.orientation == quaternion_from_rpy(0, 0, 0.5)


def test_poses_2d_to_path_and_back():
    poses = [Pose2D(0, 0, 0.1), Pose2D(1, 2, -0.2)]
    path = poses_2d_to_path(poses, "map", 2.0)
    assert path.header == Header("map", 2.0)
    assert [p.header.frame_id for p in path.poses] == ["map", "map"]
    path2d = path_to_path_2d(path)
    assert path2d.header == Header("map", 2.0)
    assert [(p.x, p.y) for p in path2d.poses] == [(0, 0), (1, 2)]
    assert [p.theta for p in path2d.poses] == pytest.approx([0.1, -0.2])