"""Conversions between 2D and 3D pose, twist and path messages."""

from __future__ import annotations

import copy
from collections.abc import Iterable

from .messages import (
    Header,
    Path,
    Path2D,
    Point,
    Pose,
    Pose2D,
    Pose2DStamped,
    PoseStamped,
    Twist,
    Twist2D,
    Vector3,
    quaternion_from_yaw,
    yaw_from_quaternion,
)


def twist_2d_to_3d(cmd_vel_2d: Twist2D) -> Twist:
    """Convert a planar twist into a 3D twist."""
    return Twist(
        linear=Vector3(cmd_vel_2d.x, cmd_vel_2d.y, 0.0),
        angular=Vector3(0.0, 0.0, cmd_vel_2d.theta),
    )


def twist_3d_to_2d(cmd_vel: Twist) -> Twist2D:
    """Project a 3D twist onto the plane."""
    return Twist2D(cmd_vel.linear.x, cmd_vel.linear.y, cmd_vel.angular.z)


def pose_to_pose_2d(pose: Pose) -> Pose2D:
    """Project a 3D pose onto the plane, keeping only its yaw."""
    return Pose2D(pose.position.x, pose.position.y, yaw_from_quaternion(pose.orientation))


def pose_stamped_to_pose_2d(pose: PoseStamped) -> Pose2DStamped:
    """Project a stamped 3D pose onto the plane."""
    return Pose2DStamped(header=copy.copy(pose.header), pose=pose_to_pose_2d(pose.pose))


def pose_2d_to_pose(pose2d: Pose2D) -> Pose:
    """Lift a planar pose into 3D with a rotation about z."""
    return Pose(
        position=Point(pose2d.x, pose2d.y, 0.0),
        orientation=quaternion_from_yaw(pose2d.theta),
    )


def pose_2d_stamped_to_pose_stamped(pose2d: Pose2DStamped) -> PoseStamped:
    """Lift a stamped planar pose into 3D."""
    return PoseStamped(header=copy.copy(pose2d.header), pose=pose_2d_to_pose(pose2d.pose))


def pose_2d_to_pose_stamped(pose2d: Pose2D, frame: str, stamp: float) -> PoseStamped:
    """Lift a planar pose into 3D and stamp it with the given frame and time."""
    return PoseStamped(header=Header(frame, stamp), pose=pose_2d_to_pose(pose2d))


def poses_to_path(poses: Iterable[PoseStamped]) -> Path:
    """Collect stamped poses into a path whose header is taken from the first pose."""
    poses = [copy.deepcopy(p) for p in poses]
    if not poses:
        return Path()
    return Path(header=copy.copy(poses[0].header), poses=poses)


def path_to_path_2d(path: Path) -> Path2D:
    """Project every pose of a 3D path onto the plane."""
    return Path2D(
        header=copy.copy(path.header),
        poses=[pose_to_pose_2d(p.pose) for p in path.poses],
    )


def poses_2d_to_path(poses: Iterable[Pose2D], frame: str, stamp: float) -> Path:
    """Build a 3D path from planar poses, all stamped with the given frame and time."""
    return Path(
        header=Header(frame, stamp),
        poses=[pose_2d_to_pose_stamped(p, frame, stamp) for p in poses],
    )


def path_2d_to_path(path2d: Path2D) -> Path:
    """Lift a planar path into 3D; each pose carries the path's header."""
    return Path(
        header=copy.copy(path2d.header),
        poses=[
            PoseStamped(header=copy.copy(path2d.header), pose=pose_2d_to_pose(p))
            for p in path2d.poses
        ],
    )