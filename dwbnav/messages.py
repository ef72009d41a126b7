"""Plain message types for 2D and 3D poses, twists and paths."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass
class Header:
    """Frame name and timestamp (in seconds) of a message."""

    frame_id: str = ""
    stamp: float = 0.0


@dataclass
class Point:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class Quaternion:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0


@dataclass
class Pose:
    position: Point = field(default_factory=Point)
    orientation: Quaternion = field(default_factory=Quaternion)


@dataclass
class PoseStamped:
    header: Header = field(default_factory=Header)
    pose: Pose = field(default_factory=Pose)


@dataclass
class Pose2D:
    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0


@dataclass
class Pose2DStamped:
    header: Header = field(default_factory=Header)
    pose: Pose2D = field(default_factory=Pose2D)


@dataclass
class Twist2D:
    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0


@dataclass
class Twist2DStamped:
    header: Header = field(default_factory=Header)
    velocity: Twist2D = field(default_factory=Twist2D)


@dataclass
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class Twist:
    linear: Vector3 = field(default_factory=Vector3)
    angular: Vector3 = field(default_factory=Vector3)


@dataclass
class Odometry:
    header: Header = field(default_factory=Header)
    child_frame_id: str = ""
    pose: Pose = field(default_factory=Pose)
    twist: Twist = field(default_factory=Twist)


@dataclass
class Path:
    header: Header = field(default_factory=Header)
    poses: list[PoseStamped] = field(default_factory=list)


@dataclass
class Path2D:
    header: Header = field(default_factory=Header)
    poses: list[Pose2D] = field(default_factory=list)


@dataclass
class Trajectory2D:
    """A simulated trajectory: the commanded velocity, poses and their time offsets."""

    velocity: Twist2D = field(default_factory=Twist2D)
    poses: list[Pose2D] = field(default_factory=list)
    time_offsets: list[float] = field(default_factory=list)


def quaternion_from_rpy(roll: float, pitch: float, yaw: float) -> Quaternion:
    """Build a quaternion from fixed-axis roll, pitch and yaw angles."""
    half_roll, half_pitch, half_yaw = roll * 0.5, pitch * 0.5, yaw * 0.5
    cr, sr = math.cos(half_roll), math.sin(half_roll)
    cp, sp = math.cos(half_pitch), math.sin(half_pitch)
    cy, sy = math.cos(half_yaw), math.sin(half_yaw)
    return Quaternion(
        x=sr * cp * cy - cr * sp * sy,
        y=cr * sp * cy + sr * cp * sy,
        z=cr * cp * sy - sr * sp * cy,
        w=cr * cp * cy + sr * sp * sy,
    )


def quaternion_from_yaw(yaw: float) -> Quaternion:
    """Quaternion for a rotation of ``yaw`` radians about the z axis."""
    return quaternion_from_rpy(0.0, 0.0, yaw)


def yaw_from_quaternion(q: Quaternion) -> float:
    """Extract the yaw angle of a (not necessarily normalised) quaternion."""
    sqx, sqy, sqz, sqw = q.x * q.x, q.y * q.y, q.z * q.z, q.w * q.w
    sarg = -2.0 * (q.x * q.z - q.w * q.y) / (sqx + sqy + sqz + sqw)
    if sarg <= -0.99999:
        return -2.0 * math.atan2(q.y, q.x)
    if sarg >= 0.99999:
        return 2.0 * math.atan2(q.y, q.x)
    return math.atan2(2.0 * (q.x * q.y + q.w * q.z), sqw + sqx - sqy - sqz)