"""A minimal transform buffer and helpers that transform poses between frames."""

from __future__ import annotations

import bisect
import copy
import logging
import math
from dataclasses import dataclass, field

from .conversions import pose_2d_stamped_to_pose_stamped, pose_stamped_to_pose_2d
from .messages import Header, Point, Pose, Pose2DStamped, PoseStamped, Quaternion, Vector3

logger = logging.getLogger(__name__)


class TransformError(Exception):
    """A transform could not be found or applied."""


class ExtrapolationError(TransformError):
    """The requested time lies outside the buffered transform history."""


@dataclass
class StampedTransform:
    """Transform taking coordinates in ``child_frame_id`` into ``header.frame_id``."""

    header: Header = field(default_factory=Header)
    child_frame_id: str = ""
    translation: Vector3 = field(default_factory=Vector3)
    rotation: Quaternion = field(default_factory=Quaternion)


def _q_mul(a: Quaternion, b: Quaternion) -> Quaternion:
    return Quaternion(
        x=a.w * b.x + a.x * b.w + a.y * b.z - a.z * b.y,
        y=a.w * b.y - a.x * b.z + a.y * b.w + a.z * b.x,
        z=a.w * b.z + a.x * b.y - a.y * b.x + a.z * b.w,
        w=a.w * b.w - a.x * b.x - a.y * b.y - a.z * b.z,
    )


def _q_normalized(q: Quaternion) -> Quaternion:
    n = math.sqrt(q.x * q.x + q.y * q.y + q.z * q.z + q.w * q.w)
    return Quaternion(q.x / n, q.y / n, q.z / n, q.w / n)


def _q_inverse(q: Quaternion) -> Quaternion:
    n = q.x * q.x + q.y * q.y + q.z * q.z + q.w * q.w
    return Quaternion(-q.x / n, -q.y / n, -q.z / n, q.w / n)


def _rotate(q: Quaternion, x: float, y: float, z: float) -> tuple[float, float, float]:
    qn = _q_normalized(q)
    r = _q_mul(_q_mul(qn, Quaternion(x, y, z, 0.0)), _q_inverse(qn))
    return r.x, r.y, r.z


def _slerp(a: Quaternion, b: Quaternion, t: float) -> Quaternion:
    a, b = _q_normalized(a), _q_normalized(b)
    dot = a.x * b.x + a.y * b.y + a.z * b.z + a.w * b.w
    if dot < 0.0:
        b = Quaternion(-b.x, -b.y, -b.z, -b.w)
        dot = -dot
    if dot > 0.9995:
        return _q_normalized(
            Quaternion(
                a.x + t * (b.x - a.x),
                a.y + t * (b.y - a.y),
                a.z + t * (b.z - a.z),
                a.w + t * (b.w - a.w),
            )
        )
    theta = math.acos(dot)
    sa = math.sin((1.0 - t) * theta) / math.sin(theta)
    sb = math.sin(t * theta) / math.sin(theta)
    return Quaternion(
        sa * a.x + sb * b.x, sa * a.y + sb * b.y, sa * a.z + sb * b.z, sa * a.w + sb * b.w
    )


def _invert(transform: StampedTransform) -> StampedTransform:
    inv = _q_inverse(transform.rotation)
    t = transform.translation
    x, y, z = _rotate(inv, -t.x, -t.y, -t.z)
    return StampedTransform(
        header=Header(transform.child_frame_id, transform.header.stamp),
        child_frame_id=transform.header.frame_id,
        translation=Vector3(x, y, z),
        rotation=inv,
    )


class TransformBuffer:
    """Stores timed transforms between pairs of frames."""

    def __init__(self) -> None:
        self._history: dict[tuple[str, str], list[StampedTransform]] = {}

    def set_transform(self, transform: StampedTransform) -> None:
        """Add a transform, replacing one for the same frames and stamp."""
        key = (transform.header.frame_id, transform.child_frame_id)
        history = self._history.setdefault(key, [])
        stamps = [t.header.stamp for t in history]
        index = bisect.bisect_left(stamps, transform.header.stamp)
        if index < len(history) and history[index].header.stamp == transform.header.stamp:
            history[index] = copy.deepcopy(transform)
        else:
            history.insert(index, copy.deepcopy(transform))

    def lookup_transform(
        self, target_frame: str, source_frame: str, time: float = 0.0
    ) -> StampedTransform:
        """Transform from ``source_frame`` into ``target_frame`` at ``time``.

        A time of zero asks for the latest available transform.
        """
        if target_frame == source_frame:
            return StampedTransform(header=Header(target_frame, time), child_frame_id=source_frame)
        history = self._history.get((target_frame, source_frame))
        if history:
            return self._at(history, time)
        history = self._history.get((source_frame, target_frame))
        if history:
            return _invert(self._at(history, time))
        raise TransformError(f"no transform from '{source_frame}' to '{target_frame}'")

    @staticmethod
    def _at(history: list[StampedTransform], time: float) -> StampedTransform:
        if not time:
            return copy.deepcopy(history[-1])
        first, last = history[0].header.stamp, history[-1].header.stamp
        if time < first or time > last:
            raise ExtrapolationError(
                f"requested time {time} outside buffered range [{first}, {last}]"
            )
        stamps = [t.header.stamp for t in history]
        index = bisect.bisect_left(stamps, time)
        after = history[index]
        if after.header.stamp == time:
            return copy.deepcopy(after)
        before = history[index - 1]
        ratio = (time - before.header.stamp) / (after.header.stamp - before.header.stamp)
        a, b = before.translation, after.translation
        return StampedTransform(
            header=Header(after.header.frame_id, time),
            child_frame_id=after.child_frame_id,
            translation=Vector3(
                a.x + ratio * (b.x - a.x),
                a.y + ratio * (b.y - a.y),
                a.z + ratio * (b.z - a.z),
            ),
            rotation=_slerp(before.rotation, after.rotation, ratio),
        )

    def transform(self, pose: PoseStamped, target_frame: str) -> PoseStamped:
        """Transform ``pose`` into ``target_frame`` at the pose's own stamp."""
        found = self.lookup_transform(target_frame, pose.header.frame_id, pose.header.stamp)
        return apply_transform(pose, found)


def apply_transform(pose: PoseStamped, transform: StampedTransform) -> PoseStamped:
    """Apply ``transform`` to ``pose``; the result takes the transform's header."""
    p = pose.pose.position
    x, y, z = _rotate(transform.rotation, p.x, p.y, p.z)
    t = transform.translation
    return PoseStamped(
        header=copy.copy(transform.header),
        pose=Pose(
            position=Point(x + t.x, y + t.y, z + t.z),
            orientation=_q_mul(transform.rotation, pose.pose.orientation),
        ),
    )


def transform_pose(
    buffer: TransformBuffer | None,
    frame: str,
    in_pose: PoseStamped,
    transform_tolerance: float,
) -> PoseStamped:
    """Transform ``in_pose`` into ``frame``.

    If the pose is newer than the buffered data, the latest transform is used as
    long as it is at most ``transform_tolerance`` seconds older than the pose.
    Raises :class:`TransformError` when no usable transform exists.
    """
    if in_pose.header.frame_id == frame:
        return copy.deepcopy(in_pose)
    if buffer is None:
        raise TransformError("no transform buffer available")
    try:
        return buffer.transform(in_pose, frame)
    except ExtrapolationError:
        latest = buffer.lookup_transform(frame, in_pose.header.frame_id, 0.0)
        if in_pose.header.stamp - latest.header.stamp > transform_tolerance:
            logger.error(
                "Transform data too old when converting from %s to %s",
                in_pose.header.frame_id,
                frame,
            )
            raise TransformError(
                f"transform data too old when converting from "
                f"'{in_pose.header.frame_id}' to '{frame}': data time "
                f"{in_pose.header.stamp}, transform time {latest.header.stamp}"
            ) from None
        return apply_transform(in_pose, latest)
    except TransformError as exc:
        logger.error("Exception in transform_pose: %s", exc)
        raise


def transform_pose_2d(
    buffer: TransformBuffer | None,
    frame: str,
    in_pose: Pose2DStamped,
    transform_tolerance: float,
) -> Pose2DStamped:
    """Transform a stamped planar pose into ``frame``."""
    out = transform_pose(
        buffer, frame, pose_2d_stamped_to_pose_stamped(in_pose), transform_tolerance
    )
    return pose_stamped_to_pose_2d(out)