"""Keeps the latest planar velocity reported by odometry."""

from __future__ import annotations

import copy
import threading

from .messages import Odometry, Twist2D, Twist2DStamped
from .parameters import ParameterStore


class OdomSubscriber:
    """Tracks the most recent odometry twist, guarded by a lock.

    The topic name is read from the ``odom_topic`` parameter, falling back to
    ``default_topic``. Incoming messages are delivered to :meth:`odom_callback`.
    """

    def __init__(self, store: ParameterStore, default_topic: str = "odom") -> None:
        store.declare("odom_topic", default_topic)
        self.topic: str = store.get("odom_topic")
        self._odom_vel = Twist2DStamped()
        self._lock = threading.Lock()

    @property
    def twist(self) -> Twist2D:
        with self._lock:
            return copy.copy(self._odom_vel.velocity)

    @property
    def twist_stamped(self) -> Twist2DStamped:
        with self._lock:
            return copy.deepcopy(self._odom_vel)

    def odom_callback(self, msg: Odometry) -> None:
        """Store the planar part of an odometry message's twist."""
        with self._lock:
            self._odom_vel.header = copy.copy(msg.header)
            self._odom_vel.velocity = Twist2D(
                msg.twist.linear.x, msg.twist.linear.y, msg.twist.angular.z
            )