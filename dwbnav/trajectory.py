"""Simulation of trajectories for candidate velocity commands."""

from __future__ import annotations

import copy
import logging
import math

from .kinematics import KinematicsHandler
from .messages import Pose2D, Trajectory2D, Twist2D
from .parameters import ParameterNotSetError, ParameterStore, search_and_get_param

logger = logging.getLogger(__name__)


class LimitedAccelGenerator:
    """Generates trajectories that jump straight to the commanded velocity.

    The reachable velocities are limited to what the acceleration limits allow
    within ``acceleration_time`` (the ``sim_period`` parameter, or one control
    period derived from ``controller_frequency``).
    """

    def __init__(self) -> None:
        self.plugin_name = ""
        self.kinematics_handler = KinematicsHandler()
        self.sim_time = 1.7
        self.discretize_by_time = False
        self.time_granularity = 0.5
        self.linear_granularity = 0.5
        self.angular_granularity = 0.025
        self.include_last_point = True
        self.acceleration_time = 0.05

    def initialize(self, store: ParameterStore, plugin_name: str) -> None:
        """Read the generator's settings for ``plugin_name`` from ``store``."""
        self.plugin_name = plugin_name
        self.kinematics_handler = KinematicsHandler()
        self.kinematics_handler.initialize(store, plugin_name)

        defaults = {
            "sim_time": 1.7,
            "discretize_by_time": False,
            "time_granularity": 0.5,
            "linear_granularity": 0.5,
            "angular_granularity": 0.025,
            "include_last_point": True,
        }
        for name, default in defaults.items():
            store.declare(f"{plugin_name}.{name}", default)
        self.sim_time = store.get(f"{plugin_name}.sim_time")
        self.discretize_by_time = store.get(f"{plugin_name}.discretize_by_time")
        self.time_granularity = store.get(f"{plugin_name}.time_granularity")
        self.linear_granularity = store.get(f"{plugin_name}.linear_granularity")
        self.angular_granularity = store.get(f"{plugin_name}.angular_granularity")
        self.include_last_point = store.get(f"{plugin_name}.include_last_point")

        try:
            store.declare(f"{plugin_name}.sim_period")
            self.acceleration_time = store.get(f"{plugin_name}.sim_period")
        except ParameterNotSetError:
            logger.warning("'sim_period' parameter is not set for %s", plugin_name)
            controller_frequency = search_and_get_param(store, "controller_frequency", 20.0)
            if controller_frequency > 0:
                self.acceleration_time = 1.0 / controller_frequency
            else:
                logger.warning(
                    "A controller_frequency less than or equal to 0 has been set. "
                    "Ignoring the parameter, assuming a rate of 20Hz"
                )
                self.acceleration_time = 0.05

    def get_time_steps(self, cmd_vel: Twist2D) -> list[float]:
        """Split the simulation time into equal steps.

        By time, steps are at most ``time_granularity`` long; by distance, the
        robot moves at most ``linear_granularity`` or turns at most
        ``angular_granularity`` per step. There is always at least one step.
        """
        if self.discretize_by_time:
            num_steps = math.ceil(self.sim_time / self.time_granularity)
        else:
            projected_linear = math.hypot(cmd_vel.x, cmd_vel.y) * self.sim_time
            projected_angular = abs(cmd_vel.theta) * self.sim_time
            num_steps = math.ceil(
                max(
                    projected_linear / self.linear_granularity,
                    projected_angular / self.angular_granularity,
                )
            )
        num_steps = max(int(num_steps), 1)
        return [self.sim_time / num_steps] * num_steps

    def compute_new_velocity(self, cmd_vel: Twist2D, start_vel: Twist2D, dt: float) -> Twist2D:
        """The commanded velocity is reached immediately."""
        return copy.copy(cmd_vel)

    def compute_new_position(self, start_pose: Pose2D, vel: Twist2D, dt: float) -> Pose2D:
        """Move ``start_pose`` with the robot-frame velocity ``vel`` for ``dt`` seconds."""
        theta = start_pose.theta
        side = math.pi / 2 + theta
        return Pose2D(
            x=start_pose.x + (vel.x * math.cos(theta) + vel.y * math.cos(side)) * dt,
            y=start_pose.y + (vel.x * math.sin(theta) + vel.y * math.sin(side)) * dt,
            theta=theta + vel.theta * dt,
        )

    def generate_trajectory(
        self, start_pose: Pose2D, start_vel: Twist2D, cmd_vel: Twist2D
    ) -> Trajectory2D:
        """Simulate driving with ``cmd_vel`` from ``start_pose`` for ``sim_time``."""
        traj = Trajectory2D(velocity=copy.copy(cmd_vel), poses=[copy.copy(start_pose)])
        pose = copy.copy(start_pose)
        vel = copy.copy(start_vel)
        running_time = 0.0
        for dt in self.get_time_steps(cmd_vel):
            vel = self.compute_new_velocity(cmd_vel, vel, dt)
            pose = self.compute_new_position(pose, vel, dt)
            traj.poses.append(pose)
            traj.time_offsets.append(running_time)
            running_time += dt
        if self.include_last_point:
            traj.poses.append(copy.copy(pose))
            traj.time_offsets.append(running_time)
        return traj