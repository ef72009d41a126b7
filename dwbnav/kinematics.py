"""Kinematic limits of a robot base, read from parameters and adjustable at run time."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from .parameters import Parameter, ParameterStore

NO_SPEED_LIMIT = 0.0
"""Speed limit value that restores the configured maximum speeds."""

_LIMIT_NAMES = (
    "min_vel_x",
    "min_vel_y",
    "max_vel_x",
    "max_vel_y",
    "max_vel_theta",
    "min_speed_xy",
    "max_speed_xy",
    "min_speed_theta",
    "acc_lim_x",
    "acc_lim_y",
    "acc_lim_theta",
    "decel_lim_x",
    "decel_lim_y",
    "decel_lim_theta",
)

# Parameters whose new value also becomes the base that speed limits scale from.
_WITH_BASE = {
    "max_vel_x": "base_max_vel_x",
    "max_vel_y": "base_max_vel_y",
    "max_vel_theta": "base_max_vel_theta",
    "max_speed_xy": "base_max_speed_xy",
}


@dataclass(frozen=True)
class KinematicParameters:
    """Velocity, speed and acceleration limits of the robot."""

    min_vel_x: float = 0.0
    min_vel_y: float = 0.0
    max_vel_x: float = 0.0
    max_vel_y: float = 0.0
    max_vel_theta: float = 0.0
    min_speed_xy: float = 0.0
    max_speed_xy: float = 0.0
    min_speed_theta: float = 0.0
    acc_lim_x: float = 0.0
    acc_lim_y: float = 0.0
    acc_lim_theta: float = 0.0
    decel_lim_x: float = 0.0
    decel_lim_y: float = 0.0
    decel_lim_theta: float = 0.0
    base_max_vel_x: float = 0.0
    base_max_vel_y: float = 0.0
    base_max_speed_xy: float = 0.0
    base_max_vel_theta: float = 0.0
    min_speed_xy_sq: float = 0.0
    max_speed_xy_sq: float = 0.0


class KinematicsHandler:
    """Owns the current :class:`KinematicParameters` and replaces them on change."""

    def __init__(self) -> None:
        self.plugin_name = ""
        self._kinematics = KinematicParameters()

    @property
    def kinematics(self) -> KinematicParameters:
        """The current limits (an immutable snapshot)."""
        return self._kinematics

    def initialize(self, store: ParameterStore, plugin_name: str) -> None:
        """Read the limits of ``plugin_name`` from ``store`` and follow later changes."""
        self.plugin_name = plugin_name
        values = {}
        for name in _LIMIT_NAMES:
            key = f"{plugin_name}.{name}"
            store.declare(key, 0.0)
            values[name] = store.get(key)

        store.add_on_set_callback(self.on_parameters_set)

        self._kinematics = KinematicParameters(
            **values,
            base_max_vel_x=values["max_vel_x"],
            base_max_vel_y=values["max_vel_y"],
            base_max_speed_xy=values["max_speed_xy"],
            base_max_vel_theta=values["max_vel_theta"],
            min_speed_xy_sq=values["min_speed_xy"] * values["min_speed_xy"],
            max_speed_xy_sq=values["max_speed_xy"] * values["max_speed_xy"],
        )

    def set_speed_limit(self, speed_limit: float, percentage: bool) -> None:
        """Limit the maximum speeds.

        ``speed_limit`` is a percentage of the base maximum when ``percentage`` is
        true, otherwise an absolute linear speed. :data:`NO_SPEED_LIMIT` restores
        the base maxima. An absolute limit at or above the base speed is ignored.
        """
        k = self._kinematics
        changes: dict[str, float] = {}
        if speed_limit == NO_SPEED_LIMIT:
            changes = {
                "max_speed_xy": k.base_max_speed_xy,
                "max_vel_x": k.base_max_vel_x,
                "max_vel_y": k.base_max_vel_y,
                "max_vel_theta": k.base_max_vel_theta,
            }
        elif percentage:
            changes = {
                "max_speed_xy": k.base_max_speed_xy * speed_limit / 100.0,
                "max_vel_x": k.base_max_vel_x * speed_limit / 100.0,
                "max_vel_y": k.base_max_vel_y * speed_limit / 100.0,
                "max_vel_theta": k.base_max_vel_theta * speed_limit / 100.0,
            }
        elif speed_limit < k.base_max_speed_xy:
            # Scale the components in proportion so trajectories keep their shape.
            ratio = speed_limit / k.base_max_speed_xy
            changes = {
                "max_speed_xy": speed_limit,
                "max_vel_x": k.base_max_vel_x * ratio,
                "max_vel_y": k.base_max_vel_y * ratio,
                "max_vel_theta": k.base_max_vel_theta * ratio,
            }
        max_speed_xy = changes.get("max_speed_xy", k.max_speed_xy)
        changes["max_speed_xy_sq"] = max_speed_xy * max_speed_xy
        self._kinematics = dataclasses.replace(k, **changes)

    def on_parameters_set(self, parameters: list[Parameter]) -> bool:
        """Apply changed floating-point limits of this plugin; always accepts."""
        prefix = f"{self.plugin_name}."
        changes: dict[str, float] = {}
        current = self._kinematics
        for parameter in parameters:
            if not isinstance(parameter.value, float):
                continue
            if not parameter.name.startswith(prefix):
                continue
            name = parameter.name[len(prefix):]
            if name not in _LIMIT_NAMES:
                continue
            value = parameter.value
            changes[name] = value
            if name in _WITH_BASE:
                changes[_WITH_BASE[name]] = value
            elif name == "min_speed_xy":
                changes["min_speed_xy_sq"] = value * value
            elif name == "min_speed_theta":
                max_speed = changes.get("max_speed_xy", current.max_speed_xy)
                changes["max_speed_xy_sq"] = max_speed * max_speed
        self._kinematics = dataclasses.replace(current, **changes)
        return True