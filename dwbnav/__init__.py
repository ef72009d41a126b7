"""Trajectory simulation, kinematic limits and 2D pose, path and transform utilities for mobile robots."""

__version__ = "0.1.0"