[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dwbnav"
version = "0.1.0"
description = "Trajectory simulation, kinematic limits and 2D pose, path and transform utilities for mobile robots"
requires-python = ">=3.10"
dependencies = []
keywords = ["robotics", "navigation", "dwb", "trajectory", "kinematics", "path", "transform"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dwbnav"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
