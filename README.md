# dwbnav

Pieces of a dynamic-window local planner for mobile robots. It is written in
plain Python and has no third-party dependencies.

## Modules

- `dwbnav.messages` holds dataclass message types: `Header`, `Point`,
  `Quaternion`, `Pose`, `PoseStamped`, `Pose2D`, `Pose2DStamped`, `Twist2D`,
  `Twist2DStamped`, `Vector3`, `Twist`, `Odometry`, `Path`, `Path2D` and
  `Trajectory2D`. It also has the quaternion helpers `quaternion_from_rpy`,
  `quaternion_from_yaw` and `yaw_from_quaternion`. Timestamps are floats in
  seconds.
- `dwbnav.conversions` converts between planar and 3D messages:
  - twists: `twist_2d_to_3d`, `twist_3d_to_2d`
  - poses: `pose_to_pose_2d`, `pose_2d_to_pose`
  - stamped poses: `pose_stamped_to_pose_2d`, `pose_2d_stamped_to_pose_stamped`,
    `pose_2d_to_pose_stamped`
  - paths: `poses_to_path`, `path_to_path_2d`, `poses_2d_to_path`,
    `path_2d_to_path`
- `dwbnav.path_ops` provides `adjust_plan_resolution`. It inserts evenly spaced
  poses wherever two consecutive poses of a `Path2D` are more than two
  resolution cells apart.
- `dwbnav.line_iterator` provides `LineIterator`, which walks the grid cells of
  a Bresenham line with both ends included. You can step through it with
  `is_valid()` and `advance()`, or iterate over it to get `(x, y)` pairs.
- `dwbnav.parameters` provides `ParameterStore`, a named-parameter store:
  - `declare()` declares a parameter once. Overrides passed to the constructor
    take precedence over the declared default.
  - `get()` raises `ParameterNotSetError` when the parameter is undeclared or
    has no value.
  - `set_parameters()` takes `Parameter` objects and runs the callbacks
    registered with `add_on_set_callback()` first. Any callback can reject the
    change.
  - `search_and_get_param()` declares a parameter with a default and returns
    its value.
- `dwbnav.odometry` provides `OdomSubscriber`. It reads `odom_topic` from a
  store, with `"odom"` as the default. It keeps the planar part of the last
  `Odometry` passed to `odom_callback()` and returns it through `twist` and
  `twist_stamped`.
- `dwbnav.tf_help` handles transforms between frames:
  - `TransformBuffer` stores timed `StampedTransform`s. It interpolates between
    them and can also look a transform up in the inverse direction.
  - `apply_transform` applies a transform to a pose.
  - `transform_pose` and `transform_pose_2d` move a pose into another frame.
    If the pose is newer than the buffered data, they use the latest transform
    as long as it is no more than `transform_tolerance` seconds older than the
    pose. When no usable transform exists they raise `TransformError`, or its
    subclass `ExtrapolationError`.
- `dwbnav.kinematics` holds velocity, speed and acceleration limits:
  - `KinematicParameters` is an immutable snapshot of the limits.
  - `KinematicsHandler` reads the limits as `<plugin>.<name>` parameters. It
    follows later float changes through `on_parameters_set()`.
  - `set_speed_limit()` takes a percentage or an absolute value. Passing
    `NO_SPEED_LIMIT` restores the configured maxima.
- `dwbnav.trajectory` provides `LimitedAccelGenerator`:
  - It reads `sim_time`, `discretize_by_time`, the granularities,
    `include_last_point` and `sim_period` (its acceleration time). If
    `sim_period` is not set, it derives the acceleration time from
    `controller_frequency`.
  - `get_time_steps()` splits the simulation time into equal steps.
  - `generate_trajectory()` simulates a `Trajectory2D`, treating the commanded
    velocity as reached at once.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from dwbnav.messages import Pose2D, Twist2D
from dwbnav.parameters import ParameterStore
from dwbnav.trajectory import LimitedAccelGenerator

store = ParameterStore()
store.declare("dwb.max_vel_x", 0.5)
store.declare("dwb.acc_lim_x", 2.5)
store.declare("dwb.sim_period", 0.05)

generator = LimitedAccelGenerator()
generator.initialize(store, "dwb")

traj = generator.generate_trajectory(
    Pose2D(0.0, 0.0, 0.0), Twist2D(0.0, 0.0, 0.0), Twist2D(0.3, 0.0, 0.0)
)
print(len(traj.poses), traj.poses[-1])
```

## What it does not do

This is a library, not a running planner.

- It does not enumerate candidate velocities within the acceleration limits.
- It does not score trajectories against costmaps or plans.
- It does not choose a command.
- It has no command-line tool.
- It does not connect to a robot middleware. Odometry messages, transforms and
  parameter changes are handed to it by the calling code.