"""Operations on planar paths."""

from __future__ import annotations

import copy
import math

from .messages import Path2D, Pose2D


def adjust_plan_resolution(global_plan_in: Path2D, resolution: float) -> Path2D:
    """Densify a plan by inserting poses linearly where consecutive poses are far apart.

    Gaps of up to two cells of ``resolution`` are left as they are.
    """
    global_plan_out = Path2D()
    if not global_plan_in.poses:
        return global_plan_out

    first = global_plan_in.poses[0]
    last = copy.copy(first)
    global_plan_out.poses.append(copy.copy(first))

    min_sq_resolution = resolution * resolution * 4.0

    for loop in global_plan_in.poses[1:]:
        sq_dist = (loop.x - last.x) ** 2 + (loop.y - last.y) ** 2
        if sq_dist > min_sq_resolution:
            diff = math.sqrt(sq_dist) - math.sqrt(min_sq_resolution)
            steps = int(diff / resolution) - 1
            if steps > 1:
                delta_x = (loop.x - last.x) / steps
                delta_y = (loop.y - last.y) / steps
                delta_t = (loop.theta - last.theta) / steps
                global_plan_out.poses.extend(
                    Pose2D(
                        last.x + j * delta_x,
                        last.y + j * delta_y,
                        last.theta + j * delta_t,
                    )
                    for j in range(1, steps)
                )
        global_plan_out.poses.append(copy.copy(loop))
        # Only the position of the reference pose advances; its heading stays.
        last.x = loop.x
        last.y = loop.y
    return global_plan_out