"""
Path interpolation: turns a compact segment list into a dense polyline by
integrating the constant-curvature vehicle model in closed form.

Each substep advances along the exact circular arc (or straight line) of the
segment, so long compound paths do not accumulate curvature drift.
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

from .config import EPSILON, PATH_RESOLUTION, TURNING_RADIUS
from .geom import FrameTransform, Point, angle_diff_deg, normalize_rad
from .model import Path, PathElement, Pose, Steering

WorldSample = Tuple[float, float, float]  # x, y, theta_rad


def segment_arc_length(element: PathElement, turning_radius: float = TURNING_RADIUS) -> float:
    if element.steering is Steering.STRAIGHT:
        return element.param
    return element.param * turning_radius


def step_count(element: PathElement, resolution: float, turning_radius: float = TURNING_RADIUS) -> int:
    return max(1, int(math.ceil(segment_arc_length(element, turning_radius) * resolution)))


def advance(x: float, y: float, theta: float, element: PathElement, amount: float,
            turning_radius: float = TURNING_RADIUS) -> WorldSample:
    """
    Move the pose (x, y, theta) by `amount` of the element's parameter
    (distance for straight, radians for turns). Heading is not normalized.
    """
    d = amount * element.gear.sign
    R = turning_radius
    if element.steering is Steering.STRAIGHT:
        return (x + d * math.cos(theta), y + d * math.sin(theta), theta)
    if element.steering is Steering.LEFT:
        th = theta + d
        return (x + R * (math.sin(th) - math.sin(theta)),
                y + R * (math.cos(theta) - math.cos(th)),
                th)
    if element.steering is Steering.RIGHT:
        th = theta - d
        return (x + R * (math.sin(theta) - math.sin(th)),
                y + R * (math.cos(th) - math.cos(theta)),
                th)
    raise ValueError(f"unknown steering {element.steering!r}")


def integrate(start_pose: Pose, path: Path, resolution: float = PATH_RESOLUTION,
              turning_radius: float = TURNING_RADIUS) -> List[WorldSample]:
    """World samples along the path, starting with the start pose itself."""
    x, y = float(start_pose.x), float(start_pose.y)
    theta = normalize_rad(math.radians(start_pose.theta_degree))
    samples = [(x, y, theta)]

    for element in path:
        if element.param < EPSILON:
            continue
        n = step_count(element, resolution, turning_radius)
        step = element.param / n
        for _ in range(n):
            x, y, theta = advance(x, y, theta, element, step, turning_radius)
            theta = normalize_rad(theta)
            samples.append((x, y, theta))
    return samples


def interpolate(start_pose: Pose, path: Path, resolution: float = PATH_RESOLUTION,
                transform: Optional[FrameTransform] = None,
                turning_radius: float = TURNING_RADIUS) -> List[Point]:
    """
    Frame-space polyline of the vehicle center. An empty path yields the
    single projected start point.
    """
    tf = transform or FrameTransform()
    return [tf.world_to_frame(x, y) for x, y, _ in integrate(start_pose, path, resolution, turning_radius)]


def final_pose(start_pose: Pose, path: Path, turning_radius: float = TURNING_RADIUS) -> Pose:
    """Exact end pose (one closed-form step per segment)."""
    x, y = float(start_pose.x), float(start_pose.y)
    theta = math.radians(start_pose.theta_degree)
    for element in path:
        if element.param < EPSILON:
            continue
        x, y, theta = advance(x, y, theta, element, element.param, turning_radius)
    return Pose(x, y, math.degrees(normalize_rad(theta)))


def end_pose_error(start_pose: Pose, path: Path, end_pose: Pose,
                   turning_radius: float = TURNING_RADIUS) -> Tuple[float, float]:
    """(distance, signed heading error in degrees) between path end and end_pose."""
    reached = final_pose(start_pose, path, turning_radius)
    dist = math.hypot(reached.x - end_pose.x, reached.y - end_pose.y)
    return dist, angle_diff_deg(reached.theta_degree, end_pose.theta_degree)
