"""
Hit testing for pose bodies and their headlight (orientation) handles.

All inputs are in world units. A pose body is the vehicle rectangle centered
on the pose; the headlight sits half a vehicle length ahead of the center.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import NamedTuple, Optional, Tuple

from .model import Pose


class DragTarget(Enum):
    START_BODY = "start_body"
    START_ANGLE = "start_angle"
    END_BODY = "end_body"
    END_ANGLE = "end_angle"

    @property
    def is_start(self) -> bool:
        return self in (DragTarget.START_BODY, DragTarget.START_ANGLE)

    @property
    def is_angle(self) -> bool:
        return self in (DragTarget.START_ANGLE, DragTarget.END_ANGLE)


class HitDims(NamedTuple):
    half_length: float
    half_width: float
    headlight_radius: float
    shape: str = "rect"
    body_radius: float = 0.0


def _to_local(point: Tuple[float, float], pose: Pose) -> Tuple[float, float]:
    th = math.radians(pose.theta_degree)
    dx, dy = point[0] - pose.x, point[1] - pose.y
    c, s = math.cos(-th), math.sin(-th)
    return (dx * c - dy * s, dx * s + dy * c)


def body_hit(point, pose: Pose, half_length: float, half_width: float) -> bool:
    lx, ly = _to_local(point, pose)
    return abs(lx) <= half_length and abs(ly) <= half_width


def body_hit_circle(point, pose: Pose, radius: float) -> bool:
    return math.hypot(point[0] - pose.x, point[1] - pose.y) <= radius


def headlight_position(pose: Pose, half_length: float) -> Tuple[float, float]:
    th = math.radians(pose.theta_degree)
    return (pose.x + half_length * math.cos(th), pose.y + half_length * math.sin(th))


def headlight_hit(point, pose: Pose, half_length: float, radius: float) -> bool:
    hx, hy = headlight_position(pose, half_length)
    return math.hypot(point[0] - hx, point[1] - hy) <= radius


def _body(point, pose: Pose, dims: HitDims) -> bool:
    if dims.shape == "circle":
        return body_hit_circle(point, pose, dims.body_radius)
    return body_hit(point, pose, dims.half_length, dims.half_width)


def pick_target(point, start: Optional[Pose], end: Optional[Pose], dims: HitDims) -> Optional[DragTarget]:
    """
    Choose what a press at `point` grabs. Headlights win over bodies, and the
    start pose wins over the end pose for hits of the same kind.
    """
    if start is not None and headlight_hit(point, start, dims.half_length, dims.headlight_radius):
        return DragTarget.START_ANGLE
    if end is not None and headlight_hit(point, end, dims.half_length, dims.headlight_radius):
        return DragTarget.END_ANGLE
    if start is not None and _body(point, start, dims):
        return DragTarget.START_BODY
    if end is not None and _body(point, end, dims):
        return DragTarget.END_BODY
    return None
