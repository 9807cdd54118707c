# rsviz/geom.py
from __future__ import annotations

import math
from typing import Optional, Tuple

from .config import WINDOW_WIDTH, WINDOW_HEIGHT, DRAW_SCALE

Point = Tuple[float, float]

TWO_PI = 2.0 * math.pi


class FrameTransform:
    """
    Pixel frame <-> world frame. World origin sits at the frame center,
    world +y points up while frame y grows downward.
    """

    def __init__(self, width=WINDOW_WIDTH, height=WINDOW_HEIGHT, scale=DRAW_SCALE):
        self.width = float(width)
        self.height = float(height)
        self.scale = float(scale)
        self.cx = self.width / 2.0
        self.cy = self.height / 2.0

    def world_to_frame(self, x: float, y: float) -> Point:
        return (x * self.scale + self.cx, self.cy - y * self.scale)

    def frame_to_world(self, pos: Point) -> Point:
        return ((pos[0] - self.cx) / self.scale, (self.cy - pos[1]) / self.scale)

    def length_to_world(self, d_px: float) -> float:
        return d_px / self.scale


def normalize_rad(theta: float) -> float:
    """Wrap an angle into [0, 2*pi)."""
    t = theta % TWO_PI
    return 0.0 if t >= TWO_PI else t


def angle_diff_deg(a: float, b: float) -> float:
    """Signed a - b wrapped into [-180, 180)."""
    return ((a - b + 180.0) % 360.0) - 180.0


def screen_angle_deg(p0: Point, p1: Point, min_dist2: float = 0.0) -> Optional[float]:
    """
    World-convention heading (degrees) of the frame-space vector p0 -> p1.
    None when the squared length does not exceed min_dist2.
    """
    dx = p1[0] - p0[0]
    dy = p1[1] - p0[1]
    d2 = dx * dx + dy * dy
    if d2 <= min_dist2 or d2 <= 1e-18:
        return None
    return -math.degrees(math.atan2(dy, dx))


def oriented_rect_corners(center_px: Point, heading_deg: float, length_px: float, width_px: float):
    """Frame-space corners of a rectangle whose long axis follows heading_deg."""
    hl, hw = float(length_px) * 0.5, float(width_px) * 0.5
    local = [(-hl, -hw), (hl, -hw), (hl, hw), (-hl, hw)]
    th = math.radians(heading_deg)
    s, c = math.sin(th), math.cos(th)
    pts = []
    for lx, ly in local:
        rx = lx * c - ly * s
        ry = lx * s + ly * c
        pts.append((center_px[0] + rx, center_px[1] - ry))
    return pts
