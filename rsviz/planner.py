"""
Reeds-Shepp path enumeration.

Implements the twelve canonical formula families of Reeds & Shepp (1990),
numbered after the equations of the paper (8.1 - 8.11). Each family is
solved in the start pose's frame for a unit turning radius; the remaining
solutions come from the time-flip and reflect symmetries.
"""

from __future__ import annotations

import math
from typing import Callable, List, Optional, Tuple

from .config import EPSILON, TURNING_RADIUS
from .interpolate import end_pose_error
from .model import (
    Gear, Path, PathElement, Pose, Steering, path_arc_length, path_length, reflect, timeflip,
)

__all__ = [
    "PATH_FNS", "get_all_paths", "get_optimal_path", "path_length", "path_arc_length",
    "reflect", "timeflip", "variant_path", "change_of_basis",
]

L, R, S = Steering.LEFT, Steering.RIGHT, Steering.STRAIGHT
FWD, BWD = Gear.FORWARD, Gear.BACKWARDS

# Residual allowed for a candidate to count as reaching the goal.
_GOAL_TOL_POS = 1e-6
_GOAL_TOL_DEG = 1e-4


def M(theta: float) -> float:
    """Wrap an angle into [-pi, pi)."""
    theta = theta % (2.0 * math.pi)
    if theta < -math.pi:
        return theta + 2.0 * math.pi
    if theta >= math.pi:
        return theta - 2.0 * math.pi
    return theta


def polar(x: float, y: float) -> Tuple[float, float]:
    return math.hypot(x, y), math.atan2(y, x)


def _clamp_unit(v: float) -> float:
    return max(-1.0, min(1.0, v))


def _build(*parts) -> Path:
    return [PathElement.create(p, steer, gear) for p, steer, gear in parts]


def path1(x, y, phi):
    """8.1: CSC, same turns."""
    phi = math.radians(phi)
    u, t = polar(x - math.sin(phi), y - 1 + math.cos(phi))
    v = M(phi - t)
    return _build((t, L, FWD), (u, S, FWD), (v, L, FWD))


def path2(x, y, phi):
    """8.2: CSC, different turns."""
    phi = M(math.radians(phi))
    rho, t1 = polar(x + math.sin(phi), y - 1 - math.cos(phi))
    if rho * rho < 4:
        return []
    u = math.sqrt(rho * rho - 4)
    t = M(t1 + math.atan2(2, u))
    v = M(t - phi)
    return _build((t, L, FWD), (u, S, FWD), (v, R, FWD))


def path3(x, y, phi):
    """8.3: C|C|C."""
    phi = math.radians(phi)
    rho, theta = polar(x - math.sin(phi), y - 1 + math.cos(phi))
    if rho > 4:
        return []
    A = math.acos(rho / 4)
    t = M(theta + math.pi / 2 + A)
    u = M(math.pi - 2 * A)
    v = M(phi - t - u)
    return _build((t, L, FWD), (u, R, BWD), (v, L, FWD))


def path4(x, y, phi):
    """8.4 (1): C|CC."""
    phi = math.radians(phi)
    rho, theta = polar(x - math.sin(phi), y - 1 + math.cos(phi))
    if rho > 4:
        return []
    A = math.acos(rho / 4)
    t = M(theta + math.pi / 2 + A)
    u = M(math.pi - 2 * A)
    v = M(t + u - phi)
    return _build((t, L, FWD), (u, R, BWD), (v, L, BWD))


def path5(x, y, phi):
    """8.4 (2): CC|C."""
    phi = math.radians(phi)
    rho, theta = polar(x - math.sin(phi), y - 1 + math.cos(phi))
    if rho > 4 or rho < EPSILON:
        return []
    u = math.acos(_clamp_unit(1 - rho * rho / 8))
    A = math.asin(_clamp_unit(2 * math.sin(u) / rho))
    t = M(theta + math.pi / 2 - A)
    v = M(t - u - phi)
    return _build((t, L, FWD), (u, R, FWD), (v, L, BWD))


def path6(x, y, phi):
    """8.7: CCu|CuC."""
    phi = math.radians(phi)
    rho, theta = polar(x + math.sin(phi), y - 1 - math.cos(phi))
    if rho > 4:
        return []
    if rho <= 2:
        A = math.acos((rho + 2) / 4)
        t = M(theta + math.pi / 2 + A)
        u = M(A)
    else:
        A = math.acos((rho - 2) / 4)
        t = M(theta + math.pi / 2 - A)
        u = M(math.pi - A)
    v = M(phi - t + 2 * u)
    return _build((t, L, FWD), (u, R, FWD), (u, L, BWD), (v, R, BWD))


def path7(x, y, phi):
    """8.8: C|CuCu|C."""
    phi = math.radians(phi)
    rho, theta = polar(x + math.sin(phi), y - 1 - math.cos(phi))
    u1 = (20 - rho * rho) / 16
    if rho > 6 or not 0 <= u1 <= 1:
        return []
    u = math.acos(u1)
    A = math.asin(_clamp_unit(2 * math.sin(u) / rho))
    t = M(theta + math.pi / 2 + A)
    v = M(t - phi)
    return _build((t, L, FWD), (u, R, BWD), (u, L, BWD), (v, R, FWD))


def path8(x, y, phi):
    """8.9 (1): C|C[pi/2]SC."""
    phi = math.radians(phi)
    rho, theta = polar(x - math.sin(phi), y - 1 + math.cos(phi))
    if rho < 2:
        return []
    u = math.sqrt(rho * rho - 4) - 2
    A = math.atan2(2, u + 2)
    t = M(theta + math.pi / 2 + A)
    v = M(t - phi + math.pi / 2)
    return _build((t, L, FWD), (math.pi / 2, R, BWD), (u, S, BWD), (v, L, BWD))


def path9(x, y, phi):
    """8.9 (2): CSC[pi/2]|C."""
    phi = math.radians(phi)
    rho, theta = polar(x - math.sin(phi), y - 1 + math.cos(phi))
    if rho < 2:
        return []
    u = math.sqrt(rho * rho - 4) - 2
    A = math.atan2(u + 2, 2)
    t = M(theta + math.pi / 2 - A)
    v = M(t - phi - math.pi / 2)
    return _build((t, L, FWD), (u, S, FWD), (math.pi / 2, R, FWD), (v, L, BWD))


def path10(x, y, phi):
    """8.10 (1): C|C[pi/2]SC."""
    phi = math.radians(phi)
    rho, theta = polar(x + math.sin(phi), y - 1 - math.cos(phi))
    if rho < 2:
        return []
    t = M(theta + math.pi / 2)
    u = rho - 2
    v = M(phi - t - math.pi / 2)
    return _build((t, L, FWD), (math.pi / 2, R, BWD), (u, S, BWD), (v, R, BWD))


def path11(x, y, phi):
    """8.10 (2): CSC[pi/2]|C."""
    phi = math.radians(phi)
    rho, theta = polar(x + math.sin(phi), y - 1 - math.cos(phi))
    if rho < 2:
        return []
    t = M(theta)
    u = rho - 2
    v = M(phi - t - math.pi / 2)
    return _build((t, L, FWD), (u, S, FWD), (math.pi / 2, L, FWD), (v, R, BWD))


def path12(x, y, phi):
    """8.11: C|C[pi/2]SC[pi/2]|C."""
    phi = math.radians(phi)
    rho, theta = polar(x + math.sin(phi), y - 1 - math.cos(phi))
    if rho < 4:
        return []
    u = math.sqrt(rho * rho - 4) - 4
    A = math.atan2(2, u + 4)
    t = M(theta + math.pi / 2 + A)
    v = M(t - phi)
    return _build((t, L, FWD), (math.pi / 2, R, BWD), (u, S, BWD),
                  (math.pi / 2, L, BWD), (v, R, FWD))


PATH_FNS: List[Callable[[float, float, float], Path]] = [
    path1, path2, path3, path4, path5, path6,
    path7, path8, path9, path10, path11, path12,
]

PATH_NAMES = [
    "CSC (same turns)", "CSC (opposite turns)", "C|C|C", "C|CC", "CC|C",
    "CCu|CuC", "C|CuCu|C", "C|C90 SC (1)", "CSC90|C (1)",
    "C|C90 SC (2)", "CSC90|C (2)", "C|C90 SC90|C",
]


def change_of_basis(start: Pose, end: Pose, turning_radius: float = TURNING_RADIUS):
    """End pose expressed in the start frame, scaled to a unit turning radius."""
    th = math.radians(start.theta_degree)
    dx = end.x - start.x
    dy = end.y - start.y
    x = (dx * math.cos(th) + dy * math.sin(th)) / turning_radius
    y = (-dx * math.sin(th) + dy * math.cos(th)) / turning_radius
    return x, y, end.theta_degree - start.theta_degree


def _solve(fn, x, y, phi, do_reflect: bool, do_timeflip: bool) -> Path:
    """Run one family under the requested symmetry."""
    if do_timeflip:
        x, phi = -x, -phi
    if do_reflect:
        y, phi = -y, -phi
    try:
        path = fn(x, y, phi)
    except (ValueError, ZeroDivisionError):
        return []
    if do_timeflip:
        path = timeflip(path)
    if do_reflect:
        path = reflect(path)
    return path


def _scale_straights(path: Path, turning_radius: float) -> Path:
    if turning_radius == 1.0:
        return path
    return [PathElement(e.param * turning_radius, e.steering, e.gear) if e.steering is Steering.STRAIGHT else e
            for e in path]


def _finish(path: Path, start: Pose, end: Pose, turning_radius: float) -> Path:
    """Drop inert elements and reject candidates that miss the goal."""
    path = [e for e in _scale_straights(path, turning_radius) if e.param >= EPSILON]
    if not path:
        return []
    dist, dth = end_pose_error(start, path, end, turning_radius)
    if dist > _GOAL_TOL_POS * max(1.0, turning_radius) or abs(dth) > _GOAL_TOL_DEG:
        return []
    return path


def variant_path(start: Pose, end: Pose, index: int, do_reflect: bool = False,
                 do_timeflip: bool = False, turning_radius: float = TURNING_RADIUS) -> Path:
    """Path of canonical family `index` (0-based) under the given symmetry; [] if infeasible."""
    if not 0 <= index < len(PATH_FNS):
        return []
    x, y, phi = change_of_basis(start, end, turning_radius)
    path = _solve(PATH_FNS[index], x, y, phi, do_reflect, do_timeflip)
    return _finish(path, start, end, turning_radius)


def get_all_paths(start: Pose, end: Pose, turning_radius: float = TURNING_RADIUS) -> List[Path]:
    """Every feasible candidate path from start to end."""
    x, y, phi = change_of_basis(start, end, turning_radius)
    paths = []
    for fn in PATH_FNS:
        for do_reflect, do_timeflip in ((False, False), (False, True), (True, False), (True, True)):
            path = _finish(_solve(fn, x, y, phi, do_reflect, do_timeflip), start, end, turning_radius)
            if path:
                paths.append(path)
    return paths


def get_optimal_path(start: Pose, end: Pose, turning_radius: float = TURNING_RADIUS) -> Optional[Path]:
    """Shortest candidate by distance driven in world units, None if there is none."""
    paths = get_all_paths(start, end, turning_radius)
    if not paths:
        return None
    return min(paths, key=lambda p: path_arc_length(p, turning_radius))
