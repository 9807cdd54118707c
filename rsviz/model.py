"""
Pose and path value types shared by the planner, interpolator and editor.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import List


class Gear(Enum):
    FORWARD = 1
    BACKWARDS = -1

    @property
    def sign(self) -> float:
        return float(self.value)

    def reversed(self) -> "Gear":
        return Gear.BACKWARDS if self is Gear.FORWARD else Gear.FORWARD


class Steering(Enum):
    LEFT = "L"
    RIGHT = "R"
    STRAIGHT = "S"

    def reversed(self) -> "Steering":
        if self is Steering.LEFT:
            return Steering.RIGHT
        if self is Steering.RIGHT:
            return Steering.LEFT
        return Steering.STRAIGHT


@dataclass
class Pose:
    """Vehicle position (world units) and heading (degrees, CCW from +x)."""
    x: float
    y: float
    theta_degree: float = 0.0

    def as_tuple(self):
        return (self.x, self.y, self.theta_degree)


@dataclass(frozen=True)
class PathElement:
    """
    One motion primitive. `param` is a magnitude: arc length for straight
    segments, turn angle in radians for left/right segments.
    """
    param: float
    steering: Steering
    gear: Gear

    @classmethod
    def create(cls, param: float, steering: Steering, gear: Gear) -> "PathElement":
        """Build from a signed parameter; negative values flip the gear."""
        if param >= 0:
            return cls(param, steering, gear)
        return cls(-param, steering, gear.reversed())

    def reverse_gear(self) -> "PathElement":
        return replace(self, gear=self.gear.reversed())

    def reverse_steering(self) -> "PathElement":
        return replace(self, steering=self.steering.reversed())

    def __str__(self) -> str:
        sign = "+" if self.gear is Gear.FORWARD else "-"
        return f"{self.steering.value}{sign}{self.param:.3f}"


Path = List[PathElement]


def path_length(path: Path) -> float:
    """Sum of absolute segment parameters."""
    return sum(abs(e.param) for e in path)


def path_arc_length(path: Path, turning_radius: float = 1.0) -> float:
    """Distance driven in world units: straights as-is, turns scaled by the radius."""
    return sum(abs(e.param) if e.steering is Steering.STRAIGHT else abs(e.param) * turning_radius
               for e in path)


def reflect(path: Path) -> Path:
    """Mirror a path across its start heading (left <-> right)."""
    return [e.reverse_steering() for e in path]


def timeflip(path: Path) -> Path:
    """Drive a path with every gear reversed."""
    return [e.reverse_gear() for e in path]


def path_str(path: Path) -> str:
    return " ".join(str(e) for e in path) if path else "(empty)"
