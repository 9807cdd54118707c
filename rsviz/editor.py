"""
Interactive editor: the pose placement / editing state machine.

The editor is a plain context object. The frame loop feeds it pointer events
(`press`, `drag`, `release`) in frame coordinates plus the occasional
`reset` and option setters, then calls `update()` once per frame. Path
buffers are rebuilt only when something they depend on changed since the last
rebuild.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .config import (
    PATH_RESOLUTION, TURNING_RADIUS,
    vehicle_flat, path_flat, editor_flat, ui_flat,
)
from .geom import FrameTransform, Point, screen_angle_deg
from .hittest import DragTarget, HitDims, pick_target
from .interpolate import end_pose_error, interpolate
from .model import Path, Pose, path_arc_length, path_str
from . import planner

OPTIMAL = -1


class Phase(Enum):
    PLACING_START = "placing_start"
    DEFINING_START_ANGLE = "defining_start_angle"
    PLACING_END = "placing_end"
    DEFINING_END_ANGLE = "defining_end_angle"
    DISPLAYING_PATHS = "displaying_paths"


STATUS_TEXT = {
    Phase.PLACING_START: "Click to place START position",
    Phase.DEFINING_START_ANGLE: "Drag and release to set START angle",
    Phase.PLACING_END: "Click to place END position",
    Phase.DEFINING_END_ANGLE: "Drag and release to set END angle",
    Phase.DISPLAYING_PATHS: "Drag a car to move it, its headlight to rotate. 'R' resets.",
}


@dataclass
class DragState:
    start_pos: Point
    current_pos: Point


def _pose_key(pose: Optional[Pose]):
    return None if pose is None else pose.as_tuple()


class Editor:

    def __init__(self, cfg: Optional[dict] = None, transform: Optional[FrameTransform] = None):
        cfg = cfg or {}
        veh = vehicle_flat(cfg)
        ed = editor_flat(cfg)
        ui = ui_flat(cfg)
        self.transform = transform or FrameTransform()

        self.turning_radius = float(veh.get("turning_radius", TURNING_RADIUS))
        self.resolution = float(path_flat(cfg).get("resolution", PATH_RESOLUTION))
        self.drag_threshold_px2 = float(ed.get("drag_threshold_px2", 10.0))

        to_world = self.transform.length_to_world
        self.dims = HitDims(
            half_length=to_world(float(veh.get("length_px", 50.0)) * 0.5),
            half_width=to_world(float(veh.get("width_px", 30.0)) * 0.5),
            headlight_radius=to_world(float(veh.get("headlight_radius_px", 10.0))),
            shape=str(ed.get("body_hit_shape", "rect")),
            body_radius=to_world(float(ed.get("body_hit_radius_px", 25.0))),
        )

        self.variant = OPTIMAL
        self.reflect = False
        self.timeflip = False
        self.show_all = bool(int(ui.get("show_all_paths", 1)))
        self.verbose = bool(int(ui.get("verbose", 0)))
        self._clear()

    def _clear(self):
        self.phase = Phase.PLACING_START
        self.start_pose: Optional[Pose] = None
        self.end_pose: Optional[Pose] = None
        self.drag_state: Optional[DragState] = None
        self.drag_target: Optional[DragTarget] = None
        self.grab_offset: Tuple[float, float] = (0.0, 0.0)
        self.all_paths_points: List[List[Point]] = []
        self.selected_points: List[Point] = []
        self.selected_path: Optional[Path] = None
        self.path_count = 0
        self.recompute_count = 0
        self._last_sig = None

    def reset(self):
        """Back to PLACING_START with every pose and path buffer discarded."""
        self._clear()
        print("State reset.")

    # ---------------- options ----------------

    def set_variant(self, index: int):
        if index != OPTIMAL and not 0 <= index < len(planner.PATH_FNS):
            return
        self.variant = index

    def set_reflect(self, flag: bool):
        self.reflect = bool(flag)

    def set_timeflip(self, flag: bool):
        self.timeflip = bool(flag)

    def set_show_all(self, flag: bool):
        self.show_all = bool(flag)

    # ---------------- pointer events ----------------

    def press(self, pos: Point, over_ui: bool = False):
        # presses on the HUD strip never place or grab a pose
        if over_ui:
            return
        wx, wy = self.transform.frame_to_world(pos)
        if self.phase in (Phase.PLACING_START, Phase.PLACING_END):
            pose = Pose(wx, wy, 0.0)
            which = "Start"
            if self.phase is Phase.PLACING_START:
                self.start_pose = pose
                self.phase = Phase.DEFINING_START_ANGLE
            else:
                which = "End"
                self.end_pose = pose
                self.phase = Phase.DEFINING_END_ANGLE
            self.drag_state = DragState(tuple(pos), tuple(pos))
            print(f"{which} position set at screen: ({pos[0]:.1f}, {pos[1]:.1f}), world: ({wx:.2f}, {wy:.2f})")
        elif self.phase is Phase.DISPLAYING_PATHS:
            self.drag_target = pick_target((wx, wy), self.start_pose, self.end_pose, self.dims)
            pose = self._target_pose()
            if pose is not None and not self.drag_target.is_angle:
                self.grab_offset = (pose.x - wx, pose.y - wy)
            else:
                self.grab_offset = (0.0, 0.0)

    def drag(self, pos: Point):
        """Pointer moved while the button is held."""
        if self.phase in (Phase.DEFINING_START_ANGLE, Phase.DEFINING_END_ANGLE):
            if self.drag_state is None:
                return
            self.drag_state.current_pos = tuple(pos)
            angle = screen_angle_deg(self.drag_state.start_pos, self.drag_state.current_pos,
                                     self.drag_threshold_px2)
            pose = self.start_pose if self.phase is Phase.DEFINING_START_ANGLE else self.end_pose
            if angle is not None and pose is not None:
                pose.theta_degree = angle
        elif self.phase is Phase.DISPLAYING_PATHS:
            pose = self._target_pose()
            if pose is None:
                return
            if self.drag_target.is_angle:
                center = self.transform.world_to_frame(pose.x, pose.y)
                angle = screen_angle_deg(center, pos)
                if angle is not None:
                    pose.theta_degree = angle
            else:
                wx, wy = self.transform.frame_to_world(pos)
                pose.x = wx + self.grab_offset[0]
                pose.y = wy + self.grab_offset[1]

    def release(self, pos: Optional[Point] = None):
        if self.phase is Phase.DEFINING_START_ANGLE:
            if self.start_pose is not None:
                print(f"Start angle set to: {self.start_pose.theta_degree:.1f}°")
            self.drag_state = None
            self.phase = Phase.PLACING_END
        elif self.phase is Phase.DEFINING_END_ANGLE:
            if self.end_pose is not None:
                print(f"End angle set to: {self.end_pose.theta_degree:.1f}°")
            self.drag_state = None
            self.phase = Phase.DISPLAYING_PATHS
            self.recompute()
            if self.show_all:
                print(f"Found {self.path_count} possible paths.")
            if self.selected_path is not None:
                print(f"{self.selection_label()} path length: {self.selected_length:.3f}")
            else:
                print("No path found for current selection.")
        elif self.phase is Phase.DISPLAYING_PATHS:
            self.drag_target = None

    def _target_pose(self) -> Optional[Pose]:
        if self.drag_target is None:
            return None
        return self.start_pose if self.drag_target.is_start else self.end_pose

    # ---------------- path buffers ----------------

    def signature(self):
        return (_pose_key(self.start_pose), _pose_key(self.end_pose),
                self.variant, self.reflect, self.timeflip, self.show_all)

    @property
    def dirty(self) -> bool:
        return self.phase is Phase.DISPLAYING_PATHS and self.signature() != self._last_sig

    def update(self) -> bool:
        """Once per frame: rebuild the path buffers if their inputs changed."""
        if not self.dirty:
            return False
        self.recompute()
        return True

    def _polyline(self, path: Path) -> List[Point]:
        pts = interpolate(self.start_pose, path, self.resolution, self.transform, self.turning_radius)
        if self.verbose and self.end_pose is not None:
            dist, dth = end_pose_error(self.start_pose, path, self.end_pose, self.turning_radius)
            print(f"  {path_str(path)}  end error: dist={dist:.3f}, angle={dth:.2f}")
        return pts if len(pts) >= 2 else []

    def recompute(self):
        """Discard and rebuild every path buffer from the current poses."""
        self._last_sig = self.signature()
        self.recompute_count += 1
        self.all_paths_points = []
        self.selected_points = []
        self.selected_path = None
        self.path_count = 0

        start, end = self.start_pose, self.end_pose
        if start is None or end is None:
            return
        if self.verbose:
            print("Calculating paths...")
            print(f"Start: ({start.x:.2f}, {start.y:.2f}, {start.theta_degree:.1f}°)")
            print(f"End:   ({end.x:.2f}, {end.y:.2f}, {end.theta_degree:.1f}°)")

        if self.show_all:
            all_paths = planner.get_all_paths(start, end, self.turning_radius)
            self.path_count = len(all_paths)
            for path in all_paths:
                pts = self._polyline(path)
                if pts:
                    self.all_paths_points.append(pts)

        if self.variant == OPTIMAL:
            chosen = planner.get_optimal_path(start, end, self.turning_radius)
        else:
            chosen = planner.variant_path(start, end, self.variant, self.reflect,
                                          self.timeflip, self.turning_radius) or None
        if chosen is None:
            if self.verbose:
                print("No path found for current selection.")
            return
        pts = self._polyline(chosen)
        if pts:
            self.selected_path = chosen
            self.selected_points = pts
        if self.verbose:
            print(f"Selected path length: {path_arc_length(chosen, self.turning_radius):.3f}")

    @property
    def selected_length(self) -> Optional[float]:
        return None if self.selected_path is None else path_arc_length(self.selected_path, self.turning_radius)

    def status_text(self) -> str:
        return STATUS_TEXT[self.phase]

    def selection_label(self) -> str:
        if self.variant == OPTIMAL:
            return "Optimal"
        flags = "".join(f for f, on in (("R", self.reflect), ("T", self.timeflip)) if on)
        name = planner.PATH_NAMES[self.variant]
        return f"Path {self.variant + 1}: {name}" + (f" [{flags}]" if flags else "")
