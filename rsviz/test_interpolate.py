# Closed-form interpolation checks: straight, turns, gear reversal, empty paths.
import math

from .geom import FrameTransform
from .interpolate import integrate, interpolate, final_pose, step_count, end_pose_error
from .model import Gear, PathElement, Pose, Steering

L, R, S = Steering.LEFT, Steering.RIGHT, Steering.STRAIGHT
FWD, BWD = Gear.FORWARD, Gear.BACKWARDS


def _ang_diff(a, b):
    return ((a - b + 180.0) % 360.0) - 180.0


def _end(samples):
    x, y, th = samples[-1]
    return x, y, math.degrees(th)


def test_straight_segment():
    samples = integrate(Pose(0.0, 0.0, 0.0), [PathElement(5.0, S, FWD)], resolution=10)
    x, y, th = _end(samples)
    assert len(samples) == 1 + 50
    assert abs(x - 5.0) < 1e-9 and abs(y) < 1e-9
    assert abs(_ang_diff(th, 0.0)) < 1e-9


def test_quarter_turn_left():
    samples = integrate(Pose(0.0, 0.0, 0.0), [PathElement(math.pi / 2, L, FWD)], resolution=20)
    x, y, th = _end(samples)
    assert abs(x - 1.0) < 1e-9 and abs(y - 1.0) < 1e-9
    assert abs(_ang_diff(th, 90.0)) < 1e-9


def test_quarter_turn_left_backwards():
    # a = -pi/2: dx = sin(-pi/2) - sin(0) = -1, dy = cos(0) - cos(-pi/2) = 1
    samples = integrate(Pose(0.0, 0.0, 0.0), [PathElement(math.pi / 2, L, BWD)], resolution=20)
    x, y, th = _end(samples)
    assert abs(x + 1.0) < 1e-9 and abs(y - 1.0) < 1e-9
    assert abs(_ang_diff(th, 270.0)) < 1e-9


def test_quarter_turn_right():
    samples = integrate(Pose(0.0, 0.0, 0.0), [PathElement(math.pi / 2, R, FWD)], resolution=20)
    x, y, th = _end(samples)
    assert abs(x - 1.0) < 1e-9 and abs(y + 1.0) < 1e-9
    assert abs(_ang_diff(th, -90.0)) < 1e-9


def test_heading_stays_normalized():
    samples = integrate(Pose(0.0, 0.0, 725.0), [PathElement(3 * math.pi, L, BWD)], resolution=5)
    assert all(0.0 <= th < 2 * math.pi for _, _, th in samples)


def test_full_circle_has_no_drift():
    start = Pose(1.5, -2.0, 33.0)
    samples = integrate(start, [PathElement(2 * math.pi, L, FWD)], resolution=500)
    x, y, th = _end(samples)
    assert abs(x - start.x) < 1e-9 and abs(y - start.y) < 1e-9
    assert abs(_ang_diff(th, start.theta_degree)) < 1e-7


def test_step_count_floors_at_one():
    assert step_count(PathElement(1e-6, S, FWD), 20) == 1
    assert step_count(PathElement(math.pi / 2, L, FWD), 20) == math.ceil(math.pi / 2 * 20)
    assert step_count(PathElement(math.pi / 2, L, FWD), 20, turning_radius=2.0) == math.ceil(math.pi * 20)


def test_empty_path_is_single_start_point():
    tf = FrameTransform(1024, 768, 50.0)
    start = Pose(1.0, 2.0, 45.0)
    assert interpolate(start, [], 20, tf) == [tf.world_to_frame(1.0, 2.0)]


def test_inert_segments_are_skipped():
    tf = FrameTransform(1024, 768, 50.0)
    path = [PathElement(1e-12, S, FWD), PathElement(0.0, L, BWD)]
    assert interpolate(Pose(0.0, 0.0, 0.0), path, 20, tf) == [(512.0, 384.0)]


def test_interpolate_returns_frame_points():
    tf = FrameTransform(1024, 768, 50.0)
    pts = interpolate(Pose(0.0, 0.0, 90.0), [PathElement(2.0, S, FWD)], 10, tf)
    assert pts[0] == (512.0, 384.0)
    assert abs(pts[-1][0] - 512.0) < 1e-9 and abs(pts[-1][1] - 284.0) < 1e-9


def test_final_pose_matches_dense_samples():
    start = Pose(-1.0, 0.5, 120.0)
    path = [PathElement(0.7, L, FWD), PathElement(1.3, S, BWD), PathElement(2.1, R, BWD), PathElement(0.4, R, FWD)]
    x, y, th = _end(integrate(start, path, resolution=30))
    end = final_pose(start, path)
    assert abs(end.x - x) < 1e-9 and abs(end.y - y) < 1e-9
    assert abs(_ang_diff(end.theta_degree, th)) < 1e-7
    dist, dth = end_pose_error(start, path, end)
    assert dist < 1e-12 and abs(dth) < 1e-9
