# Planner checks: every returned path must actually reach the goal pose.
import math
import random

from .interpolate import integrate, final_pose
from .model import Gear, PathElement, Pose, Steering
from .planner import (
    PATH_FNS, get_all_paths, get_optimal_path, path_arc_length, path_length, reflect, timeflip,
    variant_path,
)

POS_TOL = 0.01
ANG_TOL = 1.0


def _ang_diff(a, b):
    return ((a - b + 180.0) % 360.0) - 180.0


def _random_pairs(n, seed=7):
    rng = random.Random(seed)
    for _ in range(n):
        start = Pose(rng.uniform(-8, 8), rng.uniform(-6, 6), rng.uniform(-360, 360))
        end = Pose(rng.uniform(-8, 8), rng.uniform(-6, 6), rng.uniform(-360, 360))
        yield start, end


def _lands_on(start, path, end, resolution=20):
    x, y, th = integrate(start, path, resolution)[-1]
    return (math.hypot(x - end.x, y - end.y) <= POS_TOL
            and abs(_ang_diff(math.degrees(th), end.theta_degree)) <= ANG_TOL)


def test_optimal_path_round_trip():
    for start, end in _random_pairs(40):
        path = get_optimal_path(start, end)
        assert path is not None
        assert _lands_on(start, path, end), (start, end, path)


def test_every_candidate_reaches_goal():
    for start, end in _random_pairs(10, seed=11):
        paths = get_all_paths(start, end)
        assert len(paths) >= 4
        for path in paths:
            assert _lands_on(start, path, end)


def test_optimal_is_shortest():
    for start, end in _random_pairs(10, seed=3):
        best = path_length(get_optimal_path(start, end))
        assert all(best <= path_length(p) + 1e-12 for p in get_all_paths(start, end))


def test_straight_ahead_is_one_segment():
    path = get_optimal_path(Pose(0.0, 0.0, 0.0), Pose(5.0, 0.0, 0.0))
    assert abs(path_length(path) - 5.0) < 1e-9
    assert path == [PathElement(path[0].param, Steering.STRAIGHT, Gear.FORWARD)]


def test_coincident_poses_only_yield_loops():
    # the trivial path is dropped; full-circle loops remain valid candidates
    pose = Pose(1.0, 1.0, 30.0)
    for path in get_all_paths(pose, Pose(1.0, 1.0, 30.0)):
        assert path_length(path) > 1.0
        assert _lands_on(pose, path, pose)


def test_turning_radius_scales_paths():
    start, end = Pose(0.0, 0.0, 0.0), Pose(3.0, 4.0, 90.0)
    path = get_optimal_path(start, end, turning_radius=2.0)
    reached = final_pose(start, path, turning_radius=2.0)
    assert math.hypot(reached.x - end.x, reached.y - end.y) < 1e-6
    assert abs(_ang_diff(reached.theta_degree, end.theta_degree)) < 1e-6


def test_optimal_is_shortest_in_world_units_for_wide_radius():
    radius = 3.0
    for start, end in _random_pairs(30, seed=13):
        path = get_optimal_path(start, end, turning_radius=radius)
        assert path is not None
        best = path_arc_length(path, radius)
        others = get_all_paths(start, end, turning_radius=radius)
        assert all(best <= path_arc_length(p, radius) + 1e-9 for p in others)


def test_arc_length_scales_turns_only():
    path = [PathElement(math.pi / 2, Steering.LEFT, Gear.FORWARD),
            PathElement(2.0, Steering.STRAIGHT, Gear.BACKWARDS)]
    assert abs(path_arc_length(path) - path_length(path)) < 1e-12
    assert abs(path_arc_length(path, 3.0) - (1.5 * math.pi + 2.0)) < 1e-12


def test_transforms_preserve_length():
    for start, end in _random_pairs(10, seed=5):
        for p in get_all_paths(start, end):
            assert path_length(reflect(p)) == path_length(p)
            assert path_length(timeflip(p)) == path_length(p)
            assert path_length(timeflip(reflect(p))) == path_length(p)


def test_double_transform_is_identity():
    start = Pose(0.0, 0.0, 0.0)
    for p in get_all_paths(start, Pose(2.0, -1.5, 135.0)):
        assert reflect(reflect(p)) == p
        assert timeflip(timeflip(p)) == p
        assert integrate(start, reflect(reflect(p))) == integrate(start, p)


def test_reflect_mirrors_geometry():
    start = Pose(0.0, 0.0, 0.0)
    path = [PathElement(0.8, Steering.LEFT, Gear.FORWARD), PathElement(1.2, Steering.STRAIGHT, Gear.BACKWARDS)]
    a = final_pose(start, path)
    b = final_pose(start, reflect(path))
    assert abs(a.x - b.x) < 1e-12 and abs(a.y + b.y) < 1e-12
    assert abs(_ang_diff(a.theta_degree, -b.theta_degree)) < 1e-9


def test_variant_paths_reach_goal_or_are_empty():
    start, end = Pose(-2.0, 1.0, 20.0), Pose(1.5, -0.5, 200.0)
    found = 0
    for i in range(len(PATH_FNS)):
        for refl in (False, True):
            for flip in (False, True):
                path = variant_path(start, end, i, refl, flip)
                if path:
                    found += 1
                    assert _lands_on(start, path, end)
    assert found > 0


def test_infeasible_variant_is_empty():
    # family 12 needs the shifted goal at least 4 radii away
    assert variant_path(Pose(0.0, 0.0, 0.0), Pose(0.5, 0.0, 0.0), 11) == []
    assert variant_path(Pose(0.0, 0.0, 0.0), Pose(3.0, 0.0, 0.0), 12) == []
    assert variant_path(Pose(0.0, 0.0, 0.0), Pose(3.0, 0.0, 0.0), -1) == []


def test_create_with_negative_param_flips_gear():
    e = PathElement.create(-1.5, Steering.RIGHT, Gear.FORWARD)
    assert e == PathElement(1.5, Steering.RIGHT, Gear.BACKWARDS)
