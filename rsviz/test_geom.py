# Frame transform and angle helper checks.
import math

from .geom import FrameTransform, normalize_rad, angle_diff_deg, screen_angle_deg, oriented_rect_corners


def test_origin_maps_to_frame_center():
    tf = FrameTransform(1024, 768, 50.0)
    assert tf.world_to_frame(0.0, 0.0) == (512.0, 384.0)
    assert tf.frame_to_world((512.0, 384.0)) == (0.0, 0.0)


def test_world_y_up_is_frame_y_down():
    tf = FrameTransform(1024, 768, 50.0)
    fx, fy = tf.world_to_frame(1.0, 2.0)
    assert fx == 562.0 and fy == 284.0


def test_inverse_law():
    tf = FrameTransform(800, 600, 37.5)
    for i in range(-7, 8):
        for j in range(-5, 6):
            x, y = i * 0.731, j * -1.117
            bx, by = tf.frame_to_world(tf.world_to_frame(x, y))
            assert abs(bx - x) < 1e-9 and abs(by - y) < 1e-9


def test_normalize_rad_range():
    for a in (-7.0, -math.pi, -1e-18, 0.0, math.pi, 2 * math.pi, 13.0):
        n = normalize_rad(a)
        assert 0.0 <= n < 2 * math.pi
        assert abs(math.sin(n) - math.sin(a)) < 1e-12


def test_angle_diff_wraps():
    assert angle_diff_deg(350.0, 10.0) == -20.0
    assert angle_diff_deg(10.0, 350.0) == 20.0
    assert angle_diff_deg(-90.0, 270.0) == 0.0


def test_screen_angle_flips_to_world_convention():
    assert screen_angle_deg((0, 0), (10, 0)) == 0.0
    assert abs(screen_angle_deg((0, 0), (0, -10)) - 90.0) < 1e-12
    assert abs(screen_angle_deg((0, 0), (0, 10)) + 90.0) < 1e-12


def test_screen_angle_threshold():
    assert screen_angle_deg((0, 0), (0, 0)) is None
    assert screen_angle_deg((0, 0), (3, 1), min_dist2=10.0) is None
    assert screen_angle_deg((0, 0), (3, 2), min_dist2=10.0) is not None


def test_rect_corners_follow_heading():
    pts = oriented_rect_corners((100.0, 100.0), 90.0, 50.0, 30.0)
    xs = [p[0] for p in pts]
    ys = [p[1] for p in pts]
    assert abs(max(xs) - min(xs) - 30.0) < 1e-9
    assert abs(max(ys) - min(ys) - 50.0) < 1e-9
