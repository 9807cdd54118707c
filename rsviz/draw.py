# rsviz/draw.py

from __future__ import annotations

import math, pygame

try:
    from pygame import gfxdraw
except Exception:
    gfxdraw = None

from .config import (
    GRID_COLOR, TEXT_COLOR, HINT_COLOR, HANDLE_COLOR, ACTIVE_COLOR,
    ALL_PATH_COLOR, OPTIMAL_COLOR, AXIS_X_COLOR, AXIS_Y_COLOR, HUD_BG,
)
from .editor import Phase
from .geom import oriented_rect_corners
from .hittest import headlight_position
from .model import path_str


def _aa_polygon(surface, color, pts, width=0):
    """Anti-aliased polygon with fallback."""
    if gfxdraw is not None:
        try:
            gfxdraw.aapolygon(surface, pts, color)
            if width == 0:
                gfxdraw.filled_polygon(surface, pts, color)
            else:
                pygame.draw.polygon(surface, color, pts, width)
            return
        except Exception:
            pass
    pygame.draw.polygon(surface, color, pts, width)


def draw_grid(surface, transform):
    """Grid lines on whole world units, centered on the origin."""
    w, h = surface.get_width(), surface.get_height()
    step = transform.scale
    if step < 4:
        return
    x = transform.cx % step
    while x < w:
        pygame.draw.line(surface, GRID_COLOR, (x, 0), (x, h))
        x += step
    y = transform.cy % step
    while y < h:
        pygame.draw.line(surface, GRID_COLOR, (0, y), (w, y))
        y += step


def draw_axes(surface, transform):
    """Origin dot with one-unit +x / +y axes."""
    ox, oy = transform.world_to_frame(0.0, 0.0)
    pygame.draw.circle(surface, TEXT_COLOR, (int(ox), int(oy)), 5)
    pygame.draw.line(surface, AXIS_X_COLOR, (ox, oy), (ox + transform.scale, oy), 1)
    pygame.draw.line(surface, AXIS_Y_COLOR, (ox, oy), (ox, oy - transform.scale), 1)


def draw_chevron(surface, pos, heading_deg, length=20, offset=45, arm=10, color=HANDLE_COLOR):
    """Draw directional arrow chevron."""
    rad = math.radians(heading_deg)
    tip = (pos[0] + length * math.cos(rad), pos[1] - length * math.sin(rad))
    l = math.radians(heading_deg - offset)
    r = math.radians(heading_deg + offset)
    left = (tip[0] - arm * math.cos(l), tip[1] + arm * math.sin(l))
    right = (tip[0] - arm * math.cos(r), tip[1] + arm * math.sin(r))
    pygame.draw.line(surface, color, tip, left, 2)
    pygame.draw.line(surface, color, tip, right, 2)


def draw_pose(surface, transform, pose, color, length_px, width_px, headlight_radius_px,
              body_active=False, handle_active=False):
    """Vehicle footprint, heading line and headlight handle."""
    center = transform.world_to_frame(pose.x, pose.y)
    corners = oriented_rect_corners(center, pose.theta_degree, length_px, width_px)
    _aa_polygon(surface, color, corners, 0)
    if body_active:
        pygame.draw.polygon(surface, ACTIVE_COLOR, corners, 2)

    half_len = transform.length_to_world(length_px * 0.5)
    hx, hy = transform.world_to_frame(*headlight_position(pose, half_len))
    pygame.draw.line(surface, HANDLE_COLOR, center, (hx, hy), 2)
    handle_color = ACTIVE_COLOR if handle_active else HANDLE_COLOR
    pygame.draw.circle(surface, handle_color, (int(hx), int(hy)), int(headlight_radius_px), 1)
    draw_chevron(surface, (hx, hy), pose.theta_degree, length=8, arm=6, color=handle_color)


def draw_polyline(surface, points, color, width):
    if len(points) < 2:
        return
    if width <= 1:
        pygame.draw.aalines(surface, color, False, points)
    else:
        pygame.draw.lines(surface, color, False, points, width)


def draw_paths(surface, all_paths_points, selected_points):
    """All candidates thin, the selected one thick on top."""
    for pts in all_paths_points:
        draw_polyline(surface, pts, ALL_PATH_COLOR, 1)
    draw_polyline(surface, selected_points, OPTIMAL_COLOR, 3)


def draw_drag_line(surface, drag_state):
    if drag_state is None:
        return
    pygame.draw.line(surface, ACTIVE_COLOR, drag_state.start_pos, drag_state.current_pos, 2)


def draw_label(surface, anchor_xy, lines, font_small):
    """Draw text label box at position."""
    pad = 6
    text_surfs = [font_small.render(s, True, (220, 220, 220)) for s in lines]
    if not text_surfs:
        return
    w = max(t.get_width() for t in text_surfs) + pad * 2
    h = sum(t.get_height() for t in text_surfs) + pad * 2
    x = min(max(0, anchor_xy[0] + 12), surface.get_width() - w)
    y = min(max(0, anchor_xy[1] + 12), surface.get_height() - h)
    pygame.draw.rect(surface, (0, 0, 0), (x, y, w, h))
    cy = y + pad
    for t in text_surfs:
        surface.blit(t, (x + pad, cy))
        cy += t.get_height()


def draw_hud(surface, editor, mouse_pos, font, font_small, hud_height):
    """Status strip: phase hint, pointer world coords and current selection."""
    pygame.draw.rect(surface, HUD_BG, (0, 0, surface.get_width(), hud_height))
    surface.blit(font.render(editor.status_text(), True, TEXT_COLOR), (20, 8))

    wx, wy = editor.transform.frame_to_world(mouse_pos)
    info = f"World Coords: ({wx:.2f}, {wy:.2f})    Selection: {editor.selection_label()}"
    length = editor.selected_length
    if length is not None:
        info += f"    Length: {length:.3f}"
    elif editor.start_pose is not None and editor.end_pose is not None and editor.phase is Phase.DISPLAYING_PATHS:
        info += "    No path"
    surface.blit(font_small.render(info, True, HINT_COLOR), (20, 34))

    if editor.selected_path is not None:
        surface.blit(font_small.render(path_str(editor.selected_path), True, HINT_COLOR), (20, 50))
