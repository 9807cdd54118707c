# reeds-shepp-visualizer/main.py
import os

# Ensure SDL picks a usable video driver (helps when run from terminals that default to headless)
if os.name == "nt" and not os.environ.get("SDL_VIDEODRIVER"):
    os.environ["SDL_VIDEODRIVER"] = "windows"

import pygame

from rsviz.config import (
    BG_COLOR, START_COLOR, END_COLOR,
    load_config, save_config, window_flat, vehicle_flat, editor_flat, ui_flat,
)
from rsviz.draw import (
    draw_grid, draw_axes, draw_pose, draw_paths, draw_drag_line, draw_hud, draw_label,
)
from rsviz.editor import Editor, Phase, OPTIMAL
from rsviz.geom import FrameTransform
from rsviz.hittest import DragTarget

APP_TITLE = "Reeds-Shepp Path Visualizer"

CONTROLS = [
    ("LeftClick + Drag", "Place a pose, release to fix its heading."),
    ("Drag car / headlight", "Move a placed pose / rotate it."),
    ("R", "Reset both poses"),
    ("O", "Show the optimal path"),
    ("1-9, 0, -, =", "Force path family 1..12"),
    ("F / T", "Toggle reflect / time-flip of the forced family"),
    ("A", "Toggle drawing of all candidate paths"),
    ("V", "Toggle verbose end-pose residual log"),
    ("P", "Toggle control panel"),
    ("S", "Save config"),
    ("Esc", "Quit"),
]

VARIANT_KEYS = {
    pygame.K_1: 0, pygame.K_2: 1, pygame.K_3: 2, pygame.K_4: 3,
    pygame.K_5: 4, pygame.K_6: 5, pygame.K_7: 6, pygame.K_8: 7,
    pygame.K_9: 8, pygame.K_0: 9, pygame.K_MINUS: 10, pygame.K_EQUALS: 11,
}


def _print_controls():
    print("\nControls:")
    for key, text in CONTROLS:
        print(f"    {key:<22} - {text}")
    print()


def _start_panel(editor):
    """Open the tkinter panel; returns the ui module or None if Tk is unavailable."""
    try:
        from rsviz import ui
        ui.open_control_panel(editor)
        return ui
    except Exception as e:
        print(f"Warning: control panel unavailable ({e}). Keyboard shortcuts still work.")
        return None


def _handle_key(event, editor, cfg, ui):
    if event.key == pygame.K_r:
        editor.reset()
    elif event.key == pygame.K_o:
        editor.set_variant(OPTIMAL)
    elif event.key in VARIANT_KEYS:
        editor.set_variant(VARIANT_KEYS[event.key])
    elif event.key == pygame.K_f:
        editor.set_reflect(not editor.reflect)
    elif event.key == pygame.K_t:
        editor.set_timeflip(not editor.timeflip)
    elif event.key == pygame.K_a:
        editor.set_show_all(not editor.show_all)
    elif event.key == pygame.K_v:
        editor.verbose = not editor.verbose
        print(f"Verbose log {'on' if editor.verbose else 'off'}.")
    elif event.key == pygame.K_p:
        if ui is None:
            ui = _start_panel(editor)
        else:
            ui.toggle_control_panel(editor)
    elif event.key == pygame.K_s:
        cfg["ui"]["show_all_paths"] = {"value": int(editor.show_all)}
        cfg["ui"]["verbose"] = {"value": int(editor.verbose)}
        save_config(cfg)
    return ui


def main():
    """Main application loop."""
    cfg = load_config()
    win = window_flat(cfg)
    veh = vehicle_flat(cfg)
    hud_height = int(editor_flat(cfg).get("hud_height_px", 70))

    width, height = int(win["width"]), int(win["height"])
    fps = int(win.get("fps", 60))
    transform = FrameTransform(width, height, float(win["draw_scale"]))
    editor = Editor(cfg, transform)

    pygame.init()
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption(APP_TITLE)
    clock = pygame.time.Clock()
    font = pygame.font.SysFont(None, 24)
    font_small = pygame.font.SysFont(None, 18)
    _print_controls()

    ui = _start_panel(editor) if int(ui_flat(cfg).get("control_panel", 1)) else None

    running = True
    while running:
        clock.tick(fps)
        if ui is not None:
            ui.pump_tk()
        mouse_pos = pygame.mouse.get_pos()

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                else:
                    ui = _handle_key(event, editor, cfg, ui)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                editor.press(event.pos, over_ui=event.pos[1] < hud_height)
            elif event.type == pygame.MOUSEMOTION and event.buttons[0]:
                editor.drag(event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                editor.release(event.pos)

        editor.update()
        if ui is not None:
            ui.sync_control_panel(editor)

        # Drawing
        screen.fill(BG_COLOR)
        draw_grid(screen, transform)
        draw_axes(screen, transform)
        if editor.phase is Phase.DISPLAYING_PATHS:
            draw_paths(screen, editor.all_paths_points, editor.selected_points)

        target = editor.drag_target
        for pose, color, body, angle in (
            (editor.start_pose, START_COLOR, DragTarget.START_BODY, DragTarget.START_ANGLE),
            (editor.end_pose, END_COLOR, DragTarget.END_BODY, DragTarget.END_ANGLE),
        ):
            if pose is not None:
                draw_pose(screen, transform, pose, color,
                          float(veh["length_px"]), float(veh["width_px"]), float(veh["headlight_radius_px"]),
                          body_active=(target is body), handle_active=(target is angle))

        if target is not None:
            pose = editor.start_pose if target.is_start else editor.end_pose
            draw_label(screen, mouse_pos,
                       [f"x={pose.x:.2f}  y={pose.y:.2f}", f"heading={pose.theta_degree % 360.0:.1f} deg"],
                       font_small)
        draw_drag_line(screen, editor.drag_state)
        draw_hud(screen, editor, mouse_pos, font, font_small, hud_height)

        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
