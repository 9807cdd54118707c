# rsviz/config.py
from __future__ import annotations
import json, os
from typing import Optional

# Window and frame
WINDOW_WIDTH  = 1024
WINDOW_HEIGHT = 768
DRAW_SCALE    = 50.0   # pixels per world unit
FPS           = 60

# Interpolation
EPSILON          = 1e-10
PATH_RESOLUTION  = 20.0   # points per unit length / radian
TURNING_RADIUS   = 1.0

# Colors (RGB)
BG_COLOR      = (64, 64, 64)
GRID_COLOR    = (80, 80, 80)
TEXT_COLOR    = (255, 255, 255)
HINT_COLOR    = (200, 200, 200)
START_COLOR   = (0, 121, 241)
END_COLOR     = (230, 41, 55)
HANDLE_COLOR  = (255, 255, 255)
ACTIVE_COLOR  = (253, 249, 0)
ALL_PATH_COLOR = (204, 204, 255)
OPTIMAL_COLOR = (255, 255, 0)
AXIS_X_COLOR  = (255, 0, 0)
AXIS_Y_COLOR  = (0, 158, 47)
HUD_BG        = (30, 30, 30)

CONFIG_FILENAME = "config.json"

DEFAULT_CONFIG = {
    "window": {
        "width":      {"value": WINDOW_WIDTH},
        "height":     {"value": WINDOW_HEIGHT},
        "draw_scale": {"value": DRAW_SCALE},
        "fps":        {"value": FPS},
    },
    "vehicle": {
        "length_px":           {"value": 50.0},
        "width_px":            {"value": 30.0},
        "headlight_radius_px": {"value": 10.0},
        "turning_radius":      {"value": TURNING_RADIUS},
    },
    "path": {
        "resolution": {"value": PATH_RESOLUTION},
    },
    "editor": {
        "drag_threshold_px2": {"value": 10.0},
        "body_hit_shape":     {"value": "rect"},
        "body_hit_radius_px": {"value": 25.0},
        "hud_height_px":      {"value": 70},
    },
    "ui": {
        "show_all_paths": {"value": 1},
        "verbose":        {"value": 0},
        "control_panel":  {"value": 1},
    },
}

def _flatten(section: dict) -> dict:
    """Extract 'value' from nested dict structure."""
    flat = {}
    for k, v in section.items():
        flat[k] = v.get("value", v) if isinstance(v, dict) and "value" in v else v
    return flat

def _load_json(path: str) -> Optional[dict]:
    """Load JSON file, return None on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except Exception:
        return None

def _save_json(path: str, data: dict) -> None:
    """Save JSON file, creating the parent directory."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)

def _config_candidates():
    here = os.path.dirname(__file__)
    return [os.path.normpath(os.path.join(here, os.pardir, CONFIG_FILENAME))]

def _merge_defaults(data: dict) -> dict:
    """Fill sections/keys missing from a user config with defaults."""
    merged = {}
    for name, section in DEFAULT_CONFIG.items():
        user = data.get(name, {})
        if not isinstance(user, dict):
            user = {}
        merged[name] = {**section, **user}
    return merged

def load_config(path: Optional[str] = None) -> dict:
    """Load config from disk, create default file if missing or unreadable."""
    path = path or _config_candidates()[0]
    data = _load_json(path)
    if not isinstance(data, dict):
        data = DEFAULT_CONFIG
        try:
            _save_json(path, data)
        except OSError as e:
            print(f"Could not write default config to {path}: {e}")
    return _merge_defaults(data)

def save_config(cfg: dict, path: Optional[str] = None) -> bool:
    """Save flattened or wrapped config back to disk."""
    path = path or _config_candidates()[0]
    try:
        def wrap(v): return v if isinstance(v, dict) and "value" in v else {"value": v}
        raw = {name: {k: wrap(v) for k, v in section.items()}
               for name, section in cfg.items()}
        _save_json(path, raw)
        print(f"Config saved to {path}")
        return True
    except (OSError, TypeError, AttributeError) as e:
        print(f"Failed to save config: {e}")
        return False

def window_flat(cfg: dict) -> dict:
    """Flatten window section."""
    return _flatten(cfg.get("window", {}))

def vehicle_flat(cfg: dict) -> dict:
    """Flatten vehicle section."""
    return _flatten(cfg.get("vehicle", {}))

def path_flat(cfg: dict) -> dict:
    """Flatten path section."""
    return _flatten(cfg.get("path", {}))

def editor_flat(cfg: dict) -> dict:
    """Flatten editor section."""
    return _flatten(cfg.get("editor", {}))

def ui_flat(cfg: dict) -> dict:
    """Flatten ui section."""
    return _flatten(cfg.get("ui", {}))
