"""Run local environment checks for the Reeds-Shepp visualizer."""

import platform
import sys
from pathlib import Path


def _ok(flag: bool) -> str:
    return "PASS" if flag else "FAIL"


def _warn(flag: bool) -> str:
    return "PASS" if flag else "WARN"


def _can_write(path: Path) -> bool:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        marker = path.parent / ".rsviz_write_test"
        marker.write_text("ok", encoding="utf-8")
        marker.unlink()
        return True
    except OSError:
        return False


def check_planner() -> bool:
    """Solve one sample query and confirm the optimal path lands on the goal."""
    try:
        from rsviz.interpolate import end_pose_error
        from rsviz.model import Pose
        from rsviz.planner import get_optimal_path
    except ImportError:
        return False
    start, goal = Pose(0.0, 0.0, 0.0), Pose(2.0, 1.0, 90.0)
    path = get_optimal_path(start, goal)
    if not path:
        return False
    dist, dth = end_pose_error(start, path, goal)
    return dist < 1e-3 and abs(dth) < 1e-2


def main() -> int:
    root = Path(__file__).resolve().parent
    print("Reeds-Shepp Visualizer Doctor")
    print(f"- OS: {platform.system()} {platform.release()}")
    print(f"- Python: {platform.python_version()} ({sys.executable})")

    py_ok = sys.version_info >= (3, 8)
    print(f"[{_ok(py_ok)}] Python >= 3.8")
    if not py_ok:
        return 1

    try:
        import pygame  # noqa: F401
        pg_ok = True
    except ImportError:
        pg_ok = False
    print(f"[{_ok(pg_ok)}] pygame available")

    try:
        import tkinter  # noqa: F401
        tk_ok = True
    except ImportError:
        tk_ok = False
    print(f"[{_warn(tk_ok)}] tkinter available (control panel)")

    required = [
        root / "main.py",
        root / "rsviz" / "config.py",
        root / "rsviz" / "editor.py",
        root / "rsviz" / "interpolate.py",
        root / "rsviz" / "planner.py",
    ]
    files_ok = all(p.exists() for p in required)
    print(f"[{_ok(files_ok)}] core files present")
    if not files_ok:
        for p in required:
            if not p.exists():
                print(f"       Missing: {p}")

    try:
        from rsviz.config import _config_candidates

        cfg_candidates = [Path(p) for p in _config_candidates()]
    except ImportError:
        cfg_candidates = [root / "config.json"]
    writable = any(_can_write(p) for p in cfg_candidates)
    print(f"[{_ok(writable)}] writable config path available")

    plan_ok = files_ok and check_planner()
    print(f"[{_ok(plan_ok)}] planner solves a sample query")

    all_ok = py_ok and pg_ok and files_ok and writable and plan_ok
    if all_ok:
        print("All checks passed.")
        return 0
    print("One or more checks failed.")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
