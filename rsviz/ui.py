"""
Tkinter control panel for the visualizer: path variant selection plus the
reflect / time-flip / show-all switches. Pumped from the pygame frame loop.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from .planner import PATH_NAMES

tk_root = None
tk_panel_win = None
_panel_vars = {}

VARIANT_CHOICES = ["Optimal"] + [f"Path {i + 1}: {name}" for i, name in enumerate(PATH_NAMES)]


def ensure_tk_root():
    """Initialize Tkinter root window with styling."""
    global tk_root
    if tk_root is None or not (hasattr(tk_root, "winfo_exists") and tk_root.winfo_exists()):
        tk_root = tk.Tk()
        try:
            style = ttk.Style(tk_root)
            if "clam" in style.theme_names():
                style.theme_use("clam")
            style.configure("TFrame", padding=6)
            style.configure("TLabel", padding=2)
            style.configure("TButton", padding=4)
            style.configure("Header.TLabel", font=("Segoe UI", 12, "bold"))
            style.configure("Help.TLabel", foreground="#777777")
        except tk.TclError:
            pass
        tk_root.withdraw()
    return tk_root


def pump_tk():
    """Update Tkinter event loop."""
    global tk_root, tk_panel_win
    if tk_root is None:
        return
    try:
        tk_root.update()
        if tk_panel_win is not None and not tk_panel_win.winfo_exists():
            tk_panel_win = None
    except tk.TclError:
        tk_root = None
        tk_panel_win = None


class _Tooltip:
    """Hover tooltip for widgets."""

    def __init__(self, widget, text):
        self.widget = widget
        self.text = text
        self.tip = None
        widget.bind("<Enter>", self._show)
        widget.bind("<Leave>", self._hide)

    def _show(self, _=None):
        if self.tip or not self.text:
            return
        x = self.widget.winfo_rootx() + 20
        y = self.widget.winfo_rooty() + self.widget.winfo_height() + 8
        self.tip = tk.Toplevel(self.widget)
        self.tip.wm_overrideredirect(True)
        self.tip.geometry(f"+{x}+{y}")
        frame = ttk.Frame(self.tip, padding=6, style="TFrame")
        frame.pack()
        label = ttk.Label(frame, text=self.text, justify="left", wraplength=360)
        label.pack()

    def _hide(self, _=None):
        if self.tip:
            try:
                self.tip.destroy()
            except tk.TclError:
                pass
            self.tip = None


def add_tooltip(widget, text):
    """Add tooltip to widget."""
    if text:
        _Tooltip(widget, text)


def open_control_panel(editor):
    """Build the control panel window bound to `editor`."""
    global tk_panel_win, _panel_vars
    root = ensure_tk_root()
    if tk_panel_win is not None and tk_panel_win.winfo_exists():
        tk_panel_win.lift()
        return tk_panel_win

    top = tk.Toplevel(root)
    tk_panel_win = top
    top.title("Paths")
    top.resizable(False, False)
    frame = ttk.Frame(top)
    frame.pack(fill="both", expand=True)

    ttk.Label(frame, text="Path selection", style="Header.TLabel").grid(row=0, column=0, sticky="w")

    variant = tk.StringVar(value=VARIANT_CHOICES[editor.variant + 1])
    combo = ttk.Combobox(frame, textvariable=variant, values=VARIANT_CHOICES, state="readonly", width=28)
    combo.grid(row=1, column=0, sticky="we", pady=(2, 6))
    add_tooltip(combo, "Optimal picks the shortest candidate.\nPath N forces one Reeds-Shepp formula family.")

    def _on_variant(_=None):
        editor.set_variant(VARIANT_CHOICES.index(variant.get()) - 1)
    combo.bind("<<ComboboxSelected>>", _on_variant)

    flags = {
        "reflect": tk.BooleanVar(value=editor.reflect),
        "timeflip": tk.BooleanVar(value=editor.timeflip),
        "show_all": tk.BooleanVar(value=editor.show_all),
        "verbose": tk.BooleanVar(value=editor.verbose),
    }
    rows = [
        ("reflect", "Reflect", editor.set_reflect, "Mirror the selected family (swap left / right turns)."),
        ("timeflip", "Time-flip", editor.set_timeflip, "Drive the selected family with gears reversed."),
        ("show_all", "Show all paths", editor.set_show_all, "Draw every feasible candidate."),
        ("verbose", "Verbose log", lambda v: setattr(editor, "verbose", bool(v)),
         "Print end-pose residuals for every computed path."),
    ]
    for i, (key, text, setter, tip) in enumerate(rows, start=2):
        var = flags[key]
        cb = ttk.Checkbutton(frame, text=text, variable=var,
                             command=lambda s=setter, v=var: s(v.get()))
        cb.grid(row=i, column=0, sticky="w")
        add_tooltip(cb, tip)

    btn = ttk.Button(frame, text="Reset poses", command=editor.reset)
    btn.grid(row=len(rows) + 2, column=0, sticky="we", pady=(6, 0))
    ttk.Label(frame, text="Reflect / time-flip apply to Path N only.",
              style="Help.TLabel").grid(row=len(rows) + 3, column=0, sticky="w")

    _panel_vars = {"variant": variant, **flags}

    def _on_close():
        global tk_panel_win
        tk_panel_win = None
        top.destroy()
    top.protocol("WM_DELETE_WINDOW", _on_close)
    return top


def sync_control_panel(editor):
    """Mirror editor options changed from the keyboard into the widgets."""
    if tk_panel_win is None or not _panel_vars:
        return
    try:
        choice = VARIANT_CHOICES[editor.variant + 1]
        if _panel_vars["variant"].get() != choice:
            _panel_vars["variant"].set(choice)
        for key in ("reflect", "timeflip", "show_all", "verbose"):
            val = bool(getattr(editor, key))
            if _panel_vars[key].get() != val:
                _panel_vars[key].set(val)
    except tk.TclError:
        pass


def toggle_control_panel(editor):
    """Toggle control panel visibility."""
    global tk_panel_win
    if tk_panel_win is not None and tk_panel_win.winfo_exists():
        try:
            tk_panel_win.destroy()
        except tk.TclError:
            pass
        tk_panel_win = None
        return
    open_control_panel(editor)
