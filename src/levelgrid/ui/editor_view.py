from __future__ import annotations

import tkinter as tk
from collections.abc import Callable
from tkinter import colorchooser

from levelgrid.domain.designer import LevelDesigner
from levelgrid.domain.grid import Cell

_CELL_FILL = {
    Cell.EMPTY: "",
    Cell.SOLID: "#999",
    Cell.SPAWN: "#66f",
    Cell.GOAL: "#4c4",
    Cell.ENEMY: "#f44",
}

THEMES = ("default", "forest", "desert", "space")


class EditorView(tk.Frame):
    def __init__(
        self,
        master: tk.Misc,
        *,
        cell_px: int,
        on_load_clicked: Callable[[], None],
        on_save_clicked: Callable[[], None],
        on_export_clicked: Callable[[], None],
        on_preview_clicked: Callable[[], None],
        on_theme_changed: Callable[[str], None],
        on_palette_changed: Callable[[str, str], None],
        on_cell_left_click: Callable[[int, int], None],
        on_cell_right_click: Callable[[int, int], None],
        initial_theme: str = "default",
    ) -> None:
        super().__init__(master)

        self._cell_px = cell_px
        self._on_palette_changed = on_palette_changed

        # Top bar
        bar = tk.Frame(self)
        bar.pack(side="top", fill="x")

        tk.Button(bar, text="Load…", command=on_load_clicked).pack(side="left", padx=4, pady=4)
        tk.Button(bar, text="Save…", command=on_save_clicked).pack(side="left", padx=4, pady=4)
        tk.Button(bar, text="Export", command=on_export_clicked).pack(side="left", padx=4, pady=4)
        tk.Button(bar, text="Preview ▶", command=on_preview_clicked).pack(side="left", padx=4, pady=4)

        tk.Label(bar, text="Theme:").pack(side="left", padx=(12, 4))
        self._theme_var = tk.StringVar(value=initial_theme)
        tk.OptionMenu(
            bar,
            self._theme_var,
            *THEMES,
            command=lambda v: on_theme_changed(str(v)),
        ).pack(side="left")

        for field in ("background", "primary", "accent"):
            tk.Button(bar, text=field.capitalize(), command=lambda f=field: self._pick_color(f)).pack(
                side="left", padx=2
            )

        self._status = tk.Label(self, text="", anchor="w")
        self._status.pack(side="bottom", fill="x", padx=4)

        # Canvas
        self.canvas = tk.Canvas(self, highlightthickness=0)
        self.canvas.pack(side="top", fill="both", expand=True)

        self.canvas.bind("<Button-1>", lambda e: self._handle_click(e.x, e.y, on_cell_left_click))
        self.canvas.bind("<Button-3>", lambda e: self._handle_click(e.x, e.y, on_cell_right_click))
        self.canvas.bind("<Control-Button-1>", lambda e: self._handle_click(e.x, e.y, on_cell_right_click))

    def set_status(self, text: str) -> None:
        self._status.config(text=text)

    def render(self, designer: LevelDesigner) -> None:
        self.canvas.delete("all")

        cols = designer.width
        rows = designer.height
        cell = self._cell_px
        self.canvas.config(width=cols * cell, height=rows * cell)

        for y in range(rows):
            for x in range(cols):
                sym = designer.cell_at(x, y)
                x1, y1 = x * cell, y * cell
                self.canvas.create_rectangle(x1, y1, x1 + cell, y1 + cell, outline="#ccc", fill=_CELL_FILL[sym])
                if sym is not Cell.EMPTY:
                    self.canvas.create_text(x1 + cell / 2, y1 + cell / 2, text=sym.value)

    def _pick_color(self, field: str) -> None:
        _rgb, hex_color = colorchooser.askcolor(title=f"{field} colour")
        if hex_color:
            self._on_palette_changed(field, hex_color)

    def _handle_click(self, px: int, py: int, cb: Callable[[int, int], None]) -> None:
        cell = self._cell_px
        x = px // cell
        y = py // cell
        cb(int(x), int(y))
