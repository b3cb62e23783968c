from __future__ import annotations

import tkinter as tk
from pathlib import Path
from tkinter import filedialog
from typing import Any

from levelgrid.app.editor_controller import EditorController, LevelRejected
from levelgrid.app.level_pipeline import prepare_level
from levelgrid.config import levels_dir
from levelgrid.domain.designer import LevelDesigner
from levelgrid.domain.host import populate_host
from levelgrid.infra.exceptions import LevelIOError
from levelgrid.infra.level_repository import LevelRepository
from levelgrid.ui.editor_view import EditorView
from levelgrid.ui.preview_view import TkPreviewHost


class EditorApp:
    def __init__(self, config: dict[str, Any], *, initial_path: Path | None = None) -> None:
        self.root = tk.Tk()
        self.root.title("Level Designer")

        # One place for content widgets
        self.content = tk.Frame(self.root)
        self.content.pack(fill="both", expand=True)

        editor_conf = config["editor"]
        theme_conf = config["theme"]
        cell_px = int(editor_conf["cell_px"])

        designer = LevelDesigner(int(editor_conf["width"]), int(editor_conf["height"]))
        designer.set_theme(theme_conf["name"])
        designer.set_palette(**theme_conf["palette"])
        self.editor = EditorController(designer, strict=bool(config["validation"]["strict"]))
        self.repo = LevelRepository(levels_dir=levels_dir(config))

        # --- Editor view ---
        self.editor_view = EditorView(
            self.content,
            cell_px=cell_px,
            on_load_clicked=self._editor_load,
            on_save_clicked=self._editor_save,
            on_export_clicked=self._editor_export,
            on_preview_clicked=self._show_preview,
            on_theme_changed=self._editor_theme_changed,
            on_palette_changed=self._editor_palette_changed,
            on_cell_left_click=self._editor_cycle,
            on_cell_right_click=self._editor_clear,
            initial_theme=theme_conf["name"],
        )

        # --- Preview (top-down placement host) ---
        self.preview = TkPreviewHost(self.content, width=640, height=480, px_per_unit=cell_px)
        self.preview.canvas.bind("<Button-1>", lambda _e: self._show_editor())

        self._install_menu()

        if initial_path is not None:
            self._load_path(initial_path)
        self._show_editor()

    def _install_menu(self) -> None:
        menubar = tk.Menu(self.root)
        mode_menu = tk.Menu(menubar, tearoff=0)
        mode_menu.add_command(label="Preview", command=self._show_preview)
        mode_menu.add_command(label="Editor", command=self._show_editor)
        menubar.add_cascade(label="Mode", menu=mode_menu)
        self.root.config(menu=menubar)

    def run(self) -> None:
        self.root.mainloop()

    # ---------- Mode switching ----------

    def _show_preview(self) -> None:
        prepared = prepare_level(self.editor.designer.build(), strict=self.editor.state.strict)
        if not prepared.playable:
            self.editor_view.set_status("Not playable: " + "; ".join(prepared.errors))
            return

        self.preview.reset(prepared.record.palette)
        populate_host(self.preview, prepared.placements)
        self.preview.set_caption(f"{prepared.record.name or 'untitled'} (click to return)")

        self.editor_view.pack_forget()
        self.preview.canvas.pack(fill="both", expand=True)

    def _show_editor(self) -> None:
        self.preview.canvas.pack_forget()
        self.editor_view.pack(fill="both", expand=True)
        self.editor_view.set_status("Left click = cycle . S P G E, Right click = clear")
        self.editor_view.render(self.editor.designer)

    # ---------- Editor callbacks ----------

    def _editor_cycle(self, x: int, y: int) -> None:
        self.editor.click_cycle(x, y)
        self.editor_view.render(self.editor.designer)

    def _editor_clear(self, x: int, y: int) -> None:
        self.editor.click_clear(x, y)
        self.editor_view.render(self.editor.designer)

    def _editor_theme_changed(self, name: str) -> None:
        self.editor.set_theme(name)
        self.editor_view.set_status(f"Theme: {name}")

    def _editor_palette_changed(self, field: str, color: str) -> None:
        self.editor.set_palette(**{field: color})
        self.editor_view.set_status(f"{field} = {color}")

    def _editor_load(self) -> None:
        path_str = filedialog.askopenfilename(
            title="Load level",
            filetypes=[("Level JSON", "*.json"), ("All files", "*.*")],
        )
        if not path_str:
            return
        self._load_path(Path(path_str))
        self.editor_view.render(self.editor.designer)

    def _load_path(self, path: Path) -> None:
        try:
            self.editor.load_from(path)
        except (LevelIOError, ValueError) as e:
            self.editor_view.set_status(f"Load failed: {e}")
            return
        self.editor_view.set_status(f"Loaded: {path.name}")

    def _editor_save(self) -> None:
        path_str = filedialog.asksaveasfilename(
            title="Save level",
            defaultextension=".json",
            filetypes=[("Level JSON", "*.json"), ("All files", "*.*")],
        )
        if not path_str:
            return
        try:
            self.editor.save_to(Path(path_str))
        except LevelRejected as e:
            self.editor_view.set_status(f"Not saved: {e}")
            return
        self.editor_view.set_status(f"Saved: {Path(path_str).name}")

    def _editor_export(self) -> None:
        try:
            saved = self.editor.export_to_repository(self.repo)
        except LevelRejected as e:
            self.editor_view.set_status(f"Not exported: {e}")
            return
        self.editor_view.set_status(f"Exported: {saved.path}")
