from __future__ import annotations

import logging
import tkinter as tk

from levelgrid.domain.expansion import Vec3
from levelgrid.domain.level import Palette

logger = logging.getLogger(__name__)


class TkPreviewHost:
    """
    Top-down stand-in for the 3-D host: every placement becomes a canvas item.
    World x maps to canvas x and world z to canvas y; y (height) is ignored.
    """

    def __init__(self, master: tk.Misc, *, width: int, height: int, px_per_unit: float) -> None:
        self._w = width
        self._h = height
        self._scale = px_per_unit

        self.canvas = tk.Canvas(master, width=width, height=height, highlightthickness=0)
        self._text_id: int | None = None
        self._primary = "#8888aa"
        self._accent = "#ff4444"

    def reset(self, palette: Palette | None) -> None:
        self.canvas.delete("all")
        palette = palette or Palette()
        self.canvas.config(background=palette.background or "#000000")
        self._primary = palette.primary or "#8888aa"
        self._accent = palette.accent or "#ff4444"
        self._text_id = self.canvas.create_text(10, 10, anchor="nw", text="", fill="#fff")

    def set_caption(self, text: str) -> None:
        if self._text_id is not None:
            self.canvas.itemconfigure(self._text_id, text=text)

    # ---------- PlacementHost ----------

    def instantiate_static(self, position: Vec3) -> int:
        return self._square(position, 1.0, self._primary, "block")

    def instantiate_goal_marker(self, position: Vec3) -> int:
        return self._square(position, 0.8, "#4c4", "goal")

    def instantiate_player(self, position: Vec3) -> int:
        return self._square(position, 0.6, "#66f", "player")

    def instantiate_enemy(self, position: Vec3) -> int:
        return self._square(position, 0.6, self._accent, "enemy")

    def request_skybox(self, url: str) -> None:
        # The preview has no sky; only report what the host would fetch.
        logger.info("preview skips skybox %s", url)

    def _square(self, position: Vec3, size: float, fill: str, tag: str) -> int:
        cx = self._w / 2 + position.x * self._scale
        cy = self._h / 2 + position.z * self._scale
        half = size * self._scale / 2
        return self.canvas.create_rectangle(cx - half, cy - half, cx + half, cy + half, outline="", fill=fill, tags=(tag,))
