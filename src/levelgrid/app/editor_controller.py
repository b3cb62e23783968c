from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from levelgrid.domain.designer import LevelDesigner
from levelgrid.domain.exceptions import OutOfRangeError
from levelgrid.domain.grid import CELL_CYCLE, Cell
from levelgrid.domain.level import LevelRecord
from levelgrid.domain.validation import validate_level
from levelgrid.infra.level_files import load_level_from_path, save_level_to_path
from levelgrid.infra.level_repository import LevelRepository, SaveResult

logger = logging.getLogger(__name__)


class LevelRejected(Exception):
    """Raised when an export is refused because the level does not validate."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass(frozen=True)
class ExportResult:
    record: LevelRecord
    errors: list[str]

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass
class EditorState:
    designer: LevelDesigner
    strict: bool = False
    last_path: Path | None = None


class EditorController:
    def __init__(self, designer: LevelDesigner, *, strict: bool = False) -> None:
        self.state = EditorState(designer=designer, strict=strict)

    @property
    def designer(self) -> LevelDesigner:
        return self.state.designer

    # ---------- Cell clicks ----------

    def click_cycle(self, x: int, y: int) -> Cell | None:
        """Advance the clicked cell to the next symbol. Returns the new symbol, or None for an ignored click."""
        try:
            current = self.designer.cell_at(x, y)
        except OutOfRangeError:
            logger.debug("ignoring click outside grid at (%d, %d)", x, y)
            return None
        nxt = CELL_CYCLE[(CELL_CYCLE.index(current) + 1) % len(CELL_CYCLE)]
        self.click_place(x, y, nxt)
        return nxt

    def click_place(self, x: int, y: int, symbol: Cell) -> None:
        d = self.designer
        actions = {
            Cell.SOLID: d.set_block,
            Cell.SPAWN: d.set_spawn,
            Cell.GOAL: d.set_goal,
            Cell.ENEMY: d.add_enemy,
            Cell.EMPTY: d.clear_cell,
        }
        try:
            actions[symbol](x, y)
        except OutOfRangeError:
            logger.debug("ignoring click outside grid at (%d, %d)", x, y)

    def click_clear(self, x: int, y: int) -> None:
        self.click_place(x, y, Cell.EMPTY)

    # ---------- Metadata ----------

    def set_theme(self, name: str) -> None:
        self.designer.set_theme(name)

    def set_palette(self, **partial: str) -> None:
        self.designer.set_palette(**partial)

    # ---------- Export / files ----------

    def export(self) -> ExportResult:
        record = self.designer.build()
        errors = validate_level(record, strict=self.state.strict)
        if errors:
            logger.info("level does not validate: %s", "; ".join(errors))
        return ExportResult(record=record, errors=errors)

    def save_to(self, path: Path) -> None:
        result = self._checked_export()
        save_level_to_path(result.record, path)
        self.state.last_path = path

    def export_to_repository(self, repo: LevelRepository) -> SaveResult:
        result = self._checked_export()
        saved = repo.save_export(result.record)
        self.state.last_path = saved.path
        return saved

    def load_from(self, path: Path) -> None:
        record = load_level_from_path(path)
        self.state.designer = LevelDesigner.from_data(record)
        self.state.last_path = path

    def _checked_export(self) -> ExportResult:
        result = self.export()
        if not result.ok:
            raise LevelRejected(result.errors)
        return result
