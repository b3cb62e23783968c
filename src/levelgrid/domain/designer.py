from __future__ import annotations

import logging
from typing import Any

from levelgrid.domain.exceptions import SchemaError
from levelgrid.domain.grid import Cell, Grid
from levelgrid.domain.level import SCHEMA_VERSION, GridPos, LevelRecord, Palette, Skybox

logger = logging.getLogger(__name__)


class LevelDesigner:
    """
    Mutation API over a single grid.

    Keeps at most one spawn (P) and one goal (G) cell in the grid; every other
    symbol may appear any number of times. The designer is the only writer of
    its grid.
    """

    def __init__(self, width: int, height: int, *, grid: Grid | None = None) -> None:
        self._grid = grid if grid is not None else Grid.create(width, height)
        self._theme: str | None = None
        self._palette: Palette | None = None
        self._skybox: Skybox | None = None
        self._meta: dict[str, Any] = {}
        self._id: str | None = None
        self._name: str | None = None
        # Explicit enemy positions from a loaded record that have no E cell.
        self._extra_enemies: tuple[GridPos, ...] = ()

    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def height(self) -> int:
        return self._grid.height

    def cell_at(self, x: int, y: int) -> Cell:
        return self._grid.get_cell(x, y)

    # ---------- Cells ----------

    def set_block(self, x: int, y: int) -> None:
        self._grid.set_cell(x, y, Cell.SOLID)

    def clear_cell(self, x: int, y: int) -> None:
        self._grid.set_cell(x, y, Cell.EMPTY)

    def set_spawn(self, x: int, y: int) -> None:
        self._move_singleton(Cell.SPAWN, x, y)

    def set_goal(self, x: int, y: int) -> None:
        self._move_singleton(Cell.GOAL, x, y)

    def add_enemy(self, x: int, y: int) -> None:
        self._grid.set_cell(x, y, Cell.ENEMY)

    def _move_singleton(self, marker: Cell, x: int, y: int) -> None:
        # Check the target first so a bad click leaves the old marker in place.
        self._grid.get_cell(x, y)
        cleared = self._grid.replace_all(marker, Cell.EMPTY)
        self._grid.set_cell(x, y, marker)
        logger.debug("moved %s to (%d, %d), cleared %d", marker.value, x, y, cleared)

    # ---------- Metadata ----------

    def set_theme(self, name: str) -> None:
        self._theme = name

    def set_palette(self, **partial: str | None) -> None:
        base = self._palette or Palette()
        self._palette = base.merged(**partial)

    def set_skybox(self, url: str, *, source: str = "user", prompt: str | None = None) -> None:
        self._skybox = Skybox(url=url, source=source, prompt=prompt)

    def set_name(self, name: str) -> None:
        self._name = name

    def set_id(self, level_id: str) -> None:
        self._id = level_id

    def set_meta(self, **fields: Any) -> None:
        self._meta.update(fields)

    # ---------- Records ----------

    def build(self) -> LevelRecord:
        spawn: GridPos | None = None
        goal: GridPos | None = None
        enemies: list[GridPos] = []

        # Row-major scan; a later P/G overrides an earlier one.
        for x, y, cell in self._grid.iter_cells():
            if cell is Cell.SPAWN:
                spawn = GridPos(x, y)
            elif cell is Cell.GOAL:
                goal = GridPos(x, y)
            elif cell is Cell.ENEMY:
                enemies.append(GridPos(x, y))
        enemies.extend(self._extra_enemies)

        meta = dict(self._meta)
        meta.setdefault("version", SCHEMA_VERSION)

        return LevelRecord(
            width=self._grid.width,
            height=self._grid.height,
            grid=self._grid.rows(),
            spawn=spawn,
            goal=goal,
            enemies=tuple(enemies) if enemies else None,
            palette=self._palette,
            theme=self._theme,
            skybox=self._skybox,
            meta=meta,
            id=self._id,
            name=self._name,
        )

    @classmethod
    def from_data(cls, record: LevelRecord) -> LevelDesigner:
        if len(record.grid) != record.height:
            raise SchemaError(f"record declares height {record.height}, grid has {len(record.grid)} rows")
        for y, row in enumerate(record.grid):
            if len(row) != record.width:
                raise SchemaError(f"record declares width {record.width}, row {y} has length {len(row)}")

        grid = Grid.create_from(record.width, record.height, record.grid)
        designer = cls(record.width, record.height, grid=grid)
        if record.theme is not None:
            designer.set_theme(record.theme)
        if record.palette is not None:
            designer._palette = record.palette
        designer._skybox = record.skybox
        designer._meta = dict(record.meta)
        designer._id = record.id
        designer._name = record.name
        if record.enemies:
            grid_enemies = {GridPos(x, y) for x, y, cell in grid.iter_cells() if cell is Cell.ENEMY}
            designer._extra_enemies = tuple(p for p in record.enemies if p not in grid_enemies)
        return designer
