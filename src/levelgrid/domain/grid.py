from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import Enum

from levelgrid.domain.exceptions import OutOfRangeError, SchemaError


class Cell(str, Enum):
    EMPTY = "."
    SOLID = "S"
    SPAWN = "P"
    GOAL = "G"
    ENEMY = "E"


# Order in which an editor click advances a cell.
CELL_CYCLE: tuple[Cell, ...] = (Cell.EMPTY, Cell.SOLID, Cell.SPAWN, Cell.GOAL, Cell.ENEMY)

ALPHABET = frozenset(c.value for c in Cell)


def to_cell(symbol: Cell | str) -> Cell:
    if isinstance(symbol, Cell):
        return symbol
    try:
        return Cell(symbol)
    except ValueError:
        raise SchemaError(f"unknown cell symbol {symbol!r}") from None


class Grid:
    """
    Fixed-size 2-D array of cell symbols.
    Indexed as (x, y) with y selecting the row; (0, 0) is the top-left cell.
    """

    def __init__(self, width: int, height: int, cells: list[list[Cell]]) -> None:
        self._width = width
        self._height = height
        self._cells = cells

    @classmethod
    def create(cls, width: int, height: int) -> Grid:
        if width < 1 or height < 1:
            raise SchemaError(f"grid must be at least 1x1, got {width}x{height}")
        return cls(width, height, [[Cell.EMPTY] * width for _ in range(height)])

    @classmethod
    def create_from(cls, width: int, height: int, rows: Sequence[str]) -> Grid:
        if width < 1 or height < 1:
            raise SchemaError(f"grid must be at least 1x1, got {width}x{height}")
        if len(rows) != height:
            raise SchemaError(f"expected {height} rows, got {len(rows)}")

        cells: list[list[Cell]] = []
        for y, row in enumerate(rows):
            if len(row) != width:
                raise SchemaError(f"row {y} has length {len(row)}, expected {width}")
            cells.append([to_cell(ch) for ch in row])
        return cls(width, height, cells)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def get_cell(self, x: int, y: int) -> Cell:
        self._check_bounds(x, y)
        return self._cells[y][x]

    def set_cell(self, x: int, y: int, symbol: Cell | str) -> None:
        self._check_bounds(x, y)
        self._cells[y][x] = to_cell(symbol)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def iter_cells(self) -> Iterator[tuple[int, int, Cell]]:
        # Row-major: y outer, x inner.
        for y, row in enumerate(self._cells):
            for x, cell in enumerate(row):
                yield x, y, cell

    def replace_all(self, old: Cell, new: Cell) -> int:
        count = 0
        for row in self._cells:
            for x, cell in enumerate(row):
                if cell is old:
                    row[x] = new
                    count += 1
        return count

    def rows(self) -> tuple[str, ...]:
        return tuple("".join(c.value for c in row) for row in self._cells)

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfRangeError(x, y, self._width, self._height)
