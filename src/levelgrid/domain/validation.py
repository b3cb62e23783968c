from __future__ import annotations

from levelgrid.domain.grid import ALPHABET, Cell
from levelgrid.domain.level import SKYBOX_SOURCES, GridPos, LevelRecord

HEIGHT_MISMATCH = "Grid height mismatch"
WIDTH_MISMATCH = "Grid width mismatch"
MISSING_SPAWN = "Missing player start"
MISSING_GOAL = "Missing goal"


def validate_level(record: LevelRecord, *, strict: bool = False) -> list[str]:
    """
    Return every problem found in `record`; an empty list means playable.

    The default checks are structural (row count, row lengths) plus presence
    of a P and a G cell somewhere in the grid. `strict` adds the checks that
    the designer guarantees by construction but a hand-written file may not:
    single P / G markers, a closed cell alphabet, in-bounds explicit
    positions and a known skybox source.
    """
    errors: list[str] = []

    if len(record.grid) != record.height:
        errors.append(HEIGHT_MISMATCH)
    for row in record.grid:
        if len(row) != record.width:
            errors.append(WIDTH_MISMATCH)
            break

    flat = "".join(record.grid)
    if Cell.SPAWN.value not in flat:
        errors.append(MISSING_SPAWN)
    if Cell.GOAL.value not in flat:
        errors.append(MISSING_GOAL)

    if strict:
        errors.extend(_strict_errors(record, flat))
    return errors


def is_playable(record: LevelRecord, *, strict: bool = False) -> bool:
    return not validate_level(record, strict=strict)


def _strict_errors(record: LevelRecord, flat: str) -> list[str]:
    errors: list[str] = []

    spawns = flat.count(Cell.SPAWN.value)
    if spawns > 1:
        errors.append(f"Multiple player starts ({spawns})")
    goals = flat.count(Cell.GOAL.value)
    if goals > 1:
        errors.append(f"Multiple goals ({goals})")

    unknown = sorted(set(flat) - ALPHABET)
    if unknown:
        errors.append(f"Unknown cell symbols: {''.join(unknown)}")

    if record.spawn is not None and not _in_bounds(record, record.spawn):
        errors.append(f"Spawn ({record.spawn.x}, {record.spawn.y}) out of bounds")
    if record.goal is not None and not _in_bounds(record, record.goal):
        errors.append(f"Goal ({record.goal.x}, {record.goal.y}) out of bounds")
    for i, pos in enumerate(record.enemies or ()):
        if not _in_bounds(record, pos):
            errors.append(f"enemies[{i}] ({pos.x}, {pos.y}) out of bounds")

    if record.skybox is not None and record.skybox.source not in SKYBOX_SOURCES:
        errors.append(f"Unknown skybox source {record.skybox.source!r}")
    return errors


def _in_bounds(record: LevelRecord, pos: GridPos) -> bool:
    return 0 <= pos.x < record.width and 0 <= pos.y < record.height
