from __future__ import annotations

import logging
from dataclasses import dataclass

from levelgrid.domain.exceptions import IncompleteLevelError
from levelgrid.domain.grid import Cell
from levelgrid.domain.level import GridPos, LevelRecord

logger = logging.getLogger(__name__)

CELL_SIZE = 1.0
# Blocks, markers and spawns sit half a cell above the ground plane.
GROUND_Y = 0.5 * CELL_SIZE


@dataclass(frozen=True)
class Vec3:
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class Placement:
    kind: str  # "goal" for now
    position: Vec3


@dataclass(frozen=True)
class SkyboxRequest:
    url: str


@dataclass(frozen=True)
class WorldPlacementSet:
    spawn: Vec3
    goal: Placement
    blocks: tuple[Vec3, ...]
    enemies: tuple[Vec3, ...]
    skybox: SkyboxRequest | None = None


@dataclass(frozen=True)
class ResolvedMarkers:
    """One canonical position per singleton, after grid/field precedence."""
    spawn: GridPos | None
    goal: GridPos | None
    enemies: tuple[GridPos, ...]


def cell_center(gx: int, gy: int, width: int, height: int) -> Vec3:
    offset_x = -width / 2 + 0.5
    offset_z = -height / 2 + 0.5
    return Vec3(x=(offset_x + gx) * CELL_SIZE, y=GROUND_Y, z=(offset_z + gy) * CELL_SIZE)


def resolve_markers(record: LevelRecord) -> ResolvedMarkers:
    spawn: GridPos | None = None
    goal: GridPos | None = None
    enemies: list[GridPos] = []

    # Row-major, last P / G wins. Every E is kept.
    for y, row in enumerate(record.grid):
        for x, ch in enumerate(row):
            if ch == Cell.SPAWN.value:
                spawn = GridPos(x, y)
            elif ch == Cell.GOAL.value:
                goal = GridPos(x, y)
            elif ch == Cell.ENEMY.value:
                enemies.append(GridPos(x, y))

    if spawn is None:
        spawn = record.spawn
    if goal is None:
        goal = record.goal
    # Explicit enemies are appended, duplicates included.
    enemies.extend(record.enemies or ())

    return ResolvedMarkers(spawn=spawn, goal=goal, enemies=tuple(enemies))


def expand_level(record: LevelRecord) -> WorldPlacementSet:
    w, h = record.width, record.height

    blocks = tuple(
        cell_center(x, y, w, h)
        for y, row in enumerate(record.grid)
        for x, ch in enumerate(row)
        if ch == Cell.SOLID.value
    )

    markers = resolve_markers(record)
    if markers.spawn is None:
        raise IncompleteLevelError("level has no player spawn (no P cell and no spawn field)")
    if markers.goal is None:
        raise IncompleteLevelError("level has no goal (no G cell and no goal field)")

    skybox = SkyboxRequest(url=record.skybox.url) if record.skybox is not None else None

    placements = WorldPlacementSet(
        spawn=cell_center(markers.spawn.x, markers.spawn.y, w, h),
        goal=Placement(kind="goal", position=cell_center(markers.goal.x, markers.goal.y, w, h)),
        blocks=blocks,
        enemies=tuple(cell_center(p.x, p.y, w, h) for p in markers.enemies),
        skybox=skybox,
    )
    logger.debug(
        "expanded %dx%d level: %d blocks, %d enemies, skybox=%s",
        w, h, len(placements.blocks), len(placements.enemies), skybox is not None,
    )
    return placements
