from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from levelgrid.domain.expansion import Vec3, WorldPlacementSet

logger = logging.getLogger(__name__)


class PlacementHost(Protocol):
    """Rendering/physics side that turns placements into live objects."""

    def instantiate_static(self, position: Vec3) -> Any:
        ...

    def instantiate_goal_marker(self, position: Vec3) -> Any:
        ...

    def instantiate_player(self, position: Vec3) -> Any:
        ...

    def instantiate_enemy(self, position: Vec3) -> Any:
        ...

    def request_skybox(self, url: str) -> Any:
        ...


@dataclass(frozen=True)
class HostHandles:
    player: Any
    goal: Any
    blocks: tuple[Any, ...]
    enemies: tuple[Any, ...]
    skybox: Any = None


def populate_host(host: PlacementHost, placements: WorldPlacementSet) -> HostHandles:
    blocks = tuple(host.instantiate_static(p) for p in placements.blocks)
    goal = host.instantiate_goal_marker(placements.goal.position)
    player = host.instantiate_player(placements.spawn)
    enemies = tuple(host.instantiate_enemy(p) for p in placements.enemies)

    skybox = None
    if placements.skybox is not None:
        # A missing skybox leaves the level playable.
        try:
            skybox = host.request_skybox(placements.skybox.url)
        except Exception as e:
            logger.warning("skybox request for %s failed: %s", placements.skybox.url, e)

    return HostHandles(player=player, goal=goal, blocks=blocks, enemies=enemies, skybox=skybox)
