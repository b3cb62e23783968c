from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

SCHEMA_VERSION = 1

SKYBOX_SOURCES = ("imagen", "user")


@dataclass(frozen=True)
class GridPos:
    x: int
    y: int


@dataclass(frozen=True)
class Palette:
    # Colour strings as the host understands them, e.g. "#1a1a2e".
    background: str | None = None
    primary: str | None = None
    accent: str | None = None

    def merged(self, **partial: str | None) -> Palette:
        """Shallow merge: fields missing from `partial` keep their current value."""
        unknown = set(partial) - {"background", "primary", "accent"}
        if unknown:
            raise ValueError(f"unknown palette fields: {sorted(unknown)}")
        return replace(self, **partial)


@dataclass(frozen=True)
class Skybox:
    url: str
    source: str = "user"  # "imagen" | "user"
    prompt: str | None = None


@dataclass(frozen=True)
class LevelRecord:
    """
    Serializable description of one level.

    `grid` is authoritative. `spawn` / `goal` only apply when the grid holds no
    P / G cell; `enemies` are added to the grid's E cells, never replacing them.
    A record read from disk may violate any of the grid invariants; run it
    through the validator before expanding it.
    """
    width: int
    height: int
    grid: tuple[str, ...]
    spawn: GridPos | None = None
    goal: GridPos | None = None
    enemies: tuple[GridPos, ...] | None = None
    palette: Palette | None = None
    theme: str | None = None
    skybox: Skybox | None = None
    meta: dict[str, Any] = field(default_factory=dict)  # opaque pass-through
    id: str | None = None
    name: str | None = None

    @property
    def version(self) -> int:
        return int(self.meta.get("version", SCHEMA_VERSION))
