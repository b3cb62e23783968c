from __future__ import annotations

from typing import Any

from levelgrid.domain.level import SCHEMA_VERSION, GridPos, LevelRecord, Palette, Skybox
from levelgrid.infra.exceptions import LevelDecodeError, LevelEncodeError

_PALETTE_KEYS = ("background", "primary", "accent")


def encode_level(record: LevelRecord) -> dict:
    try:
        meta = dict(record.meta)
        meta["version"] = record.version

        out: dict[str, Any] = {
            "width": int(record.width),
            "height": int(record.height),
            "grid": [str(row) for row in record.grid],
            "meta": meta,
        }
        if record.id is not None:
            out["id"] = record.id
        if record.name is not None:
            out["name"] = record.name
        if record.spawn is not None:
            out["spawn"] = _encode_pos(record.spawn)
        if record.goal is not None:
            out["goal"] = _encode_pos(record.goal)
        if record.enemies is not None:
            out["enemies"] = [_encode_pos(p) for p in record.enemies]
        if record.theme is not None:
            out["theme"] = record.theme
        if record.palette is not None:
            out["palette"] = {
                k: getattr(record.palette, k) for k in _PALETTE_KEYS if getattr(record.palette, k) is not None
            }
        if record.skybox is not None:
            sky = {"url": record.skybox.url, "source": record.skybox.source}
            if record.skybox.prompt is not None:
                sky["prompt"] = record.skybox.prompt
            out["skybox"] = sky
        return out
    except Exception as e:
        raise LevelEncodeError(f"Failed to encode level: {e}") from e


def _encode_pos(pos: GridPos) -> dict:
    return {"x": int(pos.x), "y": int(pos.y)}


def decode_level(obj: Any) -> LevelRecord:
    """
    Turn a JSON-shaped payload into a LevelRecord.

    Only the shape of each field is checked here. A grid whose size disagrees
    with width/height still decodes; the validator reports it.
    """
    try:
        if not isinstance(obj, dict):
            raise LevelDecodeError("Level payload must be an object.")

        meta = obj.get("meta", {})
        if not isinstance(meta, dict):
            raise LevelDecodeError("meta must be an object.")
        ver = meta.get("version", SCHEMA_VERSION)
        if not _is_int(ver):
            raise LevelDecodeError("meta.version must be an integer.")
        if ver > SCHEMA_VERSION:
            raise LevelDecodeError(f"Unsupported level version {ver} (newest known is {SCHEMA_VERSION}).")

        return _decode_v1(obj, meta)
    except LevelDecodeError:
        raise
    except Exception as e:
        raise LevelDecodeError(f"Failed to decode level: {e}") from e


def _decode_v1(obj: dict, meta: dict) -> LevelRecord:
    width = obj.get("width")
    height = obj.get("height")
    if not _is_int(width) or not _is_int(height):
        raise LevelDecodeError("width/height must be integers.")
    if width <= 0 or height <= 0:
        raise LevelDecodeError("width/height must be positive.")

    grid = obj.get("grid")
    # Older exports stored the grid as one newline-separated string.
    if isinstance(grid, str):
        grid = grid.split("\n")
        if len(grid) > 1 and grid[-1] == "":
            grid.pop()
    if not isinstance(grid, list) or not all(isinstance(row, str) for row in grid):
        raise LevelDecodeError("grid must be a list of strings.")

    enemies = obj.get("enemies")
    if enemies is not None:
        if not isinstance(enemies, list):
            raise LevelDecodeError("enemies must be a list.")
        enemies = tuple(_decode_pos(p, f"enemies[{i}]") for i, p in enumerate(enemies))

    return LevelRecord(
        width=width,
        height=height,
        grid=tuple(grid),
        spawn=_optional(obj, "spawn", _decode_pos),
        goal=_optional(obj, "goal", _decode_pos),
        enemies=enemies,
        palette=_optional(obj, "palette", _decode_palette),
        theme=_optional(obj, "theme", _decode_str),
        skybox=_optional(obj, "skybox", _decode_skybox),
        meta=dict(meta),
        id=_optional(obj, "id", _decode_str),
        name=_optional(obj, "name", _decode_str),
    )


def _optional(obj: dict, key: str, decode):
    value = obj.get(key)
    if value is None:
        return None
    return decode(value, key)


def _decode_pos(value: Any, where: str) -> GridPos:
    if not isinstance(value, dict):
        raise LevelDecodeError(f"{where} must be an object.")
    x, y = value.get("x"), value.get("y")
    if not _is_int(x) or not _is_int(y):
        raise LevelDecodeError(f"{where} x/y must be integers.")
    return GridPos(x, y)


def _decode_str(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise LevelDecodeError(f"{where} must be a string.")
    return value


def _decode_palette(value: Any, where: str) -> Palette:
    if not isinstance(value, dict):
        raise LevelDecodeError(f"{where} must be an object.")
    unknown = set(value) - set(_PALETTE_KEYS)
    if unknown:
        raise LevelDecodeError(f"{where} has unknown keys: {sorted(unknown)}")
    for k, v in value.items():
        if v is not None and not isinstance(v, str):
            raise LevelDecodeError(f"{where}.{k} must be a string.")
    return Palette(**value)


def _decode_skybox(value: Any, where: str) -> Skybox:
    if not isinstance(value, dict):
        raise LevelDecodeError(f"{where} must be an object.")
    url = value.get("url")
    source = value.get("source", "user")
    prompt = value.get("prompt")
    if not isinstance(url, str) or not url:
        raise LevelDecodeError(f"{where}.url must be a non-empty string.")
    if not isinstance(source, str):
        raise LevelDecodeError(f"{where}.source must be a string.")
    if prompt is not None and not isinstance(prompt, str):
        raise LevelDecodeError(f"{where}.prompt must be a string.")
    return Skybox(url=url, source=source, prompt=prompt)


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)
