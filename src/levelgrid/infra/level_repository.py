from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from levelgrid.domain.level import LevelRecord
from levelgrid.infra.exceptions import LevelSaveError
from levelgrid.infra.level_codec import encode_level
from levelgrid.infra.level_files import load_level_from_path, write_atomic

logger = logging.getLogger(__name__)

_SLUG_RE = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True)
class SaveResult:
    path: Path


class LevelRepository:
    """
    Stores exported levels as JSON files in a `levels` directory
    (under the current working directory unless told otherwise).
    """

    def __init__(self, *, base_dir: Path | None = None, levels_dir: Path | None = None) -> None:
        self._base_dir = base_dir or Path.cwd()
        self._levels_dir = levels_dir or self._base_dir / "levels"
        self._levels_dir.mkdir(parents=True, exist_ok=True)

    @property
    def levels_dir(self) -> Path:
        return self._levels_dir

    def save_export(self, record: LevelRecord) -> SaveResult:
        """
        Save under a name derived from the record's id or name.
        Never overwrites: a numeric suffix is added when the name is taken.
        """
        stem = slugify(record.id or record.name or "level")
        final_path = self._free_path(stem)
        tmp_path = self._levels_dir / (final_path.name + ".tmp")

        try:
            payload = encode_level(record)
            data = json.dumps(payload, indent=2, sort_keys=True)
            write_atomic(tmp_path, final_path, data)
        except Exception as e:
            raise LevelSaveError(f"Failed to save level to {final_path}: {e}") from e

        logger.info("exported level to %s", final_path)
        return SaveResult(path=final_path)

    def list_levels(self) -> list[Path]:
        return sorted(self._levels_dir.glob("*.json"))

    def load(self, name: str) -> LevelRecord:
        path = self._levels_dir / (name if name.endswith(".json") else f"{name}.json")
        return load_level_from_path(path)

    def _free_path(self, stem: str) -> Path:
        path = self._levels_dir / f"{stem}.json"
        n = 2
        while path.exists():
            path = self._levels_dir / f"{stem}_{n}.json"
            n += 1
        return path


def slugify(text: str) -> str:
    slug = _SLUG_RE.sub("_", text.lower()).strip("_")
    return slug or "level"
