from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from levelgrid.domain.level import LevelRecord
from levelgrid.infra.exceptions import LevelDecodeError, LevelSaveError
from levelgrid.infra.level_codec import decode_level, encode_level

logger = logging.getLogger(__name__)


def load_level_from_path(path: Path) -> LevelRecord:
    try:
        data = path.read_text(encoding="utf-8")
        obj = json.loads(data)
        record = decode_level(obj)
    except LevelDecodeError:
        raise
    except Exception as e:
        raise LevelDecodeError(f"Failed to load level from {path}: {e}") from e
    logger.info("loaded %dx%d level from %s", record.width, record.height, path)
    return record


def save_level_to_path(record: LevelRecord, path: Path) -> None:
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        payload = encode_level(record)
        text = json.dumps(payload, indent=2, sort_keys=True)
        write_atomic(tmp, path, text)
    except Exception as e:
        raise LevelSaveError(f"Failed to save level to {path}: {e}") from e
    logger.info("saved level to %s", path)


def write_atomic(tmp: Path, final: Path, text: str) -> None:
    """Write `text` to `tmp`, then move it over `final`. Removes `tmp` on failure."""
    try:
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, final)
    except Exception:
        try:
            if tmp.exists():
                tmp.unlink()
        except OSError as cleanup_error:
            logger.warning("could not remove %s: %s", tmp, cleanup_error)
        raise
