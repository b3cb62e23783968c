from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from levelgrid.domain.exceptions import IncompleteLevelError
from levelgrid.domain.expansion import WorldPlacementSet, expand_level
from levelgrid.domain.level import LevelRecord
from levelgrid.domain.validation import validate_level
from levelgrid.infra.level_files import load_level_from_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedLevel:
    record: LevelRecord
    errors: list[str]
    placements: WorldPlacementSet | None

    @property
    def playable(self) -> bool:
        return self.placements is not None


def prepare_level(record: LevelRecord, *, strict: bool = False) -> PreparedLevel:
    """
    Validate, then expand. Whatever the record's origin (designer or file),
    a level only reaches the host through here.
    """
    errors = validate_level(record, strict=strict)
    if errors:
        return PreparedLevel(record=record, errors=errors, placements=None)

    try:
        placements = expand_level(record)
    except IncompleteLevelError as e:
        logger.warning("level %s is unplayable: %s", record.name or record.id or "<unnamed>", e)
        return PreparedLevel(record=record, errors=[str(e)], placements=None)
    return PreparedLevel(record=record, errors=[], placements=placements)


def load_playable(path: Path, *, strict: bool = False) -> PreparedLevel:
    return prepare_level(load_level_from_path(path), strict=strict)
