import json
from pathlib import Path

import pytest

from levelgrid.domain.designer import LevelDesigner
from levelgrid.domain.level import GridPos, LevelRecord, Palette, Skybox
from levelgrid.domain.validation import HEIGHT_MISMATCH, validate_level
from levelgrid.infra.exceptions import LevelDecodeError
from levelgrid.infra.level_codec import decode_level, encode_level
from levelgrid.infra.level_files import load_level_from_path, save_level_to_path


def _full_record() -> LevelRecord:
    return LevelRecord(
        width=3,
        height=2,
        grid=("P.S", "E.G"),
        spawn=GridPos(0, 0),
        goal=GridPos(2, 1),
        enemies=(GridPos(0, 1),),
        palette=Palette(background="#000", accent="#f00"),
        theme="space",
        skybox=Skybox(url="https://example.com/sky.png", source="imagen", prompt="stars"),
        meta={"version": 1, "difficulty": "hard", "author": {"name": "kit"}},
        id="lvl-7",
        name="Orbit",
    )


def test_encode_uses_record_field_names() -> None:
    payload = encode_level(_full_record())

    assert payload["grid"] == ["P.S", "E.G"]
    assert payload["spawn"] == {"x": 0, "y": 0}
    assert payload["enemies"] == [{"x": 0, "y": 1}]
    assert payload["palette"] == {"background": "#000", "accent": "#f00"}
    assert payload["skybox"] == {"url": "https://example.com/sky.png", "source": "imagen", "prompt": "stars"}
    assert payload["meta"]["author"] == {"name": "kit"}


def test_encode_omits_unset_fields_and_adds_version() -> None:
    payload = encode_level(LevelDesigner(2, 1).build())

    assert set(payload) == {"width", "height", "grid", "meta"}
    assert payload["meta"] == {"version": 1}


def test_decode_restores_every_field() -> None:
    record = _full_record()

    assert decode_level(json.loads(json.dumps(encode_level(record)))) == record


def test_decode_leaves_dimension_mismatch_to_validator() -> None:
    record = decode_level({"width": 3, "height": 3, "grid": ["P.G", "..."]})

    assert record.grid == ("P.G", "...")
    assert HEIGHT_MISMATCH in validate_level(record)


def test_decode_accepts_newline_separated_grid() -> None:
    record = decode_level({"width": 2, "height": 2, "grid": "P.\n.G"})

    assert record.grid == ("P.", ".G")


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"width": "3", "height": 1, "grid": ["..."]},
        {"width": 3, "height": 0, "grid": []},
        {"width": 1, "height": 1, "grid": [1]},
        {"width": 1, "height": 1, "grid": ["P"], "spawn": {"x": 0}},
        {"width": 1, "height": 1, "grid": ["P"], "enemies": {"x": 0, "y": 0}},
        {"width": 1, "height": 1, "grid": ["P"], "palette": {"foreground": "#fff"}},
        {"width": 1, "height": 1, "grid": ["P"], "skybox": {"source": "user"}},
        {"width": 1, "height": 1, "grid": ["P"], "meta": {"version": 99}},
    ],
)
def test_decode_rejects_malformed_payloads(payload: object) -> None:
    with pytest.raises(LevelDecodeError):
        decode_level(payload)


def test_save_and_load_file(tmp_path: Path) -> None:
    path = tmp_path / "level.json"
    record = _full_record()

    save_level_to_path(record, path)

    assert load_level_from_path(path) == record
    assert not (tmp_path / "level.json.tmp").exists()


def test_load_invalid_json_raises_decode_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(LevelDecodeError):
        load_level_from_path(path)


def test_load_missing_file_raises_decode_error(tmp_path: Path) -> None:
    with pytest.raises(LevelDecodeError):
        load_level_from_path(tmp_path / "missing.json")


def test_decode_ignores_trailing_newline_in_grid_string() -> None:
    record = decode_level({"width": 2, "height": 2, "grid": "P.\n.G\n"})

    assert record.grid == ("P.", ".G")
    assert validate_level(record) == []


def test_encode_writes_record_version_when_meta_is_empty() -> None:
    record = LevelRecord(width=1, height=1, grid=("P",))

    assert record.version == 1
    assert encode_level(record)["meta"] == {"version": 1}
