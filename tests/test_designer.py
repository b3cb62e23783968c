import pytest

from levelgrid.domain.designer import LevelDesigner
from levelgrid.domain.exceptions import OutOfRangeError, SchemaError
from levelgrid.domain.level import GridPos, LevelRecord, Palette


def _cells(record: LevelRecord, symbol: str) -> list[tuple[int, int]]:
    return [(x, y) for y, row in enumerate(record.grid) for x, ch in enumerate(row) if ch == symbol]


def test_set_spawn_twice_leaves_single_marker() -> None:
    designer = LevelDesigner(5, 5)
    designer.set_spawn(1, 1)
    designer.set_spawn(3, 4)

    record = designer.build()
    assert _cells(record, "P") == [(3, 4)]
    assert record.spawn == GridPos(3, 4)


def test_set_goal_twice_leaves_single_marker() -> None:
    designer = LevelDesigner(4, 4)
    designer.set_goal(0, 0)
    designer.set_goal(2, 1)

    assert _cells(designer.build(), "G") == [(2, 1)]


def test_build_after_set_spawn_finds_marker_only_there() -> None:
    designer = LevelDesigner(6, 6)
    designer.set_spawn(2, 3)

    record = designer.build()
    assert _cells(record, "P") == [(2, 3)]
    assert record.spawn == GridPos(2, 3)
    assert record.goal is None


def test_set_block_overwrites_markers() -> None:
    designer = LevelDesigner(3, 3)
    designer.set_spawn(1, 1)
    designer.set_block(1, 1)

    record = designer.build()
    assert record.grid[1] == ".S."
    assert record.spawn is None


def test_clear_cell_empties_cell() -> None:
    designer = LevelDesigner(3, 1)
    designer.add_enemy(2, 0)
    designer.clear_cell(2, 0)

    assert designer.build().grid == ("...",)


def test_add_enemy_keeps_other_enemies() -> None:
    designer = LevelDesigner(4, 2)
    designer.add_enemy(0, 0)
    designer.add_enemy(3, 1)
    designer.add_enemy(3, 1)

    record = designer.build()
    assert record.enemies == (GridPos(0, 0), GridPos(3, 1))


def test_build_omits_enemies_when_none_placed() -> None:
    designer = LevelDesigner(2, 2)

    record = designer.build()
    assert record.enemies is None
    assert record.theme is None
    assert record.palette is None
    assert record.meta["version"] == 1


def test_out_of_range_spawn_keeps_previous_marker() -> None:
    designer = LevelDesigner(3, 3)
    designer.set_spawn(0, 0)

    with pytest.raises(OutOfRangeError):
        designer.set_spawn(5, 0)
    assert designer.build().spawn == GridPos(0, 0)


def test_set_palette_merges_partials() -> None:
    designer = LevelDesigner(2, 2)
    designer.set_palette(background="#000", primary="#111")
    designer.set_palette(primary="#222", accent="#333")

    assert designer.build().palette == Palette(background="#000", primary="#222", accent="#333")


def test_set_palette_rejects_unknown_field() -> None:
    designer = LevelDesigner(2, 2)

    with pytest.raises(ValueError):
        designer.set_palette(foreground="#fff")


def test_build_is_a_snapshot() -> None:
    designer = LevelDesigner(3, 1)
    designer.set_block(0, 0)
    record = designer.build()

    designer.set_block(2, 0)
    designer.set_meta(difficulty="hard")

    assert record.grid == ("S..",)
    assert "difficulty" not in record.meta


def test_last_marker_wins_for_externally_built_grid() -> None:
    record = LevelRecord(width=3, height=2, grid=("P.G", "G.P"))

    rebuilt = LevelDesigner.from_data(record).build()
    assert rebuilt.spawn == GridPos(2, 1)
    assert rebuilt.goal == GridPos(0, 1)


def test_round_trip_through_from_data() -> None:
    designer = LevelDesigner(5, 4)
    designer.set_block(0, 0)
    designer.set_spawn(1, 1)
    designer.set_goal(3, 2)
    designer.add_enemy(4, 3)
    designer.set_theme("forest")
    designer.set_palette(background="#102030", accent="#ff0000")
    designer.set_name("Glade")
    designer.set_skybox("https://example.com/sky.png", source="imagen", prompt="dawn")

    original = designer.build()
    again = LevelDesigner.from_data(original).build()

    assert again.grid == original.grid
    assert again.theme == original.theme
    assert again.palette == original.palette
    assert again == original


def test_from_data_rejects_dimension_mismatch() -> None:
    with pytest.raises(SchemaError):
        LevelDesigner.from_data(LevelRecord(width=3, height=3, grid=("...", "...")))
    with pytest.raises(SchemaError):
        LevelDesigner.from_data(LevelRecord(width=3, height=2, grid=("...", "..")))
