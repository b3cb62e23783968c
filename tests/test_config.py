import json
from pathlib import Path

from levelgrid import config


def test_deep_merge_handles_nested_dicts_without_mutating_inputs() -> None:
    base = {"editor": {"width": 8, "height": 8}, "validation": {"strict": False}}
    override = {"editor": {"width": 12}, "logging": {"level": "DEBUG"}}

    merged = config._deep_merge(base, override)

    assert merged["editor"] == {"width": 12, "height": 8}
    assert merged["validation"]["strict"] is False
    assert merged["logging"]["level"] == "DEBUG"
    assert base["editor"]["width"] == 8


def test_load_config_merges_defaults_with_file(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"theme": {"palette": {"accent": "#00ff00"}}}), encoding="utf-8")

    loaded, resolved_path = config.load_config(path=config_path)

    assert resolved_path == config_path
    assert loaded["theme"]["palette"]["accent"] == "#00ff00"
    assert loaded["theme"]["palette"]["background"] == "#000000"
    assert loaded["editor"]["width"] == 8
    assert loaded is not config.DEFAULT_CONFIG


def test_load_config_falls_back_to_defaults_on_invalid_json(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("not valid json", encoding="utf-8")

    loaded, _ = config.load_config(path=config_path)

    assert loaded == config.DEFAULT_CONFIG
    assert loaded["editor"] is not config.DEFAULT_CONFIG["editor"]


def test_save_config_persists_to_disk(tmp_path: Path) -> None:
    config_path = tmp_path / "nested" / "config.json"
    data = {"editor": {"width": 10}}

    config.save_config(data, path=config_path)

    assert json.loads(config_path.read_text(encoding="utf-8")) == data


def test_levels_dir_defaults_to_none() -> None:
    assert config.levels_dir(config.DEFAULT_CONFIG) is None
    assert config.levels_dir({"levels_dir": "/tmp/lv"}) == Path("/tmp/lv")


def test_load_config_resets_unusable_editor_sizes(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps({"editor": {"width": 0, "height": "ten", "cell_px": 24}}),
        encoding="utf-8",
    )

    loaded, _ = config.load_config(path=config_path)

    assert loaded["editor"] == {"width": 8, "height": 8, "cell_px": 24}
