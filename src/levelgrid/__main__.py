from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from levelgrid.app.level_pipeline import load_playable
from levelgrid.config import load_config
from levelgrid.domain.designer import LevelDesigner
from levelgrid.domain.exceptions import SchemaError
from levelgrid.infra.exceptions import LevelIOError
from levelgrid.infra.level_files import save_level_to_path

logger = logging.getLogger("levelgrid")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="levelgrid", description="Tile level designer and loader.")
    parser.add_argument("--config", type=Path, default=None, help="config file (default: user config dir)")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    sub = parser.add_subparsers(dest="command")

    edit = sub.add_parser("edit", help="open the level editor")
    edit.add_argument("path", type=Path, nargs="?")

    validate = sub.add_parser("validate", help="check a level file")
    validate.add_argument("path", type=Path)
    validate.add_argument("--strict", action="store_true", help="also reject duplicate markers and stray symbols")

    expand = sub.add_parser("expand", help="print world placements of a level file as JSON")
    expand.add_argument("path", type=Path)
    expand.add_argument("--strict", action="store_true")

    new = sub.add_parser("new", help="write an empty level file")
    new.add_argument("path", type=Path)
    new.add_argument("--width", type=int, default=None)
    new.add_argument("--height", type=int, default=None)
    return parser


def resolve_log_level(name: object) -> int:
    """Map a level name such as "debug" to its number; unknown names fall back to INFO."""
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        print(f"unknown log level {name!r}, using INFO", file=sys.stderr)
        return logging.INFO
    return level


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config, _config_path = load_config(args.config)

    level = resolve_log_level(args.log_level or config["logging"]["level"])
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    command = args.command or "edit"
    try:
        if command == "edit":
            from levelgrid.app.editor_app import EditorApp

            EditorApp(config, initial_path=getattr(args, "path", None)).run()
            return 0
        if command == "validate":
            return _cmd_validate(args.path, strict=args.strict or config["validation"]["strict"])
        if command == "expand":
            return _cmd_expand(args.path, strict=args.strict or config["validation"]["strict"])
        if command == "new":
            width = args.width or config["editor"]["width"]
            height = args.height or config["editor"]["height"]
            designer = LevelDesigner(width, height)
            designer.set_theme(config["theme"]["name"])
            designer.set_palette(**config["theme"]["palette"])
            save_level_to_path(designer.build(), args.path)
            print(f"wrote {width}x{height} level to {args.path}")
            return 0
    except (LevelIOError, SchemaError) as e:
        logger.error("%s", e)
        return 2
    return 0


def _cmd_validate(path: Path, *, strict: bool) -> int:
    prepared = load_playable(path, strict=strict)
    for err in prepared.errors:
        print(f"{path}: {err}")
    if prepared.playable:
        print(f"{path}: ok")
        return 0
    return 1


def _cmd_expand(path: Path, *, strict: bool) -> int:
    prepared = load_playable(path, strict=strict)
    if prepared.placements is None:
        for err in prepared.errors:
            print(f"{path}: {err}", file=sys.stderr)
        return 1
    print(json.dumps(asdict(prepared.placements), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
