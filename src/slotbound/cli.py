from __future__ import annotations

import argparse
import json
import logging
import sys
from importlib import resources
from pathlib import Path
from typing import List, Optional

import yaml

from .config import Settings
from .containers.world import WorldDropSink
from .exceptions import CatalogError, ConfigError
from .items.catalog import ItemCatalog
from .items.model import EquipLocation
from .loadout import Loadout
from .logging_config import configure_logging
from .persistence.errors import SaveError
from .persistence.store import SaveStore
from .transfer.engine import TransferEngine

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="slotbound", description="Slotted container transfer tools")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", type=Path, default=None, help="User settings YAML overlay")
    sub = parser.add_subparsers(dest="command", required=True)

    p_cat = sub.add_parser("validate-catalog", help="Validate an item catalog file (JSON or YAML)")
    p_cat.add_argument("path", type=Path)

    p_show = sub.add_parser("show-save", help="Print the entities stored in a save file")
    p_show.add_argument("name")
    p_show.add_argument("--dir", type=Path, default=None, help="Save directory (defaults to settings)")

    sub.add_parser("demo", help="Run a scripted sequence of transfers and print the outcomes")
    return parser


def demo_catalog() -> ItemCatalog:
    text = resources.files("slotbound.data").joinpath("demo_items.yaml").read_text(encoding="utf-8")
    return ItemCatalog.from_records(yaml.safe_load(text)["items"])


def run_demo(settings: Settings) -> List[str]:
    catalog = demo_catalog()
    loadout = Loadout.from_settings(settings, catalog)
    inv = loadout.inventory
    inv.add_items_to_slot(0, catalog.get("potion_minor"), 10)
    inv.add_items_to_slot(1, catalog.get("iron_sword"), 1)
    inv.add_items_to_slot(2, catalog.get("arrow"), 5)

    engine = TransferEngine()
    main_hand = loadout.equipment.socket(EquipLocation.MAIN_HAND)
    steps = [
        ("sword -> main hand", inv.cell(1), main_hand),
        ("potions -> action bar", inv.cell(0), loadout.actions.slot(0)),
        ("arrows -> main hand", inv.cell(2), main_hand),
        ("arrows -> world", inv.cell(2), WorldDropSink(loadout.dropper)),
        ("main hand -> slot 3", main_hand, inv.cell(3)),
    ]
    lines = []
    for label, source, destination in steps:
        result = engine.transfer(source, destination)
        lines.append(f"{label}: {result.outcome.value} (moved={result.moved}, received={result.received})")
    lines.append(json.dumps(loadout.entity().capture_state(), indent=2, sort_keys=True))
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.load(args.config)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    configure_logging(settings.logging.level, force_level=logging.DEBUG if args.debug else None)

    if args.command == "validate-catalog":
        try:
            catalog = ItemCatalog.load(args.path)
        except CatalogError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        print(f"{args.path}: {len(catalog)} items OK")
        return 0

    if args.command == "show-save":
        store = SaveStore(args.dir or settings.saves.directory)
        try:
            if not store.exists(args.name):
                print(f"error: no save named {args.name!r} in {store.root_dir}", file=sys.stderr)
                return 1
            entities = store.read(args.name)
        except SaveError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        print(json.dumps(entities, indent=2, sort_keys=True))
        return 0

    for line in run_demo(settings):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
