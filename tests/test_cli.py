import json
import logging
from pathlib import Path

import pytest

from slotbound.cli import build_parser, main, run_demo
from slotbound.config import Settings
from slotbound.persistence import SaveStore


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_parser_requires_a_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_validate_catalog_ok(tmp_path: Path, capsys):
    path = tmp_path / "items.yaml"
    path.write_text("- id: torch\n- id: rope\n  stackable: true\n", encoding="utf-8")
    assert main(["validate-catalog", str(path)]) == 0
    assert "2 items OK" in capsys.readouterr().out


def test_validate_catalog_reports_errors(tmp_path: Path, capsys):
    path = tmp_path / "items.json"
    path.write_text(json.dumps([{"id": "torch", "kind": "weapon"}]), encoding="utf-8")
    assert main(["validate-catalog", str(path)]) == 1
    assert "error:" in capsys.readouterr().err


def test_show_save_prints_entities(tmp_path: Path, capsys):
    SaveStore(tmp_path).write("slot1", {"player": {"equipment": {"helm": "leather_cap"}}})
    assert main(["show-save", "slot1", "--dir", str(tmp_path)]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out == {"player": {"equipment": {"helm": "leather_cap"}}}


def test_show_save_missing(tmp_path: Path, capsys):
    assert main(["show-save", "nothing", "--dir", str(tmp_path)]) == 1
    assert "no save named 'nothing'" in capsys.readouterr().err


def test_show_save_corrupt(tmp_path: Path, capsys):
    (tmp_path / "slot1.json").write_text("{oops", encoding="utf-8")
    assert main(["show-save", "slot1", "--dir", str(tmp_path)]) == 1
    assert "error:" in capsys.readouterr().err


def test_bad_config_exits_with_2(tmp_path: Path, capsys):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("inventory: {size: -1}\n", encoding="utf-8")
    assert main(["--config", str(cfg), "demo"]) == 2
    assert "error:" in capsys.readouterr().err


def test_run_demo_outcomes():
    lines = run_demo(Settings())
    assert lines[:5] == [
        "sword -> main hand: transferred (moved=1, received=0)",
        "potions -> action bar: transferred (moved=10, received=0)",
        "arrows -> main hand: swap_aborted (moved=0, received=0)",
        "arrows -> world: transferred (moved=5, received=0)",
        "main hand -> slot 3: transferred (moved=1, received=0)",
    ]
    state = json.loads(lines[5])
    assert state["equipment"] == {}
    assert state["inventory"][3] == {"item_id": "iron_sword", "number": 1}
    assert state["actions"] == {"0": {"item_id": "potion_minor", "number": 10}}
    assert state["dropped"][0]["number"] == 5


def test_demo_command_prints(capsys):
    assert main(["demo"]) == 0
    assert "swap_aborted" in capsys.readouterr().out
