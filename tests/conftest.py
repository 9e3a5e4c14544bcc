import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from slotbound.events import EventBus  # noqa: E402
from slotbound.items import EquipLocation, ItemCatalog, action, equipable, generic  # noqa: E402


@pytest.fixture
def catalog() -> ItemCatalog:
    return ItemCatalog(
        [
            generic("arrow", "Arrow", stackable=True),
            generic("lantern", "Lantern"),
            equipable("iron_sword", "Iron Sword", [EquipLocation.MAIN_HAND, EquipLocation.OFF_HAND]),
            equipable("leather_cap", "Leather Cap", [EquipLocation.HELM]),
            action("potion_minor", "Minor Healing Potion", consumable=True, stackable=True),
            action("whistle", "Whistle"),
        ]
    )


@pytest.fixture
def bus() -> EventBus:
    return EventBus()
