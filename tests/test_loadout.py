from slotbound.config import Settings
from slotbound.events import ACTIONS_UPDATED, EQUIPMENT_UPDATED, INVENTORY_UPDATED, EventBus
from slotbound.items import EquipLocation
from slotbound.loadout import Loadout
from slotbound.transfer import TransferEngine


def test_from_settings_sizes_the_stores(catalog):
    settings = Settings()
    settings.inventory.size = 5
    settings.inventory.stack_limit = 3
    settings.action_bar.size = 2

    loadout = Loadout.from_settings(settings, catalog)

    assert loadout.inventory.size == 5
    assert loadout.inventory.stack_limit == 3
    assert loadout.actions.size == 2
    assert loadout.inventory.catalog is catalog


def test_stores_share_one_bus(catalog):
    bus = EventBus()
    loadout = Loadout.from_settings(Settings(), catalog, bus)
    seen = []
    for name in (INVENTORY_UPDATED, EQUIPMENT_UPDATED, ACTIONS_UPDATED):
        bus.subscribe(name, lambda e: seen.append(e.name))

    loadout.inventory.add_items_to_slot(0, catalog.get("iron_sword"), 1)
    TransferEngine().transfer(loadout.inventory.cell(0), loadout.equipment.socket(EquipLocation.MAIN_HAND))

    assert seen == [INVENTORY_UPDATED, INVENTORY_UPDATED, EQUIPMENT_UPDATED]


def test_total_counts_every_store(catalog):
    loadout = Loadout.from_settings(Settings(), catalog)
    potion = catalog.get("potion_minor")
    loadout.inventory.add_items_to_slot(0, potion, 3)
    loadout.actions.add_action(potion, 0, 2)
    loadout.dropper.drop_item(potion, 1)
    assert loadout.total(potion) == 5


def test_entity_components(catalog):
    entity = Loadout.from_settings(Settings(), catalog).entity("hero")
    assert entity.identifier == "hero"
    assert sorted(entity.components) == ["actions", "dropped", "equipment", "inventory"]
