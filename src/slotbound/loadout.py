from __future__ import annotations

from typing import Optional

from .config import Settings
from .containers.actions import ActionStore
from .containers.equipment import Equipment
from .containers.inventory import Inventory
from .containers.world import ItemDropper
from .events import EventBus
from .items.catalog import ItemCatalog
from .items.model import ItemDescriptor
from .persistence.saveable import SaveableEntity


class Loadout:
    """One character's inventory, equipment, action bar and world dropper on a shared bus."""

    def __init__(
        self,
        inventory: Inventory,
        equipment: Equipment,
        actions: ActionStore,
        dropper: ItemDropper,
        bus: EventBus,
    ) -> None:
        self.inventory = inventory
        self.equipment = equipment
        self.actions = actions
        self.dropper = dropper
        self.bus = bus

    @classmethod
    def from_settings(cls, settings: Settings, catalog: ItemCatalog, bus: Optional[EventBus] = None) -> "Loadout":
        bus = bus or EventBus()
        return cls(
            inventory=Inventory(
                size=settings.inventory.size,
                stack_limit=settings.inventory.stack_limit,
                catalog=catalog,
                bus=bus,
            ),
            equipment=Equipment(catalog=catalog, bus=bus),
            actions=ActionStore(size=settings.action_bar.size, catalog=catalog, bus=bus),
            dropper=ItemDropper(catalog=catalog, bus=bus),
            bus=bus,
        )

    def entity(self, identifier: str = "player") -> SaveableEntity:
        return SaveableEntity(
            identifier,
            {
                "inventory": self.inventory,
                "equipment": self.equipment,
                "actions": self.actions,
                "dropped": self.dropper,
            },
        )

    def total(self, item: ItemDescriptor) -> int:
        """Count of ``item`` held across inventory, equipment and action bar (drops excluded)."""
        equipped = sum(1 for held in self.equipment.equipped().values() if held == item)
        docked = sum(
            self.actions.get_number(i) for i in range(self.actions.size) if self.actions.get_action(i) == item
        )
        return self.inventory.count(item) + equipped + docked
