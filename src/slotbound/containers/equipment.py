from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..capacity import ensure_can_add, ensure_can_remove
from ..events import EQUIPMENT_UPDATED, EventBus
from ..items.catalog import ItemCatalog
from ..items.model import EquipLocation, ItemDescriptor
from ..persistence.errors import SaveValidationError
from ..persistence.saveable import Saveable
from .base import Container, Content

logger = logging.getLogger(__name__)


class Equipment(Saveable):
    """
    Items currently equipped, one per equip location.

    An item can only be placed at a location listed in its ``equip_locations``
    and only while that location is free.
    """

    def __init__(self, catalog: Optional[ItemCatalog] = None, bus: Optional[EventBus] = None) -> None:
        self._equipped: Dict[EquipLocation, ItemDescriptor] = {}
        self.catalog = catalog
        self.bus = bus or EventBus()

    def get_item_in_slot(self, location: EquipLocation) -> Optional[ItemDescriptor]:
        return self._equipped.get(location)

    def equipped(self) -> Dict[EquipLocation, ItemDescriptor]:
        return dict(self._equipped)

    def can_equip(self, location: EquipLocation, item: ItemDescriptor) -> bool:
        return location not in self._equipped and item.can_equip_at(location)

    def add_item(self, location: EquipLocation, item: ItemDescriptor) -> None:
        ensure_can_add(self.socket(location), item, 1)
        self._equipped[location] = item
        logger.debug("Equipped %s at %s", item.id, location.value)
        self.bus.publish(EQUIPMENT_UPDATED, {"location": location.value, "item_id": item.id})

    def remove_item(self, location: EquipLocation) -> Optional[ItemDescriptor]:
        removed = self._equipped.pop(location, None)
        if removed is not None:
            logger.debug("Unequipped %s from %s", removed.id, location.value)
            self.bus.publish(EQUIPMENT_UPDATED, {"location": location.value, "item_id": removed.id})
        return removed

    def socket(self, location: EquipLocation) -> "EquipmentSocket":
        return EquipmentSocket(self, EquipLocation(location))

    # Saveable

    def capture_state(self) -> Dict[str, str]:
        return {location.value: item.id for location, item in self._equipped.items()}

    def restore_state(self, state: Any) -> None:
        if not isinstance(state, dict):
            raise SaveValidationError("Equipment state must be a mapping of location -> item id")
        if self.catalog is None:
            raise SaveValidationError("Equipment cannot restore items without a catalog")
        restored: Dict[EquipLocation, ItemDescriptor] = {}
        for raw_location, item_id in state.items():
            try:
                location = EquipLocation(raw_location)
            except ValueError as exc:
                raise SaveValidationError(f"Unknown equip location {raw_location!r}") from exc
            item = self.catalog.find(item_id)
            if item is None:
                logger.warning("Equipment: unknown item id %r in saved state; skipping", item_id)
                continue
            if not item.can_equip_at(location):
                logger.warning("Equipment: %s cannot be equipped at %s; skipping", item.id, location.value)
                continue
            restored[location] = item
        self._equipped = restored
        self.bus.publish(EQUIPMENT_UPDATED, {"location": None, "item_id": None})


@dataclass(frozen=True, repr=False)
class EquipmentSocket(Container):
    """Container handle onto one equip location. Holds at most a single item."""

    equipment: Equipment
    location: EquipLocation

    def get_content(self) -> Optional[Content]:
        item = self.equipment.get_item_in_slot(self.location)
        return Content(item, 1) if item is not None else None

    def max_acceptable(self, item: ItemDescriptor) -> int:
        return 1 if self.equipment.can_equip(self.location, item) else 0

    def add_items(self, item: ItemDescriptor, qty: int) -> None:
        ensure_can_add(self, item, qty)
        if qty == 0:
            return
        self.equipment.add_item(self.location, item)

    def remove_items(self, qty: int) -> None:
        ensure_can_remove(self, qty)
        if qty == 0:
            return
        self.equipment.remove_item(self.location)

    def __repr__(self) -> str:
        return f"EquipmentSocket({self.location.value})"
