from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from ..capacity import ensure_can_add, ensure_can_remove, stack_room
from ..events import INVENTORY_UPDATED, EventBus
from ..exceptions import InvalidSlotError
from ..items.catalog import ItemCatalog
from ..items.model import ItemDescriptor
from ..persistence.errors import SaveValidationError
from ..persistence.saveable import Saveable
from .base import Container, Content, capture_stack, restore_stack

logger = logging.getLogger(__name__)


@dataclass
class InventorySlot:
    item: Optional[ItemDescriptor] = None
    number: int = 0

    def content(self) -> Optional[Content]:
        if self.item is None or self.number <= 0:
            return None
        return Content(self.item, self.number)

    def clear(self) -> None:
        self.item = None
        self.number = 0


class Inventory(Saveable):
    """
    Fixed-size grid of slots, each holding at most one (item, number) stack.

    - Stackable items share a slot up to ``stack_limit``.
    - Non-stackable items take a whole slot each.

    Every mutation publishes ``inventory_updated`` on the bus.
    """

    def __init__(
        self,
        size: int = 16,
        stack_limit: int = 99,
        catalog: Optional[ItemCatalog] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        if size < 1:
            raise ValueError("Inventory size must be positive")
        if stack_limit < 1:
            raise ValueError("stack_limit must be positive")
        self._slots: List[InventorySlot] = [InventorySlot() for _ in range(size)]
        self.stack_limit = stack_limit
        self.catalog = catalog
        self.bus = bus or EventBus()

    @property
    def size(self) -> int:
        return len(self._slots)

    def _slot(self, index: int) -> InventorySlot:
        if not isinstance(index, int) or not 0 <= index < len(self._slots):
            raise InvalidSlotError(f"Inventory slot {index!r} out of range (size={self.size})")
        return self._slots[index]

    def get_item_in_slot(self, index: int) -> Optional[ItemDescriptor]:
        return self._slot(index).item

    def get_number_in_slot(self, index: int) -> int:
        return self._slot(index).number

    def get_content(self, index: int) -> Optional[Content]:
        return self._slot(index).content()

    def contents(self) -> List[Optional[Content]]:
        return [slot.content() for slot in self._slots]

    def room_in_slot(self, index: int, item: ItemDescriptor) -> int:
        return stack_room(self._slot(index).content(), item, stack_limit=self.stack_limit)

    def find_stack(self, item: ItemDescriptor) -> Optional[int]:
        if not item.stackable:
            return None
        for index, slot in enumerate(self._slots):
            if slot.item == item and slot.number < self.stack_limit:
                return index
        return None

    def find_empty_slot(self) -> Optional[int]:
        for index, slot in enumerate(self._slots):
            if slot.item is None:
                return index
        return None

    def find_slot(self, item: ItemDescriptor) -> Optional[int]:
        """Slot an item would go to: an existing stack with room first, then an empty slot."""
        index = self.find_stack(item)
        if index is None:
            index = self.find_empty_slot()
        return index

    def has_space_for(self, item: ItemDescriptor) -> bool:
        return self.find_slot(item) is not None

    def count(self, item: ItemDescriptor) -> int:
        return sum(slot.number for slot in self._slots if slot.item == item)

    def add_to_first_empty_slot(self, item: ItemDescriptor, number: int = 1) -> bool:
        """
        Add ``number`` of ``item`` wherever it fits, topping up stacks before empty slots.

        All or nothing: returns False without changing anything when the whole
        amount does not fit.
        """
        if number <= 0:
            return True
        total_room = sum(self.room_in_slot(i, item) for i in range(self.size))
        if total_room < number:
            logger.debug("No room for %d x %s (room=%d)", number, item.id, total_room)
            return False
        self._spread(item, number)
        self._publish(index=None, item_id=item.id)
        return True

    def add_items_to_slot(self, index: int, item: ItemDescriptor, number: int) -> None:
        ensure_can_add(self.cell(index), item, number)
        if number == 0:
            return
        self._place(index, item, number)
        logger.debug("Added %d x %s to slot %d (total=%d)", number, item.id, index, self._slots[index].number)
        self._publish(index=index, item_id=item.id)

    def remove_from_slot(self, index: int, number: int) -> None:
        ensure_can_remove(self.cell(index), number)
        if number == 0:
            return
        slot = self._slots[index]
        item_id = slot.item.id if slot.item else None
        slot.number -= number
        if slot.number <= 0:
            slot.clear()
        logger.debug("Removed %d x %s from slot %d (remaining=%d)", number, item_id, index, slot.number)
        self._publish(index=index, item_id=item_id)

    def cell(self, index: int) -> "InventoryCell":
        self._slot(index)
        return InventoryCell(self, index)

    def cells(self) -> List["InventoryCell"]:
        return [InventoryCell(self, i) for i in range(self.size)]

    def _place(self, index: int, item: ItemDescriptor, number: int) -> None:
        slot = self._slots[index]
        slot.item = item
        slot.number += number

    def _publish(self, index: Optional[int], item_id: Optional[str]) -> None:
        self.bus.publish(INVENTORY_UPDATED, {"index": index, "item_id": item_id})

    # Saveable

    def capture_state(self) -> List[Optional[dict]]:
        return [capture_stack(slot.content()) for slot in self._slots]

    def restore_state(self, state: Any) -> None:
        if not isinstance(state, list):
            raise SaveValidationError("Inventory state must be a list of slot records")
        if len(state) > self.size and any(record is not None for record in state[self.size:]):
            logger.warning("Saved inventory has %d slots but only %d exist; extra slots dropped", len(state), self.size)
        restored = [restore_stack(record, self.catalog, "Inventory") for record in state[: self.size]]
        for slot in self._slots:
            slot.clear()
        overflow: List[Content] = []
        for index, content in enumerate(restored):
            if content is None:
                continue
            kept = min(content.quantity, stack_room(None, content.item, stack_limit=self.stack_limit))
            self._place(index, content.item, kept)
            if content.quantity > kept:
                overflow.append(Content(content.item, content.quantity - kept))
        for item, number in overflow:
            lost = self._spread(item, number)
            if lost:
                logger.warning(
                    "Inventory: no room for %d x %s from saved state (stack_limit=%d); discarded",
                    lost, item.id, self.stack_limit,
                )
        self._publish(index=None, item_id=None)

    def _spread(self, item: ItemDescriptor, number: int) -> int:
        """Place up to ``number`` of ``item`` into stacks then empty slots. Returns what did not fit."""
        order = [i for i, s in enumerate(self._slots) if s.item == item] + [
            i for i, s in enumerate(self._slots) if s.item is None
        ]
        for index in order:
            if number == 0:
                break
            placed = min(self.room_in_slot(index, item), number)
            if placed > 0:
                self._place(index, item, placed)
                number -= placed
        return number


@dataclass(frozen=True, repr=False)
class InventoryCell(Container):
    """Container handle onto one inventory slot."""

    inventory: Inventory
    index: int

    def get_content(self) -> Optional[Content]:
        return self.inventory.get_content(self.index)

    def max_acceptable(self, item: ItemDescriptor) -> int:
        return self.inventory.room_in_slot(self.index, item)

    def add_items(self, item: ItemDescriptor, qty: int) -> None:
        self.inventory.add_items_to_slot(self.index, item, qty)

    def remove_items(self, qty: int) -> None:
        self.inventory.remove_from_slot(self.index, qty)

    def __repr__(self) -> str:
        return f"InventoryCell(index={self.index})"
