from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..capacity import ensure_can_add, ensure_can_remove
from ..events import ACTION_USED, ACTIONS_UPDATED, EventBus
from ..exceptions import InvalidSlotError
from ..items.catalog import ItemCatalog
from ..items.model import ItemDescriptor
from ..persistence.errors import SaveValidationError
from ..persistence.saveable import Saveable
from .base import MAX_QUANTITY, Container, Content, capture_stack, restore_stack

logger = logging.getLogger(__name__)


@dataclass
class DockedItem:
    item: ItemDescriptor
    number: int


class ActionStore(Saveable):
    """
    Action bar: a fixed number of indexed slots docking action items.

    Stackable consumables pile up in one slot; every other action item takes
    a slot on its own.
    """

    def __init__(self, size: int = 6, catalog: Optional[ItemCatalog] = None, bus: Optional[EventBus] = None) -> None:
        if size < 1:
            raise ValueError("Action bar size must be positive")
        self.size = size
        self._docked: Dict[int, DockedItem] = {}
        self.catalog = catalog
        self.bus = bus or EventBus()

    def _check(self, index: int) -> int:
        if not isinstance(index, int) or not 0 <= index < self.size:
            raise InvalidSlotError(f"Action slot {index!r} out of range (size={self.size})")
        return index

    def get_action(self, index: int) -> Optional[ItemDescriptor]:
        docked = self._docked.get(self._check(index))
        return docked.item if docked else None

    def get_number(self, index: int) -> int:
        docked = self._docked.get(self._check(index))
        return docked.number if docked else 0

    def get_content(self, index: int) -> Optional[Content]:
        docked = self._docked.get(self._check(index))
        return Content(docked.item, docked.number) if docked else None

    def max_acceptable(self, item: ItemDescriptor, index: int) -> int:
        return self._room(item, self._docked.get(self._check(index)))

    @staticmethod
    def _room(item: ItemDescriptor, docked: Optional[DockedItem]) -> int:
        if not item.is_action():
            return 0
        if docked is not None and docked.item != item:
            return 0
        if item.consumable and item.stackable:
            return MAX_QUANTITY - (docked.number if docked else 0)
        if docked is not None:
            return 0
        return 1

    def add_action(self, item: ItemDescriptor, index: int, number: int) -> None:
        ensure_can_add(self.slot(index), item, number)
        if number == 0:
            return
        docked = self._docked.get(index)
        if docked is None:
            self._docked[index] = DockedItem(item, number)
        else:
            docked.number += number
        logger.debug("Docked %d x %s at action slot %d", number, item.id, index)
        self.bus.publish(ACTIONS_UPDATED, {"index": index, "item_id": item.id})

    def remove_items(self, index: int, number: int) -> None:
        ensure_can_remove(self.slot(index), number)
        if number == 0:
            return
        docked = self._docked[index]
        docked.number -= number
        if docked.number <= 0:
            del self._docked[index]
        logger.debug("Removed %d x %s from action slot %d", number, docked.item.id, index)
        self.bus.publish(ACTIONS_UPDATED, {"index": index, "item_id": docked.item.id})

    def use(self, index: int, user: Any = None) -> bool:
        """
        Use the action docked at ``index``.

        Consumable actions lose one charge per use. Returns False when the
        slot is empty.
        """
        item = self.get_action(index)
        if item is None:
            return False
        logger.info("Using action %s from slot %d", item.id, index)
        self.bus.publish(ACTION_USED, {"index": index, "item_id": item.id, "user": user})
        if item.consumable:
            self.remove_items(index, 1)
        return True

    def slot(self, index: int) -> "ActionSlot":
        return ActionSlot(self, self._check(index))

    # Saveable

    def capture_state(self) -> Dict[str, dict]:
        return {
            str(index): capture_stack(Content(docked.item, docked.number))
            for index, docked in sorted(self._docked.items())
        }

    def restore_state(self, state: Any) -> None:
        if not isinstance(state, dict):
            raise SaveValidationError("Action bar state must be a mapping of index -> stack record")
        restored: Dict[int, DockedItem] = {}
        for raw_index, record in state.items():
            try:
                index = int(raw_index)
            except (TypeError, ValueError) as exc:
                raise SaveValidationError(f"Invalid action slot index {raw_index!r}") from exc
            if not 0 <= index < self.size:
                logger.warning("Saved action slot %d does not exist (size=%d); skipping", index, self.size)
                continue
            content = restore_stack(record, self.catalog, "ActionStore")
            if content is None:
                continue
            if self._room(content.item, None) < content.quantity:
                logger.warning(
                    "ActionStore: %d x %s cannot be docked at slot %d; skipping",
                    content.quantity, content.item.id, index,
                )
                continue
            restored[index] = DockedItem(content.item, content.quantity)
        self._docked = restored
        self.bus.publish(ACTIONS_UPDATED, {"index": None, "item_id": None})


@dataclass(frozen=True, repr=False)
class ActionSlot(Container):
    """Container handle onto one action bar slot."""

    store: ActionStore
    index: int

    def get_content(self) -> Optional[Content]:
        return self.store.get_content(self.index)

    def max_acceptable(self, item: ItemDescriptor) -> int:
        return self.store.max_acceptable(item, self.index)

    def add_items(self, item: ItemDescriptor, qty: int) -> None:
        self.store.add_action(item, self.index, qty)

    def remove_items(self, qty: int) -> None:
        self.store.remove_items(self.index, qty)

    def __repr__(self) -> str:
        return f"ActionSlot(index={self.index})"
