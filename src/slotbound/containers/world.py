from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from ..capacity import ensure_can_add, ensure_can_remove
from ..events import ITEM_DROPPED, EventBus
from ..items.catalog import ItemCatalog
from ..items.model import ItemDescriptor
from ..persistence.errors import SaveValidationError
from ..persistence.saveable import Saveable
from .base import MAX_QUANTITY, Container, Content, restore_stack

logger = logging.getLogger(__name__)

Position = Tuple[float, float, float]


def _origin() -> Position:
    return (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class DropRecord:
    item: ItemDescriptor
    number: int
    position: Position


class ItemDropper(Saveable):
    """
    Records stacks dropped into the world.

    Spawning and despawning the pickups themselves belongs to the scene; this
    class only keeps what was dropped, how many, and where.
    """

    def __init__(
        self,
        catalog: Optional[ItemCatalog] = None,
        bus: Optional[EventBus] = None,
        location: Callable[[], Position] = _origin,
    ) -> None:
        self._drops: List[DropRecord] = []
        self.catalog = catalog
        self.bus = bus or EventBus()
        self.location = location

    def drop_item(self, item: ItemDescriptor, number: int = 1) -> DropRecord:
        if number < 1:
            raise ValueError("Dropped quantity must be positive")
        record = DropRecord(item=item, number=number, position=tuple(self.location()))
        self._drops.append(record)
        logger.info("Dropped %d x %s at %s", number, item.id, record.position)
        self.bus.publish(ITEM_DROPPED, {"item_id": item.id, "number": number, "position": record.position})
        return record

    def drops(self) -> List[DropRecord]:
        return list(self._drops)

    def count(self, item: ItemDescriptor) -> int:
        return sum(record.number for record in self._drops if record.item == item)

    def sink(self) -> "WorldDropSink":
        return WorldDropSink(self)

    # Saveable

    def capture_state(self) -> List[dict]:
        return [
            {"item_id": record.item.id, "number": record.number, "position": list(record.position)}
            for record in self._drops
        ]

    def restore_state(self, state: Any) -> None:
        if not isinstance(state, list):
            raise SaveValidationError("Dropped item state must be a list of drop records")
        restored: List[DropRecord] = []
        for record in state:
            content = restore_stack(record, self.catalog, "ItemDropper")
            if content is None:
                continue
            position = record.get("position", [0.0, 0.0, 0.0])
            if not isinstance(position, (list, tuple)) or len(position) != 3:
                raise SaveValidationError(f"ItemDropper: invalid position {position!r}")
            restored.append(
                DropRecord(item=content.item, number=content.quantity, position=tuple(float(v) for v in position))
            )
        self._drops = restored


@dataclass(frozen=True, repr=False)
class WorldDropSink(Container):
    """Container that drops whatever it receives into the world. Never holds anything."""

    dropper: ItemDropper

    def get_content(self) -> Optional[Content]:
        return None

    def max_acceptable(self, item: ItemDescriptor) -> int:
        return MAX_QUANTITY

    def add_items(self, item: ItemDescriptor, qty: int) -> None:
        ensure_can_add(self, item, qty)
        if qty == 0:
            return
        self.dropper.drop_item(item, qty)

    def remove_items(self, qty: int) -> None:
        ensure_can_remove(self, qty)

    def __repr__(self) -> str:
        return "WorldDropSink()"
