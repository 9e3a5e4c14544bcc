from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, NamedTuple, Optional

from ..items.catalog import ItemCatalog
from ..items.model import ItemDescriptor
from ..persistence.errors import SaveValidationError

logger = logging.getLogger(__name__)

# Largest quantity any container reports; the world drop sink uses it as "unbounded".
MAX_QUANTITY = 2**31 - 1


class Content(NamedTuple):
    item: ItemDescriptor
    quantity: int


class Container(ABC):
    """
    Capability surface over one conceptual slot.

    The transfer engine depends on these four operations only. Implementations
    must keep ``max_acceptable`` free of side effects and consistent with an
    ``add_items`` call made before any other mutation.
    """

    @abstractmethod
    def get_content(self) -> Optional[Content]:
        """Current occupant, or None when the slot is empty."""

    @abstractmethod
    def max_acceptable(self, item: ItemDescriptor) -> int:
        """How many of ``item`` this container could accept right now."""

    @abstractmethod
    def add_items(self, item: ItemDescriptor, qty: int) -> None:
        """Add ``qty`` of ``item``. Exceeding ``max_acceptable`` is a caller error."""

    @abstractmethod
    def remove_items(self, qty: int) -> None:
        """Remove ``qty`` of the current occupant. Exceeding the held quantity is a caller error."""


def capture_stack(content: Optional[Content]) -> Optional[Dict[str, Any]]:
    if content is None:
        return None
    return {"item_id": content.item.id, "number": content.quantity}


def restore_stack(record: Any, catalog: Optional[ItemCatalog], owner: str) -> Optional[Content]:
    """
    Resolve a captured ``{"item_id", "number"}`` record back into a Content.

    Unknown ids are skipped with a warning; malformed records raise
    SaveValidationError.
    """
    if record is None:
        return None
    if catalog is None:
        raise SaveValidationError(f"{owner} cannot restore items without a catalog")
    if not isinstance(record, dict) or "item_id" not in record:
        raise SaveValidationError(f"{owner}: malformed stack record {record!r}")
    number = record.get("number", 1)
    if not isinstance(number, int) or isinstance(number, bool) or number < 0:
        raise SaveValidationError(f"{owner}: invalid quantity {number!r} for {record['item_id']}")
    item = catalog.find(record["item_id"])
    if item is None:
        logger.warning("%s: unknown item id %r in saved state; skipping", owner, record["item_id"])
        return None
    if number == 0:
        return None
    return Content(item, number)
