"""Capacity arithmetic shared by the container kinds and the transfer engine."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from .exceptions import CallerContractViolation
from .items.model import ItemDescriptor

if TYPE_CHECKING:
    from .containers.base import Container, Content

logger = logging.getLogger(__name__)


def stack_room(held: Optional["Content"], item: ItemDescriptor, *, stack_limit: int) -> int:
    """Room left for ``item`` in a single slot currently holding ``held``."""
    if held is None:
        return stack_limit if item.stackable else 1
    if held.item != item or not item.stackable:
        return 0
    return max(0, stack_limit - held.quantity)


def ensure_can_add(container: "Container", item: ItemDescriptor, qty: int) -> None:
    if qty < 0:
        raise CallerContractViolation(f"Cannot add a negative quantity ({qty}) of {item.id}")
    if qty == 0:
        return
    room = container.max_acceptable(item)
    if qty > room:
        raise CallerContractViolation(
            f"{container!r} accepts at most {room} of {item.id}; asked to add {qty}"
        )


def ensure_can_remove(container: "Container", qty: int) -> None:
    if qty < 0:
        raise CallerContractViolation(f"Cannot remove a negative quantity ({qty})")
    if qty == 0:
        return
    content = container.get_content()
    held = content.quantity if content is not None else 0
    if qty > held:
        raise CallerContractViolation(f"{container!r} holds {held}; asked to remove {qty}")


def acceptable_amount(container: "Container", item: ItemDescriptor, qty: int) -> int:
    """How much of ``qty`` units of ``item`` would fit into ``container``."""
    return max(0, min(container.max_acceptable(item), qty))


def takeback_amount(
    item: ItemDescriptor,
    qty: int,
    origin: "Container",
    counterpart: "Container",
) -> int:
    """
    Quantity of ``item`` that cannot move into ``counterpart`` and must return to ``origin``.

    Returns 0 when the counterpart takes everything, and also when ``origin``
    cannot re-absorb the shortfall. In the latter case the full amount stays in
    flight and the swap's final feasibility check rejects it.
    """
    room = counterpart.max_acceptable(item)
    if room >= qty:
        return 0
    shortfall = qty - room
    if origin.max_acceptable(item) < shortfall:
        logger.debug("Origin cannot take back %d of %s", shortfall, item.id)
        return 0
    return shortfall
