import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, DefaultDict, Dict, List

logger = logging.getLogger(__name__)

INVENTORY_UPDATED = "inventory_updated"
EQUIPMENT_UPDATED = "equipment_updated"
ACTIONS_UPDATED = "actions_updated"
ACTION_USED = "action_used"
ITEM_DROPPED = "item_dropped"


@dataclass(frozen=True)
class Event:
    """Event broadcast by a store after it changed.

    Attributes:
        name: Event name, one of the module constants.
        payload: Details about the change (slot index, item id, quantity).
    """
    name: str
    payload: Dict[str, Any]


class EventBus:
    """A lightweight publish/subscribe event bus.

    Stores publish here after each mutation so views can redraw. Subscribers
    are invoked synchronously in registration order.
    """

    def __init__(self) -> None:
        self._subs: DefaultDict[str, List[Callable[[Event], None]]] = defaultdict(list)

    def subscribe(self, event_name: str, callback: Callable[[Event], None]) -> None:
        if not callable(callback):
            raise TypeError("callback must be callable")
        self._subs[event_name].append(callback)
        logger.debug("Subscribed %s to '%s'", getattr(callback, "__name__", str(callback)), event_name)

    def unsubscribe(self, event_name: str, callback: Callable[[Event], None]) -> None:
        if callback in self._subs.get(event_name, []):
            self._subs[event_name].remove(callback)
            logger.debug("Unsubscribed %s from '%s'", getattr(callback, "__name__", str(callback)), event_name)

    def publish(self, event_name: str, payload: Dict[str, Any]) -> None:
        event = Event(name=event_name, payload=payload)
        subs = list(self._subs.get(event_name, []))
        logger.debug("Publishing '%s' to %d subscribers: %s", event_name, len(subs), payload)
        for cb in subs:
            cb(event)
