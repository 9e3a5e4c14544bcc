import pytest

from slotbound.events import INVENTORY_UPDATED, ITEM_DROPPED, Event, EventBus


def test_publish_reaches_subscribers_in_order():
    bus = EventBus()
    calls = []
    bus.subscribe(INVENTORY_UPDATED, lambda e: calls.append(("a", e.payload["index"])))
    bus.subscribe(INVENTORY_UPDATED, lambda e: calls.append(("b", e.payload["index"])))

    bus.publish(INVENTORY_UPDATED, {"index": 3})

    assert calls == [("a", 3), ("b", 3)]


def test_events_are_routed_by_name():
    bus = EventBus()
    seen = []
    bus.subscribe(ITEM_DROPPED, seen.append)
    bus.publish(INVENTORY_UPDATED, {})
    bus.publish(ITEM_DROPPED, {"item_id": "arrow"})
    assert seen == [Event(ITEM_DROPPED, {"item_id": "arrow"})]


def test_unsubscribe():
    bus = EventBus()
    seen = []
    bus.subscribe(INVENTORY_UPDATED, seen.append)
    bus.unsubscribe(INVENTORY_UPDATED, seen.append)
    bus.unsubscribe(INVENTORY_UPDATED, seen.append)
    bus.publish(INVENTORY_UPDATED, {})
    assert seen == []


def test_subscribe_requires_callable():
    with pytest.raises(TypeError):
        EventBus().subscribe(INVENTORY_UPDATED, "not callable")


def test_subscriber_may_unsubscribe_while_handling():
    bus = EventBus()
    calls = []

    def once(event):
        calls.append(event.name)
        bus.unsubscribe(INVENTORY_UPDATED, once)

    bus.subscribe(INVENTORY_UPDATED, once)
    bus.publish(INVENTORY_UPDATED, {})
    bus.publish(INVENTORY_UPDATED, {})
    assert calls == [INVENTORY_UPDATED]
