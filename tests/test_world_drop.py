import pytest

from slotbound.containers import MAX_QUANTITY, ItemDropper, WorldDropSink
from slotbound.events import ITEM_DROPPED
from slotbound.exceptions import CallerContractViolation
from slotbound.persistence import SaveValidationError


def test_sink_is_always_empty_and_unbounded(catalog):
    sink = WorldDropSink(ItemDropper(catalog=catalog))
    assert sink.get_content() is None
    assert sink.max_acceptable(catalog.get("lantern")) == MAX_QUANTITY
    assert sink.max_acceptable(catalog.get("arrow")) == MAX_QUANTITY


def test_sink_add_records_a_drop_at_the_current_location(catalog, bus):
    position = [(0.0, 0.0, 0.0)]
    dropper = ItemDropper(catalog=catalog, bus=bus, location=lambda: position[0])
    seen = []
    bus.subscribe(ITEM_DROPPED, seen.append)

    dropper.sink().add_items(catalog.get("arrow"), 12)
    position[0] = (4.0, 0.0, -2.5)
    dropper.sink().add_items(catalog.get("lantern"), 1)

    assert [(d.item.id, d.number, d.position) for d in dropper.drops()] == [
        ("arrow", 12, (0.0, 0.0, 0.0)),
        ("lantern", 1, (4.0, 0.0, -2.5)),
    ]
    assert dropper.count(catalog.get("arrow")) == 12
    assert seen[1].payload == {"item_id": "lantern", "number": 1, "position": (4.0, 0.0, -2.5)}


def test_sink_add_zero_drops_nothing(catalog):
    dropper = ItemDropper(catalog=catalog)
    dropper.sink().add_items(catalog.get("arrow"), 0)
    assert dropper.drops() == []


def test_sink_cannot_be_emptied(catalog):
    sink = ItemDropper(catalog=catalog).sink()
    sink.remove_items(0)
    with pytest.raises(CallerContractViolation):
        sink.remove_items(1)


def test_drop_item_requires_positive_number(catalog):
    with pytest.raises(ValueError):
        ItemDropper(catalog=catalog).drop_item(catalog.get("arrow"), 0)


def test_capture_and_restore(catalog):
    dropper = ItemDropper(catalog=catalog, location=lambda: (1.0, 2.0, 3.0))
    dropper.drop_item(catalog.get("arrow"), 3)
    state = dropper.capture_state()
    assert state == [{"item_id": "arrow", "number": 3, "position": [1.0, 2.0, 3.0]}]

    fresh = ItemDropper(catalog=catalog)
    fresh.restore_state(state)
    assert fresh.drops() == dropper.drops()


def test_restore_rejects_bad_positions(catalog):
    with pytest.raises(SaveValidationError):
        ItemDropper(catalog=catalog).restore_state([{"item_id": "arrow", "number": 1, "position": [1, 2]}])
    with pytest.raises(SaveValidationError):
        ItemDropper(catalog=catalog).restore_state({"item_id": "arrow"})
