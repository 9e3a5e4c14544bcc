from collections import Counter

from hypothesis import given, settings, strategies as st

from slotbound.containers import ActionStore, Equipment, Inventory, ItemDropper
from slotbound.items import EquipLocation, action, equipable, generic
from slotbound.transfer import TransferEngine, TransferOutcome

ITEMS = [
    generic("arrow", "Arrow", stackable=True),
    generic("lantern", "Lantern"),
    equipable("iron_sword", "Iron Sword", [EquipLocation.MAIN_HAND, EquipLocation.OFF_HAND]),
    equipable("leather_cap", "Leather Cap", [EquipLocation.HELM]),
    action("potion_minor", "Minor Healing Potion", consumable=True, stackable=True),
    action("whistle", "Whistle"),
]
LOCATIONS = [EquipLocation.MAIN_HAND, EquipLocation.OFF_HAND, EquipLocation.HELM]


def build(seed_stacks):
    inventory = Inventory(size=4, stack_limit=5)
    equipment = Equipment()
    actions = ActionStore(size=2)
    dropper = ItemDropper()
    for index, (item_index, number) in enumerate(seed_stacks):
        item = ITEMS[item_index]
        inventory.add_items_to_slot(index, item, min(number, inventory.room_in_slot(index, item)))
    handles = (
        inventory.cells()
        + [equipment.socket(location) for location in LOCATIONS]
        + [actions.slot(i) for i in range(actions.size)]
        + [dropper.sink()]
    )
    return inventory, equipment, actions, dropper, handles


def census(inventory, equipment, actions, dropper):
    counts = Counter()
    for content in inventory.contents():
        if content is not None:
            counts[content.item.id] += content.quantity
    for item in equipment.equipped().values():
        counts[item.id] += 1
    for index in range(actions.size):
        content = actions.get_content(index)
        if content is not None:
            counts[content.item.id] += content.quantity
    for record in dropper.drops():
        counts[record.item.id] += record.number
    return counts


def snapshot(handles):
    return [handle.get_content() for handle in handles[:-1]]


seed = st.lists(st.tuples(st.integers(0, len(ITEMS) - 1), st.integers(1, 5)), min_size=1, max_size=4)
moves = st.lists(st.tuples(st.integers(0, 9), st.integers(0, 9)), max_size=25)


@settings(max_examples=200, deadline=None)
@given(seed_stacks=seed, gestures=moves)
def test_every_gesture_conserves_items_across_real_containers(seed_stacks, gestures):
    inventory, equipment, actions, dropper, handles = build(seed_stacks)
    expected = census(inventory, equipment, actions, dropper)
    engine = TransferEngine()

    for src, dst in gestures:
        before = snapshot(handles)
        result = engine.transfer(handles[src], handles[dst])
        assert census(inventory, equipment, actions, dropper) == expected
        if result.outcome in (TransferOutcome.SWAP_ABORTED, TransferOutcome.REJECTED, TransferOutcome.SELF_DROP):
            assert snapshot(handles) == before
