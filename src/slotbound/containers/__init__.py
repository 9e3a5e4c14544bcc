from .actions import ActionSlot, ActionStore
from .base import MAX_QUANTITY, Container, Content
from .equipment import Equipment, EquipmentSocket
from .inventory import Inventory, InventoryCell
from .world import DropRecord, ItemDropper, WorldDropSink

__all__ = [
    "MAX_QUANTITY",
    "Container",
    "Content",
    "Inventory",
    "InventoryCell",
    "Equipment",
    "EquipmentSocket",
    "ActionStore",
    "ActionSlot",
    "ItemDropper",
    "DropRecord",
    "WorldDropSink",
]
