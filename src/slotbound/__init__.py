"""slotbound: move item stacks between capacity-bounded slots without losing or duplicating any."""

from .containers import (
    MAX_QUANTITY,
    ActionSlot,
    ActionStore,
    Container,
    Content,
    Equipment,
    EquipmentSocket,
    Inventory,
    InventoryCell,
    ItemDropper,
    WorldDropSink,
)
from .exceptions import CallerContractViolation, SlotboundError
from .items import EquipLocation, ItemCatalog, ItemDescriptor, ItemKind
from .transfer import TransferEngine, TransferOutcome, TransferRequest, TransferResult

__version__ = "0.1.0"

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
    "WorldDropSink",
    "ItemCatalog",
    "ItemDescriptor",
    "ItemKind",
    "EquipLocation",
    "TransferEngine",
    "TransferOutcome",
    "TransferRequest",
    "TransferResult",
    "CallerContractViolation",
    "SlotboundError",
]
