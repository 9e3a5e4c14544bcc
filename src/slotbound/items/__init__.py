from .catalog import ItemCatalog
from .model import EquipLocation, ItemDescriptor, ItemKind, action, equipable, generic

__all__ = [
    "ItemCatalog",
    "ItemDescriptor",
    "ItemKind",
    "EquipLocation",
    "generic",
    "equipable",
    "action",
]
