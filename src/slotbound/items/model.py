from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional

from ..exceptions import ItemDefinitionError
from .schema import validate_item_dict

logger = logging.getLogger(__name__)


class ItemKind(str, Enum):
    GENERIC = "generic"
    EQUIPABLE = "equipable"
    ACTION = "action"


class EquipLocation(str, Enum):
    HELM = "helm"
    CHEST = "chest"
    CAPE = "cape"
    LEGS = "legs"
    FEET = "feet"
    GLOVE = "glove"
    SHOULDERS = "shoulders"
    NECKLACE = "necklace"
    LEFT_RING = "left_ring"
    RIGHT_RING = "right_ring"
    MAIN_HAND = "main_hand"
    OFF_HAND = "off_hand"


@dataclass(frozen=True)
class ItemDescriptor:
    """
    Immutable description of an item type.

    Containers only compare descriptors and read ``stackable``; the remaining
    fields drive the type restrictions of equipment sockets and action slots.
    """

    id: str
    name: str = ""
    kind: ItemKind = ItemKind.GENERIC
    stackable: bool = False
    description: str = ""
    tier: int = 1
    equip_locations: FrozenSet[EquipLocation] = field(default_factory=frozenset)
    consumable: bool = False

    def __post_init__(self) -> None:
        self.ensure_valid()

    def ensure_valid(self) -> None:
        if not self.id or not isinstance(self.id, str):
            raise ItemDefinitionError("Item id must be a non-empty string")
        if not isinstance(self.tier, int) or self.tier < 1:
            raise ItemDefinitionError(f"Item {self.id} has invalid tier {self.tier!r}")
        if self.kind == ItemKind.EQUIPABLE and not self.equip_locations:
            raise ItemDefinitionError(f"Equipable item {self.id} has no equip locations")
        if self.kind != ItemKind.EQUIPABLE and self.equip_locations:
            raise ItemDefinitionError(f"Non-equipable item {self.id} should not have equip locations")
        if self.consumable and self.kind != ItemKind.ACTION:
            raise ItemDefinitionError(f"Only action items can be consumable ({self.id})")

    def is_equipable(self) -> bool:
        return self.kind == ItemKind.EQUIPABLE

    def is_action(self) -> bool:
        return self.kind == ItemKind.ACTION

    def can_equip_at(self, location: EquipLocation) -> bool:
        return self.is_equipable() and location in self.equip_locations

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ItemDescriptor":
        """Create a descriptor from a raw record, validating it with the JSON schema."""
        validate_item_dict(data)
        kind = ItemKind(data.get("kind", ItemKind.GENERIC.value))
        locations: FrozenSet[EquipLocation] = frozenset()
        if kind == ItemKind.EQUIPABLE:
            raw_locations = data.get("equip_locations") or [EquipLocation.MAIN_HAND.value]
            locations = frozenset(EquipLocation(loc) for loc in raw_locations)
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            kind=kind,
            stackable=bool(data.get("stackable", False)),
            description=data.get("description", ""),
            tier=int(data.get("tier", 1)),
            equip_locations=locations,
            consumable=bool(data.get("consumable", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "kind": self.kind.value,
            "stackable": self.stackable,
            "description": self.description,
            "tier": self.tier,
        }
        if self.is_equipable():
            data["equip_locations"] = sorted(loc.value for loc in self.equip_locations)
        if self.is_action():
            data["consumable"] = self.consumable
        return data


# Convenience helpers to build descriptors in code and tests.

def generic(id: str, name: str = "", stackable: bool = False, description: str = "") -> ItemDescriptor:
    return ItemDescriptor(id=id, name=name or id, stackable=stackable, description=description)


def equipable(
    id: str,
    name: str = "",
    locations: Optional[Iterable[EquipLocation]] = None,
    description: str = "",
    tier: int = 1,
) -> ItemDescriptor:
    return ItemDescriptor(
        id=id,
        name=name or id,
        kind=ItemKind.EQUIPABLE,
        stackable=False,
        description=description,
        tier=tier,
        equip_locations=frozenset(locations or (EquipLocation.MAIN_HAND,)),
    )


def action(
    id: str,
    name: str = "",
    consumable: bool = False,
    stackable: bool = False,
    description: str = "",
) -> ItemDescriptor:
    return ItemDescriptor(
        id=id,
        name=name or id,
        kind=ItemKind.ACTION,
        stackable=stackable,
        description=description,
        consumable=consumable,
    )


__all__ = [
    "ItemKind",
    "EquipLocation",
    "ItemDescriptor",
    "generic",
    "equipable",
    "action",
]
