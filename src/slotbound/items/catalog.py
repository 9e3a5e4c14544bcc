from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

import yaml
from jsonschema import ValidationError

from ..exceptions import CatalogError, ItemDefinitionError, UnknownItemError
from .model import ItemDescriptor

logger = logging.getLogger(__name__)


class ItemCatalog:
    """
    Read-only lookup of item descriptors by id.

    A catalog is owned by whoever builds the game session and handed to the
    stores that need to resolve saved item ids. There is no module-level
    default instance.
    """

    def __init__(self, items: Optional[Iterable[ItemDescriptor]] = None) -> None:
        self._items: Dict[str, ItemDescriptor] = {}
        for item in items or ():
            self.register(item)

    def register(self, item: ItemDescriptor) -> bool:
        """Register a descriptor. Returns False (and keeps the first one) on duplicate ids."""
        existing = self._items.get(item.id)
        if existing is not None:
            logger.error("Duplicate item id %r for %s and %s; keeping the first", item.id, existing.name, item.name)
            return False
        self._items[item.id] = item
        return True

    def get(self, item_id: str) -> ItemDescriptor:
        try:
            return self._items[item_id]
        except KeyError as exc:
            raise UnknownItemError(f"Unknown item id: {item_id}") from exc

    def find(self, item_id: Optional[str]) -> Optional[ItemDescriptor]:
        if item_id is None:
            return None
        return self._items.get(item_id)

    def ids(self) -> List[str]:
        return sorted(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ItemDescriptor]:
        return iter(self._items.values())

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "ItemCatalog":
        catalog = cls()
        for record in records:
            catalog.register(ItemDescriptor.from_dict(record))
        return catalog

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ItemCatalog":
        """
        Load a catalog from a JSON or YAML file.

        The document is either a list of item records or a mapping with an
        ``items`` list. Any read, parse or validation failure is reported as
        a CatalogError naming the file.
        """
        p = Path(path)
        if not p.exists():
            raise CatalogError(f"Catalog file not found: {p}")
        try:
            with p.open("r", encoding="utf-8") as f:
                if p.suffix.lower() in (".yaml", ".yml"):
                    raw = yaml.safe_load(f)
                else:
                    raw = json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise CatalogError(f"Failed to parse catalog {p}: {exc}") from exc

        records = raw.get("items") if isinstance(raw, dict) else raw
        if not isinstance(records, list):
            raise CatalogError(f"Catalog {p} must hold a list of items or an 'items' list")
        try:
            catalog = cls.from_records(records)
        except ValidationError as exc:
            raise CatalogError(f"Invalid item record in {p}: {exc.message}") from exc
        except ItemDefinitionError as exc:
            raise CatalogError(f"Invalid item definition in {p}: {exc}") from exc
        logger.info("Loaded %d items from %s", len(catalog), p)
        return catalog


__all__ = ["ItemCatalog"]
