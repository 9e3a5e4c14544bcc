from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .saveable import SaveableEntity
from .store import SaveStore

logger = logging.getLogger(__name__)


class SavingSystem:
    """Captures and restores saveable entities through a SaveStore.

    Saving merges into what the file already holds, so entities that are not
    part of the current call keep their previously saved state.
    """

    def __init__(self, store: SaveStore) -> None:
        self.store = store

    def save(self, name: str, entities: Iterable[SaveableEntity]) -> Path:
        state = self.store.read(name)
        for entity in entities:
            state[entity.identifier] = entity.capture_state()
        return self.store.write(name, state)

    def load(self, name: str, entities: Iterable[SaveableEntity]) -> int:
        """Restore every entity present in the save. Returns how many were restored."""
        state = self.store.read(name)
        restored = 0
        for entity in entities:
            if entity.identifier not in state:
                logger.debug("No saved state for %s in %s", entity.identifier, name)
                continue
            entity.restore_state(state[entity.identifier])
            restored += 1
        logger.info("Restored %d entities from %s", restored, name)
        return restored

    def delete(self, name: str) -> bool:
        return self.store.delete(name)
