from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping

logger = logging.getLogger(__name__)


class Saveable(ABC):
    """Component whose state can be captured to and restored from a JSON-compatible value."""

    @abstractmethod
    def capture_state(self) -> Any:
        """Return a JSON-compatible snapshot of this component."""

    @abstractmethod
    def restore_state(self, state: Any) -> None:
        """Replace this component's state with a snapshot produced by ``capture_state``."""


class SaveableEntity:
    """
    A stable identity owning named saveable components.

    The identifier is the key under which the entity's state is stored in a
    save file, so it must not change between sessions.
    """

    def __init__(self, identifier: str, components: Mapping[str, Saveable]) -> None:
        if not identifier:
            raise ValueError("SaveableEntity needs a non-empty identifier")
        self.identifier = identifier
        self.components: Dict[str, Saveable] = dict(components)

    def capture_state(self) -> Dict[str, Any]:
        return {name: component.capture_state() for name, component in self.components.items()}

    def restore_state(self, state: Mapping[str, Any]) -> None:
        for name, component in self.components.items():
            if name not in state:
                logger.warning("No saved state for component %s of %s", name, self.identifier)
                continue
            component.restore_state(state[name])

    def __repr__(self) -> str:
        return f"SaveableEntity({self.identifier!r}, components={sorted(self.components)})"
