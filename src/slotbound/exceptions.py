class SlotboundError(Exception):
    """Base exception for the slotbound package."""


class CallerContractViolation(SlotboundError):
    """Raised when a container is asked to add or remove more than it permits.

    This is a programming error in the caller; the transfer engine never
    triggers it against a correctly implemented container.
    """


class InvalidSlotError(SlotboundError, IndexError):
    """Raised when a slot index or location does not exist on its owner."""


class ItemDefinitionError(SlotboundError, ValueError):
    """Raised when an item definition is malformed."""


class UnknownItemError(SlotboundError, KeyError):
    """Raised when an item id is not present in the catalog."""


class ConfigError(SlotboundError, ValueError):
    """Raised when settings are invalid."""


class CatalogError(SlotboundError):
    """Raised when an item catalog file cannot be read or validated."""
