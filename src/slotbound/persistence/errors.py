from ..exceptions import SlotboundError


class SaveError(SlotboundError):
    """Base exception for save/load errors."""


class SaveValidationError(SaveError):
    """Raised when validation of save data fails."""


class CorruptSaveError(SaveError):
    """Raised when a save file is corrupted and cannot be recovered from backup."""
