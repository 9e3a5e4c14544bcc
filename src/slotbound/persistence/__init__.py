"""Persistence for container owners.

- Saveable components and SaveableEntity identities
- A versioned JSON save document (codec)
- SaveStore: atomic file I/O with a .bak backup per save
- SavingSystem: capture/restore of entities by stable identifier
"""

from .codec import SCHEMA_VERSION, decode_save, encode_save
from .errors import CorruptSaveError, SaveError, SaveValidationError
from .saveable import Saveable, SaveableEntity
from .saving_system import SavingSystem
from .store import SaveStore, default_save_root

__all__ = [
    "SCHEMA_VERSION",
    "encode_save",
    "decode_save",
    "Saveable",
    "SaveableEntity",
    "SaveStore",
    "SavingSystem",
    "default_save_root",
    "SaveError",
    "SaveValidationError",
    "CorruptSaveError",
]
