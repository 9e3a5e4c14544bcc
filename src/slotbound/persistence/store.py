from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

from platformdirs import user_data_dir

from .codec import decode_save, encode_save
from .errors import CorruptSaveError, SaveError

logger = logging.getLogger(__name__)

APP_NAME = "slotbound"
ENV_SAVE_DIR = "SLOTBOUND_SAVE_DIR"

_NAME_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def default_save_root() -> Path:
    """Save directory: $SLOTBOUND_SAVE_DIR if set, else the platform user data dir."""
    override = os.environ.get(ENV_SAVE_DIR)
    if override:
        return Path(override)
    return Path(user_data_dir(APP_NAME))


class SaveStore:
    """
    Reads and writes named save files under one directory.

    Writes are atomic and keep the previous file as ``<name>.json.bak``; a
    corrupt primary file is recovered from that backup when possible.
    """

    def __init__(self, root_dir: Optional[Union[str, Path]] = None) -> None:
        self.root_dir = Path(root_dir) if root_dir is not None else default_save_root()

    def path_for(self, name: str) -> Path:
        if not name or not _NAME_RE.match(name) or name in (".", ".."):
            raise SaveError(f"Invalid save name: {name!r}")
        return self.root_dir / f"{name}.json"

    def exists(self, name: str) -> bool:
        return self.path_for(name).exists()

    def read(self, name: str) -> Dict[str, Any]:
        """Return the entity states stored under ``name``; an absent save reads as empty."""
        path = self.path_for(name)
        bak = self._backup_path(path)
        if not path.exists() and not bak.exists():
            return {}
        try:
            return self._read(path)
        except (OSError, SaveError) as primary_exc:
            logger.warning("Could not read %s (%s); trying backup", path, primary_exc)
            if bak.exists():
                try:
                    return self._read(bak)
                except (OSError, SaveError) as backup_exc:
                    raise CorruptSaveError(
                        f"Unable to load save {name!r}: {primary_exc}; backup also failed: {backup_exc}"
                    ) from backup_exc
            raise CorruptSaveError(f"Unable to load save {name!r}: {primary_exc}") from primary_exc

    def write(self, name: str, entities: Dict[str, Any]) -> Path:
        path = self.path_for(name)
        self._atomic_write(path, encode_save(entities))
        logger.info("Saved %d entities to %s", len(entities), path)
        return path

    def delete(self, name: str) -> bool:
        path = self.path_for(name)
        removed = False
        for candidate in (path, self._backup_path(path)):
            if candidate.exists():
                candidate.unlink()
                removed = True
        if removed:
            logger.info("Deleted save %s", path)
        return removed

    @staticmethod
    def _backup_path(path: Path) -> Path:
        return path.with_suffix(path.suffix + ".bak")

    def _read(self, path: Path) -> Dict[str, Any]:
        with path.open("r", encoding="utf-8") as f:
            return decode_save(f.read())

    def _atomic_write(self, path: Path, text: str) -> None:
        """Write to path.tmp, fsync, move the old file to path.bak, then rename tmp into place."""
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        if path.exists():
            os.replace(path, self._backup_path(path))
        os.replace(tmp, path)
