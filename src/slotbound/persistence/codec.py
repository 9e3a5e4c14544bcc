from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict

from .errors import SaveValidationError

# Increment when making breaking changes to the save document layout
SCHEMA_VERSION = 1


def encode_save(entities: Dict[str, Any]) -> str:
    """Encode entity states to a pretty-printed JSON document."""
    data = {
        "schema_version": SCHEMA_VERSION,
        "saved_at": datetime.now(timezone.utc).isoformat(),
        "entities": entities,
    }
    return json.dumps(data, ensure_ascii=False, sort_keys=True, indent=2)


def decode_save(text: str) -> Dict[str, Any]:
    """Decode a save document and return its entity states, migrating older versions."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SaveValidationError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SaveValidationError("Save document must be a JSON object")

    try:
        version = int(data.get("schema_version", SCHEMA_VERSION))
    except (TypeError, ValueError) as e:
        raise SaveValidationError(f"Invalid schema_version: {data.get('schema_version')!r}") from e
    if version != SCHEMA_VERSION:
        data = migrate_data(data, from_version=version, to_version=SCHEMA_VERSION)

    entities = data.get("entities", {})
    if not isinstance(entities, dict):
        raise SaveValidationError("Save document 'entities' must be an object")
    return entities


def migrate_data(data: Dict[str, Any], from_version: int, to_version: int) -> Dict[str, Any]:
    """Migrate a save document between schema versions.

    Only version 1 exists, so older documents are re-stamped as-is.
    """
    if from_version == to_version:
        return data
    if from_version > to_version:
        raise SaveValidationError(
            f"Save schema version {from_version} is newer than supported {to_version}."
        )
    data["schema_version"] = to_version
    return data
