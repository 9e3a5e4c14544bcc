import json
import logging
from functools import lru_cache
from importlib import resources
from typing import Any, Dict

from jsonschema import Draft202012Validator

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _load_item_schema() -> Dict[str, Any]:
    """
    Load the item JSON schema shipped in ``slotbound.data``.

    The function is cached since the schema is static.
    """
    with resources.files("slotbound.data").joinpath("item.schema.json").open("r", encoding="utf-8") as f:
        logger.debug("Loading packaged item schema")
        return json.load(f)


def validate_item_dict(data: Dict[str, Any]) -> None:
    """
    Validate a single item dictionary against the item JSON schema.

    Raises:
        jsonschema.ValidationError if the data is invalid.
    """
    validator = Draft202012Validator(_load_item_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errors:
        # Log all errors, then raise the first to provide a clear exception
        for err in errors:
            logger.error("Item schema validation error at %s: %s", list(err.path), err.message)
        raise errors[0]


__all__ = [
    "validate_item_dict",
]
