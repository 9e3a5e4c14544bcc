import logging
import os
from typing import Optional, Union

ENV_LOG_LEVEL = "SLOTBOUND_LOG_LEVEL"


def configure_logging(default_level: Union[int, str] = logging.INFO, force_level: Optional[int] = None) -> None:
    """Configure root logger with a sane default format.

    Respects SLOTBOUND_LOG_LEVEL env var if present; ``force_level`` (e.g. from
    a --debug flag) wins over both.
    """
    if isinstance(default_level, str):
        default_level = getattr(logging, default_level.upper(), logging.INFO)
    level = default_level
    level_name = os.getenv(ENV_LOG_LEVEL)
    if level_name:
        level = getattr(logging, level_name.upper(), default_level)
    if force_level is not None:
        level = force_level
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
        force=True,
    )
