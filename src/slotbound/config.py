from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class InventorySettings:
    size: int = 16
    stack_limit: int = 99


@dataclass
class ActionBarSettings:
    size: int = 6


@dataclass
class SaveSettings:
    directory: Optional[str] = None  # None -> platform user data dir
    default_name: str = "quicksave"


@dataclass
class LoggingSettings:
    level: str = "INFO"


@dataclass
class Settings:
    inventory: InventorySettings = field(default_factory=InventorySettings)
    action_bar: ActionBarSettings = field(default_factory=ActionBarSettings)
    saves: SaveSettings = field(default_factory=SaveSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        with path.open("r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Settings file {path} must contain a mapping")
        return data

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "Settings":
        try:
            settings = Settings(
                inventory=InventorySettings(**(data.get("inventory") or {})),
                action_bar=ActionBarSettings(**(data.get("action_bar") or {})),
                saves=SaveSettings(**(data.get("saves") or {})),
                logging=LoggingSettings(**(data.get("logging") or {})),
            )
        except TypeError as exc:
            raise ConfigError(f"Unknown settings key: {exc}") from exc
        settings.validate()
        return settings

    def validate(self) -> None:
        for name, value in (
            ("inventory.size", self.inventory.size),
            ("inventory.stack_limit", self.inventory.stack_limit),
            ("action_bar.size", self.action_bar.size),
        ):
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")
        if not isinstance(logging.getLevelName(str(self.logging.level).upper()), int):
            raise ConfigError(f"Unknown log level {self.logging.level!r}")

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "Settings":
        """Load settings from the packaged defaults and an optional user override file.

        If user_path is provided and exists, its values are overlaid onto the defaults.
        """
        try:
            with resources.files("slotbound.data").joinpath("default_settings.yaml").open("r", encoding="utf-8") as f:
                default_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to dataclass defaults.")
            default_data = dataclasses.asdict(Settings())

        user_data: dict = {}
        if user_path is not None:
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        settings = cls._from_dict(cls._deep_merge(default_data, user_data))
        logger.debug("Settings merged: %s", settings)
        return settings

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(dataclasses.asdict(self), f, sort_keys=False)
        logger.info("Saved settings to %s", path)
