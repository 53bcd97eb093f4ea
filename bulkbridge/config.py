"""
Configuration management for bulkbridge.

Loads $BULKBRIDGE_HOME/config.yaml (default ~/.config/bulkbridge/config.yaml)
into a BulkbridgeConfig.
"""

import getpass
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

from bulkbridge.id_store import DEFAULT_STORE_SHEET
from bulkbridge.loaders.factory import DEFAULT_ALLOWED_LOADER_MODULES
from bulkbridge.logs import DEFAULT_LOG_SHEET


class ConfigError(Exception):
    """Configuration validation error."""
    pass


def get_bulkbridge_home() -> Path:
    """Return the config directory, honoring BULKBRIDGE_HOME."""
    home = os.environ.get("BULKBRIDGE_HOME")
    if home:
        return Path(home).expanduser()
    return Path("~/.config/bulkbridge").expanduser()


def get_config_path() -> Path:
    return get_bulkbridge_home() / "config.yaml"


def _default_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "default"


@dataclass
class BulkbridgeConfig:
    """Runtime configuration for the sidebar bridge."""

    sqlite_path: str = "~/.local/share/bulkbridge/workbook.db"
    user: str = field(default_factory=_default_user)
    ui_root: Optional[str] = None
    log_sheet: str = DEFAULT_LOG_SHEET
    store_sheet: str = DEFAULT_STORE_SHEET
    loaders: Dict[str, Any] = field(default_factory=dict)
    allowed_loader_modules: List[str] = field(
        default_factory=lambda: list(DEFAULT_ALLOWED_LOADER_MODULES)
    )
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_format: str = "pretty"
    env_file: Optional[str] = None

    def validate(self) -> None:
        """Validate configuration values."""
        if not self.sqlite_path:
            raise ConfigError("sqlite_path is required")
        if not self.user:
            raise ConfigError("user is required")
        if self.log_sheet == self.store_sheet:
            raise ConfigError(
                f"log_sheet and store_sheet must differ (both '{self.log_sheet}')"
            )
        if self.log_format not in ("structured", "pretty"):
            raise ConfigError(f"log_format must be 'structured' or 'pretty', got '{self.log_format}'")
        if not isinstance(self.loaders, dict):
            raise ConfigError("loaders must be a mapping of entity -> factory")

    def get_log_file_path(self) -> Optional[Path]:
        return Path(self.log_file).expanduser() if self.log_file else None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BulkbridgeConfig":
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")
        # Drop explicit nulls so defaults apply
        return cls(**{k: v for k, v in data.items() if v is not None})


def load_config(config_path: Optional[Path] = None) -> BulkbridgeConfig:
    """
    Load bulkbridge configuration from YAML.

    Args:
        config_path: Path to config file. Defaults to $BULKBRIDGE_HOME/config.yaml

    Returns:
        BulkbridgeConfig instance

    Raises:
        FileNotFoundError: If the config file does not exist
        ConfigError: If config is invalid
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(
            f"bulkbridge config.yaml not found at {config_path}. Run 'bulkbridge init'."
        )

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if not isinstance(data, dict):
        raise ConfigError("Configuration file must contain a mapping")

    config = BulkbridgeConfig.from_dict(data)
    config.validate()

    if config.env_file:
        env_path = Path(config.env_file).expanduser()
        if env_path.exists():
            load_dotenv(env_path)

    return config
