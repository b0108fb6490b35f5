# src/gogimport/core/config.py
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from .errors import ConfigError
from .types import CANONICAL_ORDER, Category

CONFIG_FILENAME = "config.yaml"


def _default_group_order() -> List[str]:
    return [category.value for category in CANONICAL_ORDER]


def get_config_dir() -> Path:
    """Get the gogimport configuration directory."""
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", "~/.config")
    return Path(xdg_config_home).expanduser() / "gogimport"


def get_cache_dir() -> Path:
    """Get the directory holding standard library package lists."""
    xdg_cache_home = os.environ.get("XDG_CACHE_HOME", "~/.cache")
    return Path(xdg_cache_home).expanduser() / "gogimport"


@dataclass
class Config:
    """Configuration data class for gogimport."""

    local_prefix: Optional[str] = None
    group_order: List[str] = field(default_factory=_default_group_order)
    third_party_prefixes: List[str] = field(default_factory=list)
    cache_dir: str = field(default_factory=lambda: str(get_cache_dir()))
    go_binary: str = "go"
    gofmt: bool = False
    gofmt_binary: str = "gofmt"
    log_dir: Optional[str] = None

    def categories(self) -> tuple:
        return tuple(Category(name) for name in self.group_order)


class ConfigFile(BaseModel):
    """Schema of the YAML configuration file."""

    local_prefix: Optional[str] = None
    group_order: Optional[List[str]] = None
    third_party_prefixes: Optional[List[str]] = None
    cache_dir: Optional[str] = None
    go_binary: Optional[str] = None
    gofmt: Optional[bool] = None
    gofmt_binary: Optional[str] = None
    log_dir: Optional[str] = None

    @field_validator("group_order")
    @classmethod
    def check_group_order(cls, value):
        if value is None:
            return value
        known = {category.value for category in Category}
        if sorted(value) != sorted(known):
            raise ValueError(f"group_order must list each of {sorted(known)} exactly once")
        return value


def get_default_config() -> Config:
    """Get default configuration with environment variable overrides."""
    config = Config()
    config.local_prefix = os.environ.get("GOGIMPORT_LOCAL", config.local_prefix)
    config.cache_dir = os.environ.get("GOGIMPORT_CACHE_DIR", config.cache_dir)
    config.go_binary = os.environ.get("GOGIMPORT_GO", config.go_binary)
    config.log_dir = os.environ.get("GOGIMPORT_LOG_DIR", config.log_dir)
    return config


def load_config(config_path: Path) -> Config:
    """Load configuration from YAML file on top of the defaults."""
    try:
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot read {config_path}: {e}") from e

    if not isinstance(config_data, dict):
        raise ConfigError(f"{config_path} must contain a mapping")

    try:
        parsed = ConfigFile(**config_data)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration in {config_path}: {e}") from e

    config = get_default_config()
    for key, value in parsed.model_dump(exclude_none=True).items():
        setattr(config, key, value)
    return config


def save_config(config: Config, config_path: Path) -> None:
    """Save configuration to YAML file."""
    with open(config_path, "w") as f:
        yaml.dump(asdict(config), f)
