"""Configuration: YAML tool defaults and per-repository git config."""

from gitflow.config.settings import (
    default_prefix,
    finish_default,
    get_config,
    get_config_loaded_sources,
    reload_config,
)
from gitflow.config.store import get_item, is_initialized, load_settings, set_item

__all__ = [
    # Tool config
    "get_config",
    "reload_config",
    "get_config_loaded_sources",
    "default_prefix",
    "finish_default",
    # Repository config
    "get_item",
    "set_item",
    "is_initialized",
    "load_settings",
]
