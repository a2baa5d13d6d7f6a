"""Tool defaults for gitflow, read from layered YAML files.

Layers, lowest first: the bundled defaults/config.yaml, the user's
~/.config/gitflow/config.yaml, then .gitflow/config.yaml in the working
directory. Repository settings (branch names, prefixes) are not kept here;
they live in git config, see gitflow.config.store.
"""

import importlib.resources
from pathlib import Path
from typing import Optional

import yaml

from gitflow.config.utils import deep_merge, load_yaml

_config: Optional[dict] = None
_loaded_sources: list[str] = []


def override_paths() -> list[Path]:
    """User and project layers, resolved against the current home and cwd."""
    return [
        Path.home() / ".config" / "gitflow" / "config.yaml",
        Path(".gitflow") / "config.yaml",
    ]


def _load_defaults() -> dict:
    text = importlib.resources.files("gitflow").joinpath("defaults", "config.yaml").read_text()
    return yaml.safe_load(text) or {}


def load_config() -> dict:
    global _loaded_sources
    result = _load_defaults()
    sources = ["defaults"]
    for path in override_paths():
        layer = load_yaml(path)
        if layer:
            result = deep_merge(result, layer)
            sources.append(str(path))
    _loaded_sources = sources
    return result


def get_config() -> dict:
    """Merged config, loaded once per process."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> dict:
    global _config
    _config = load_config()
    return _config


def get_config_loaded_sources() -> list[str]:
    """Layers that contributed to the last load, for -debug output."""
    return _loaded_sources


def default_prefix(config: dict, kind: str) -> str:
    """Suggested branch prefix for a kind (or 'versiontag')."""
    prefixes = config.get("prefixes") or {}
    if prefixes.get(kind) is not None:
        return str(prefixes[kind])
    return "" if kind == "versiontag" else f"{kind}/"


def finish_default(config: dict, flag: str, fallback: bool = False) -> bool:
    """Configured default for a finish flag."""
    finish = config.get("finish") or {}
    return bool(finish.get(flag, fallback))
