"""Helpers for reading and layering YAML config files."""

from pathlib import Path
from typing import Optional

import yaml

from gitflow.errors import FlowError


def deep_merge(base: dict, override: dict) -> dict:
    """Layer ``override`` on ``base`` without mutating either.

    Mappings merge key by key, anything else replaces. A key left empty in
    the override (YAML null) keeps the base value.
    """
    merged = dict(base)
    for key, val in override.items():
        if val is None:
            continue
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(val, dict):
            merged[key] = deep_merge(current, val)
        else:
            merged[key] = val
    return merged


def load_yaml(path: Path) -> Optional[dict]:
    """Read one config layer. Missing files and non-mapping documents give None."""
    try:
        text = path.read_text()
    except FileNotFoundError:
        return None
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise FlowError(f"Could not parse config file {path}: {e}") from e
    return data if isinstance(data, dict) else None
