"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from doctags.deep_merge import deep_merge
from doctags.errors import ConfigurationError

DEFAULT_CONFIG: dict[str, Any] = {
    "todo": False,
    "internal": False,
    "packages": True,
    "source_code": True,
    "plugins": [],
    "max_inline_nesting": 32,
    "templates": {
        "class": "class-%s.html",
        "namespace": "namespace-%s.html",
        "package": "package-%s.html",
        "function": "function-%s.html",
        "constant": "constant-%s.html",
        "source": "source-%s.html",
    },
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            try:
                user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            except yaml.YAMLError as e:
                msg = f"Invalid configuration file {p}: {e}"
                raise ConfigurationError(msg) from e
            if not isinstance(user_config, dict):
                msg = f"Configuration file {p} must contain a mapping"
                raise ConfigurationError(msg)
            config = deep_merge(config, user_config)
    return config
