"""Logic for discovering plugin modules and registering what they provide."""

import hashlib
import importlib
import importlib.util
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType
from typing import Any

from doctags import default_plugin
from doctags.errors import ConfigurationError, DocTagsError
from doctags.plugin_api import PluginDescriptor, describe
from doctags.plugin_registry import PluginRegistry

logger = logging.getLogger(__name__)

PLUGIN_HOOK = "plugin"
MODULE_PREFIX = "doctags_plugin_"


def load_plugins(
    registry: PluginRegistry, template: Any, config: dict[str, Any]
) -> PluginRegistry:
    """Register the default plugin, then every configured plugin source in order.

    Later registrations override earlier ones, so user plugins replace the
    default handling of the tags they declare.
    """
    register_module(registry, default_plugin, template, config)
    for source in config.get("plugins") or []:
        for module in load_plugin_source(str(source)):
            register_module(registry, module, template, config)

    registry.require_source_link()
    registry.freeze()
    logger.info("Using plugins\n  %s", "\n  ".join(registry.plugin_names))
    return registry


def load_plugin_source(source: str) -> list[ModuleType]:
    """Import the modules behind one plugin source (file, directory or module)."""
    path = Path(source)
    if path.is_dir():
        files = sorted(p for p in path.glob("*.py") if not p.name.startswith("_"))
        if not files:
            logger.warning("Plugin directory %s contains no plugin files", path)
        return [load_plugin_file(p) for p in files]
    if path.suffix == ".py" or path.exists():
        return [load_plugin_file(path)]

    try:
        return [importlib.import_module(source)]
    except ImportError as e:
        msg = f'Could not import plugin module "{source}": {e}'
        raise ConfigurationError(msg) from e


def plugin_module_name(path: Path) -> str:
    """Module name for a plugin file, unique per resolved path."""
    digest = hashlib.sha256(str(path.resolve()).encode("utf-8")).hexdigest()
    return f"{MODULE_PREFIX}{path.stem}_{digest[:12]}"


def load_plugin_file(path: Path) -> ModuleType:
    """Execute a plugin file as a standalone module."""
    if not path.is_file():
        msg = f'Plugin file "{path}" does not exist'
        raise ConfigurationError(msg)

    module_name = plugin_module_name(path)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f'Cannot load plugin module from "{path}"'
        raise ConfigurationError(msg)

    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        del sys.modules[spec.name]
        msg = f'Could not load plugin file "{path}": {e}'
        raise ConfigurationError(msg) from e
    return module


def register_module(
    registry: PluginRegistry,
    module: ModuleType,
    template: Any,
    config: dict[str, Any],
) -> int:
    """Call a module's ``plugin`` hook and register everything it returns."""
    hook = getattr(module, PLUGIN_HOOK, None)
    if not callable(hook):
        logger.debug("Skipping %s: no %s() hook", module.__name__, PLUGIN_HOOK)
        return 0

    try:
        provided = hook(template, config)
    except DocTagsError:
        raise
    except Exception as e:
        msg = f"Could not instantiate plugins of {module.__name__}: {e}"
        raise ConfigurationError(msg) from e

    count = 0
    for item in _iter_provided(provided):
        descriptor = describe(item)
        if descriptor.is_empty:
            logger.debug(
                "Skipping %s from %s: it provides no plugin role",
                descriptor.name,
                module.__name__,
            )
            continue
        if registry.register(descriptor):
            logger.debug("Registered plugin %s", descriptor.name)
            count += 1
    return count


def _iter_provided(provided: Any) -> Iterable[Any]:
    if provided is None:
        return []
    if isinstance(provided, PluginDescriptor):
        return [provided]
    if isinstance(provided, (list, tuple)):
        return provided
    return [provided]
