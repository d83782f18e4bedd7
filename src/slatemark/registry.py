"""Shortcode plugin registry.

Converters only need ``get(name)``; any object with that method works as a
registry. ``PluginRegistry`` is the dict-backed implementation used by the
CLI and tests, and ``load_registry`` resolves one from a ``module:attr`` spec.
"""

from __future__ import annotations

import importlib
from typing import Any, Dict, Iterator, List, Mapping, Optional

from slatemark.models import ShortcodePlugin, ShortcodeRegistry
from slatemark.utils.errors import ConfigurationError
from slatemark.utils.logging import LoggerFactory

logger = LoggerFactory.get_logger("registry")


class PluginRegistry:
    """Name → shortcode plugin mapping."""

    def __init__(self, plugins: Optional[Mapping[str, ShortcodePlugin]] = None) -> None:
        self._plugins: Dict[str, ShortcodePlugin] = {}
        for name, plugin in (plugins or {}).items():
            self.register(name, plugin)

    def register(self, name: str, plugin: ShortcodePlugin) -> None:
        if not callable(getattr(plugin, "to_block", None)):
            raise ConfigurationError(
                f"Shortcode plugin {name!r} has no callable to_block",
                config_key="shortcode_plugins",
                user_message=f"Shortcode plugin '{name}' is not usable",
                help_text="Plugins must define to_block(data) -> str",
            )
        if name in self._plugins:
            logger.warning("Replacing registered shortcode plugin", plugin=name)
        self._plugins[name] = plugin

    def get(self, name: str) -> Optional[ShortcodePlugin]:
        return self._plugins.get(name)

    def names(self) -> List[str]:
        return sorted(self._plugins)

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._plugins)


def load_registry(spec: str) -> ShortcodeRegistry:
    """Import a registry from ``"package.module:attribute"``.

    The attribute may be a registry (anything with ``get``), a mapping of
    plugin names to plugins, or a zero-argument callable or class producing
    either.
    """
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(
            f"Invalid shortcode registry spec: {spec!r}",
            config_key="shortcode_registry",
            help_text="Use the form 'package.module:attribute'",
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(
            f"Cannot import shortcode registry module {module_name!r}: {exc}",
            config_key="shortcode_registry",
        ) from exc

    try:
        target: Any = getattr(module, attr)
    except AttributeError as exc:
        raise ConfigurationError(
            f"Module {module_name!r} has no attribute {attr!r}",
            config_key="shortcode_registry",
        ) from exc

    # Classes are factories too, even registry classes that define get()
    if isinstance(target, type) or (callable(target) and not hasattr(target, "get")):
        try:
            target = target()
        except TypeError as exc:
            raise ConfigurationError(
                f"Cannot build shortcode registry from {spec!r}: {exc}",
                config_key="shortcode_registry",
                help_text="Registry factories and classes must take no arguments",
            ) from exc

    if isinstance(target, Mapping):
        return PluginRegistry(target)
    if callable(getattr(target, "get", None)):
        return target

    raise ConfigurationError(
        f"{spec!r} is not a shortcode registry",
        config_key="shortcode_registry",
        help_text="Point at a mapping of name -> plugin or an object with get(name)",
    )
