"""Highlighter registry and plugin discovery helpers."""

from __future__ import annotations

import importlib
import importlib.util
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from content_publisher.errors import PluginError
from content_publisher.plugins.base import HighlighterPlugin
from content_publisher.plugins.builtins import PygmentsHighlighter


class HighlighterRegistry:
    """Registry for highlighter plugins."""

    def __init__(self) -> None:
        self._plugins: dict[str, HighlighterPlugin] = {}

    def register(self, plugin: HighlighterPlugin) -> None:
        """Register plugin instance by unique name.

        Parameters
        ----------
        plugin : HighlighterPlugin
            Plugin instance to register.

        Raises
        ------
        PluginError
            If plugin does not provide a valid name or the highlighter
            contract.
        """
        name = getattr(plugin, "name", "").strip()
        if not name:
            raise PluginError("Highlighter must define a non-empty 'name'.")
        if not isinstance(plugin, HighlighterPlugin):
            raise PluginError(
                f"Highlighter '{name}' must implement can_highlight() and highlight()."
            )
        self._plugins[name] = plugin

    def names(self) -> list[str]:
        """Return registered highlighter names.

        Returns
        -------
        list[str]
            Sorted list of highlighter names.
        """
        return sorted(self._plugins.keys())

    def plugins(self) -> list[HighlighterPlugin]:
        """Return registered plugins ordered by name."""
        return [self._plugins[name] for name in self.names()]

    def get(self, name: str) -> HighlighterPlugin:
        """Get highlighter by name.

        Raises
        ------
        PluginError
            If the name is not registered.
        """
        try:
            return self._plugins[name]
        except KeyError as exc:
            raise PluginError(
                f"Unknown highlighter '{name}'. "
                f"Available highlighters: {', '.join(self.names())}"
            ) from exc

    def resolve(
        self,
        highlighters: Iterable[str | HighlighterPlugin],
    ) -> list[HighlighterPlugin]:
        """Resolve identifiers and plugin objects, keeping their order.

        Parameters
        ----------
        highlighters : Iterable[str | HighlighterPlugin]
            Registered names and/or plugin instances.

        Returns
        -------
        list[HighlighterPlugin]
            Plugins in the order they should be consulted.

        Raises
        ------
        PluginError
            If a name is unknown or an object is not a highlighter.
        """
        resolved: list[HighlighterPlugin] = []
        for item in highlighters:
            if isinstance(item, str):
                resolved.append(self.get(item.strip()))
            elif isinstance(item, HighlighterPlugin):
                resolved.append(item)
            else:
                raise PluginError(
                    f"Invalid highlighter {item!r}: expected a name or a plugin object."
                )
        return resolved

    def load_module(self, module_or_path: str) -> None:
        """Load highlighter plugins from module name or file path.

        .. warning::
            This method executes code from the specified module. Only load
            plugins from trusted sources.
        """
        module = _import_module_or_path(module_or_path)
        _register_from_module(module, self)


def _import_module_or_path(module_or_path: str) -> ModuleType:
    """Import module by import path or filesystem path.

    Parameters
    ----------
    module_or_path : str
        Python module path or local file path. Must be from a trusted source.

    Returns
    -------
    ModuleType
        Imported module object.

    Raises
    ------
    PluginError
        If import cannot be completed.
    """
    candidate = Path(module_or_path)
    if candidate.exists():
        spec = importlib.util.spec_from_file_location(candidate.stem, candidate)
        if spec is None or spec.loader is None:
            raise PluginError(f"Unable to load highlighter module from {candidate}.")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    try:
        return importlib.import_module(module_or_path)
    except Exception as exc:
        raise PluginError(
            f"Unable to import highlighter module '{module_or_path}': {exc}"
        ) from exc


def _register_from_module(module: ModuleType, registry: HighlighterRegistry) -> None:
    """Register the highlighters a plugin module exports."""
    hook = getattr(module, "register_highlighters", None)
    if callable(hook):
        hook(registry)
        return

    exported = getattr(module, "HIGHLIGHTERS", None)
    if exported is None and getattr(module, "HIGHLIGHTER", None) is not None:
        exported = [module.HIGHLIGHTER]
    if exported is None:
        raise PluginError(
            "Highlighter module must expose register_highlighters(registry), "
            "HIGHLIGHTERS, or HIGHLIGHTER."
        )
    for highlighter in exported:
        registry.register(highlighter)


def create_default_registry(
    extra_modules: Iterable[str] | None = None,
) -> HighlighterRegistry:
    """Create default highlighter registry.

    Parameters
    ----------
    extra_modules : Iterable[str] | None, optional
        Additional highlighter modules to load.

    Returns
    -------
    HighlighterRegistry
        Registry with the built-in Pygments highlighter and external plugins.
    """
    registry = HighlighterRegistry()
    registry.register(PygmentsHighlighter())
    for module in extra_modules or []:
        registry.load_module(module)
    return registry
