# plugins/registry.py
"""Plugin registry with manifest-based discovery."""

import importlib
import importlib.util
import sys
from typing import Dict, Type, Optional, List, Any, Tuple
from pathlib import Path
import yaml
import logging

from core.config import get_settings
from core.credentials.base import CredentialType
from plugins.base import NodeType, Plugin

logger = logging.getLogger(__name__)

BUILTIN_PLUGIN_DIR = Path(__file__).parent


class PluginRegistry:
    """Registry for discovering and loading plugins."""

    def __init__(self, plugin_dirs: Optional[List[Path]] = None):
        self._plugins: Dict[str, Plugin] = {}
        self._plugin_errors: Dict[str, str] = {}  # Track plugin load errors
        self._loaded = False
        self._plugin_dirs = plugin_dirs or self._discover_plugin_directories()

    def _discover_plugin_directories(self) -> List[Path]:
        """Built-in plugins plus any directories configured in settings."""
        possible_dirs = [BUILTIN_PLUGIN_DIR, *get_settings().plugin_dirs]

        # Filter to existing directories
        existing_dirs = [d for d in possible_dirs if d.exists() and d.is_dir()]

        if not existing_dirs:
            logger.warning(f"No plugin directories found. Searched: {possible_dirs}")

        return existing_dirs

    def load_plugins(self, plugin_dirs: Optional[List[Path]] = None):
        """Load all plugins from directories."""
        if self._loaded:
            return

        if plugin_dirs:
            self._plugin_dirs = plugin_dirs

        logger.debug(f"Loading plugins from directories: {self._plugin_dirs}")

        loaded_count = 0
        error_count = 0

        for plugin_dir in self._plugin_dirs:
            try:
                counts = self._load_plugins_from_directory(plugin_dir)
                loaded_count += counts[0]
                error_count += counts[1]
            except OSError as e:
                logger.error(f"Failed to load plugins from {plugin_dir}: {e}")
                error_count += 1

        # Summary
        if loaded_count > 0:
            logger.info(f"Successfully loaded {loaded_count} plugins")
        if error_count > 0:
            logger.warning(f"Failed to load {error_count} plugins")

        self._loaded = True

    def _load_plugins_from_directory(self, plugin_dir: Path) -> Tuple[int, int]:
        """Load plugins from a specific directory."""
        loaded_count = 0
        error_count = 0

        # Look for plugin directories (contain manifest.yaml)
        for path in sorted(plugin_dir.iterdir()):
            if path.is_dir() and (path / "manifest.yaml").exists():
                try:
                    self._load_plugin(path)
                    loaded_count += 1
                except Exception as e:
                    plugin_name = path.name
                    self._plugin_errors[plugin_name] = str(e)
                    logger.debug(f"Plugin {plugin_name} failed to load: {e}")
                    error_count += 1

        return loaded_count, error_count

    def _load_plugin(self, plugin_path: Path) -> None:
        """Load a single plugin."""
        try:
            with open(plugin_path / "manifest.yaml", 'r') as f:
                manifest = yaml.safe_load(f)
            plugin_name = manifest['name']
        except (OSError, yaml.YAMLError, KeyError, TypeError) as e:
            raise ValueError(f"Invalid manifest in {plugin_path}: {e}")

        logger.debug(f"Loading plugin: {plugin_name}")

        init_file = plugin_path / "__init__.py"
        if not init_file.exists():
            raise RuntimeError(f"Could not find plugin class for {plugin_name}")

        plugin_class = self._load_plugin_class(plugin_path)
        if not plugin_class:
            raise RuntimeError(f"Could not find plugin class for {plugin_name}")

        try:
            plugin = plugin_class()
        except Exception as e:
            raise RuntimeError(f"Failed to instantiate plugin {plugin_name}: {e}")

        self._plugins[plugin_name] = plugin
        logger.debug(f"Successfully loaded plugin: {plugin_name}")

    def _load_plugin_class(self, plugin_path: Path) -> Optional[Type[Plugin]]:
        """Import the plugin package and find its Plugin subclass."""
        try:
            if plugin_path.parent == BUILTIN_PLUGIN_DIR:
                module = importlib.import_module(f"plugins.{plugin_path.name}")
            else:
                module_name = f"plugins_contrib.{plugin_path.name}"
                spec = importlib.util.spec_from_file_location(
                    module_name,
                    plugin_path / "__init__.py",
                    submodule_search_locations=[str(plugin_path)],
                )
                if not spec or not spec.loader:
                    return None

                module = importlib.util.module_from_spec(spec)

                # Add to sys.modules to enable relative imports
                sys.modules[spec.name] = module

                spec.loader.exec_module(module)
        except Exception as e:
            raise ImportError(f"Error loading plugin from {plugin_path}: {e}")

        # Find plugin class
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if (isinstance(attr, type) and
                issubclass(attr, Plugin) and
                attr is not Plugin):
                return attr

        return None

    def get_plugin(self, name: str) -> Optional[Plugin]:
        """Get a plugin by name."""
        if not self._loaded:
            self.load_plugins()
        return self._plugins.get(name)

    def get_node(self, plugin_name: str, node_name: str) -> NodeType:
        """Instantiate a node from a plugin."""
        plugin = self.get_plugin(plugin_name)
        if not plugin:
            available = list(self._plugins.keys())
            error_info = ""
            if plugin_name in self._plugin_errors:
                error_info = f" (load error: {self._plugin_errors[plugin_name]})"
            raise ValueError(f"Plugin '{plugin_name}' not found{error_info}. Available: {available}")

        return plugin.create_node(node_name)

    def get_credential_types(self) -> Dict[str, CredentialType]:
        """All credential types declared by loaded plugins."""
        if not self._loaded:
            self.load_plugins()

        credential_types: Dict[str, CredentialType] = {}
        for plugin in self._plugins.values():
            credential_types.update(plugin.get_credential_types())
        return credential_types

    def get_credential_type(self, name: str) -> Optional[CredentialType]:
        return self.get_credential_types().get(name)

    def list_plugins(self) -> List[Dict[str, Any]]:
        """List all available plugins."""
        if not self._loaded:
            self.load_plugins()

        plugins_list = []
        for plugin in self._plugins.values():
            plugins_list.append({
                "name": plugin.manifest.name,
                "version": plugin.manifest.version,
                "description": plugin.manifest.description,
                "author": plugin.manifest.author,
                "nodes": list(plugin.manifest.nodes.keys()),
                "credentials": list(plugin.get_credential_types().keys()),
                "dependencies": plugin.manifest.dependencies,
                "status": "loaded"
            })

        # Also include failed plugins in the list
        for plugin_name, error in self._plugin_errors.items():
            if not any(p['name'] == plugin_name for p in plugins_list):
                plugins_list.append({
                    "name": plugin_name,
                    "version": "unknown",
                    "description": f"Failed to load: {error}",
                    "author": "",
                    "nodes": [],
                    "credentials": [],
                    "dependencies": [],
                    "status": "failed"
                })

        return plugins_list

    def get_plugin_errors(self) -> Dict[str, str]:
        """Get dictionary of plugin load errors."""
        return self._plugin_errors.copy()

    def refresh(self):
        """Refresh plugin registry."""
        self._plugins.clear()
        self._plugin_errors.clear()
        self._loaded = False
        self.load_plugins()


# Global registry instance
plugin_registry = PluginRegistry()
