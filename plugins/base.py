"""Plugin system base classes."""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, List, Type
from dataclasses import dataclass, field
import yaml
from pathlib import Path

from core.credentials.base import CredentialType
from core.node.context import ExecutionContext
from core.node.items import NodeExecutionData
from core.node.parameters import NodeDescription


@dataclass
class PluginManifest:
    """Plugin manifest data."""
    name: str
    version: str
    description: str
    author: str
    nodes: Dict[str, Dict[str, Any]]
    dependencies: List[str] = field(default_factory=list)


class NodeType(ABC):
    """Base class for plugin nodes."""

    def __init__(self, description: NodeDescription):
        self.description = description

    @abstractmethod
    async def execute(self, context: ExecutionContext) -> List[List[NodeExecutionData]]:
        """Process every input item and return the output branches."""
        pass


class Plugin(ABC):
    """Base class for plugins."""

    def __init__(self, manifest_path: Path):
        self.manifest_path = manifest_path
        self.manifest = self._load_manifest()
        self._nodes: Dict[str, Type[NodeType]] = {}
        self._credentials: Dict[str, Type[CredentialType]] = {}

    def _load_manifest(self) -> PluginManifest:
        """Load plugin manifest from YAML file."""
        with open(self.manifest_path, 'r') as f:
            data = yaml.safe_load(f)

        return PluginManifest(
            name=data['name'],
            version=data['version'],
            description=data['description'],
            author=data.get('author', ''),
            nodes=data.get('nodes', {}),
            dependencies=data.get('dependencies', [])
        )

    @abstractmethod
    def register_nodes(self) -> Dict[str, Type[NodeType]]:
        """Register all plugin nodes."""
        pass

    def register_credentials(self) -> Dict[str, Type[CredentialType]]:
        """Register credential types shipped with the plugin."""
        return {}

    def get_node(self, node_name: str) -> Optional[Type[NodeType]]:
        """Get a specific node class."""
        if not self._nodes:
            self._nodes = self.register_nodes()
        return self._nodes.get(node_name)

    def get_node_description(self, node_name: str) -> NodeDescription:
        """Build the node description declared in the manifest."""
        data = self.manifest.nodes.get(node_name)
        if data is None:
            raise ValueError(f"Node {node_name} not declared in manifest of plugin {self.manifest.name}")
        return NodeDescription.model_validate({"name": node_name, **data})

    def create_node(self, node_name: str) -> NodeType:
        """Instantiate a node with its manifest description."""
        node_class = self.get_node(node_name)
        if not node_class:
            raise ValueError(f"Node {node_name} not found in plugin {self.manifest.name}")
        return node_class(self.get_node_description(node_name))

    def get_credential_types(self) -> Dict[str, CredentialType]:
        """Instantiated credential types keyed by name."""
        if not self._credentials:
            self._credentials = self.register_credentials()
        return {name: cls() for name, cls in self._credentials.items()}
