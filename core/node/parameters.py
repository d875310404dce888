"""Declarative node and credential property metadata."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class PropertyType(str, Enum):
    """Value types a property can hold."""
    OPTIONS = "options"
    STRING = "string"
    NUMBER = "number"


class PropertyOption(BaseModel):
    name: str
    value: Any
    description: Optional[str] = None
    action: Optional[str] = None


class DisplayOptions(BaseModel):
    """Conditions under which a property is shown in the editor."""
    show: Dict[str, List[Any]] = Field(default_factory=dict)
    hide: Dict[str, List[Any]] = Field(default_factory=dict)

    def matches(self, values: Dict[str, Any]) -> bool:
        for key, allowed in self.show.items():
            if values.get(key) not in allowed:
                return False
        for key, hidden in self.hide.items():
            if values.get(key) in hidden:
                return False
        return True


class NodeProperty(BaseModel):
    """A single parameter declared by a node or credential type."""
    name: str
    display_name: str
    type: PropertyType = PropertyType.STRING
    required: bool = False
    default: Any = None
    description: str = ""
    options: List[PropertyOption] = Field(default_factory=list)
    type_options: Dict[str, Any] = Field(default_factory=dict)
    display_options: Optional[DisplayOptions] = None
    no_data_expression: bool = False

    def is_visible(self, values: Dict[str, Any]) -> bool:
        if self.display_options is None:
            return True
        return self.display_options.matches(values)

    def option_values(self) -> List[Any]:
        return [option.value for option in self.options]


class CredentialReference(BaseModel):
    name: str
    required: bool = False


class NodeDescription(BaseModel):
    """Editor-facing description of a node type."""
    display_name: str
    name: str
    icon: Optional[str] = None
    group: List[str] = Field(default_factory=list)
    version: int = 1
    description: str = ""
    defaults: Dict[str, Any] = Field(default_factory=dict)
    inputs: List[str] = Field(default_factory=lambda: ["main"])
    outputs: List[str] = Field(default_factory=lambda: ["main"])
    credentials: List[CredentialReference] = Field(default_factory=list)
    properties: List[NodeProperty] = Field(default_factory=list)

    def get_properties(self, name: str) -> List[NodeProperty]:
        return [prop for prop in self.properties if prop.name == name]

    def find_property(self, name: str, values: Dict[str, Any]) -> Optional[NodeProperty]:
        """Return the declaration of ``name`` that applies to ``values``.

        A name may be declared several times with different display
        conditions (one ``operation`` selector per resource). The first
        visible declaration wins; if none is visible the first one is used.
        """
        candidates = self.get_properties(name)
        for prop in candidates:
            if prop.is_visible(values):
                return prop
        return candidates[0] if candidates else None

    def default_values(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for prop in self.properties:
            values.setdefault(prop.name, prop.default)
        return values
