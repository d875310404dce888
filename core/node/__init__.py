"""Node execution primitives shared by the host and plugins."""

from core.node.context import ExecutionContext, SendAuthenticated
from core.node.errors import (
    CredentialError,
    NodeApiError,
    NodeError,
    NodeOperationError,
    NodeParameterError,
    UnsupportedOperationError,
)
from core.node.items import NodeExecutionData, PairedItem
from core.node.parameters import (
    CredentialReference,
    DisplayOptions,
    NodeDescription,
    NodeProperty,
    PropertyOption,
    PropertyType,
)
from core.node.runner import run_node

__all__ = [
    # Execution
    "ExecutionContext",
    "SendAuthenticated",
    "run_node",

    # Items
    "NodeExecutionData",
    "PairedItem",

    # Metadata
    "CredentialReference",
    "DisplayOptions",
    "NodeDescription",
    "NodeProperty",
    "PropertyOption",
    "PropertyType",

    # Errors
    "CredentialError",
    "NodeApiError",
    "NodeError",
    "NodeOperationError",
    "NodeParameterError",
    "UnsupportedOperationError",
]
