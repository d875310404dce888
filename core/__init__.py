"""Node host core: execution context, transport and credentials."""

__version__ = "1.0.0"

from core.node.context import ExecutionContext
from core.node.items import NodeExecutionData, PairedItem
from core.node.runner import run_node

__all__ = [
    "ExecutionContext",
    "NodeExecutionData",
    "PairedItem",
    "run_node",
]
