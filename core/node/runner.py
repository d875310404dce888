"""Run a node over one batch of items."""

from typing import Any, Dict, Iterable, List, Optional, TYPE_CHECKING

import structlog

from core.node.context import ExecutionContext, SendAuthenticated
from core.node.items import NodeExecutionData

if TYPE_CHECKING:
    from plugins.base import NodeType


logger = structlog.get_logger(__name__)


async def run_node(
    node: "NodeType",
    items: Iterable[Any],
    parameters: Dict[str, Any],
    send_authenticated: Optional[SendAuthenticated] = None,
    continue_on_fail: bool = False,
) -> List[List[NodeExecutionData]]:
    """Build an ExecutionContext for ``node`` and execute it once."""
    context = ExecutionContext(
        node.description,
        items,
        parameters,
        send_authenticated=send_authenticated,
        continue_on_fail=continue_on_fail,
    )
    input_count = len(context.get_input_data())

    logger.info("node_execution_started", node=node.description.name, items=input_count)
    try:
        result = await node.execute(context)
    except Exception as e:
        logger.error("node_execution_failed", node=node.description.name, error=str(e))
        raise

    logger.info(
        "node_execution_completed",
        node=node.description.name,
        items=input_count,
        outputs=sum(len(branch) for branch in result),
    )
    return result
