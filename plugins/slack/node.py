"""Slack node implementation."""

from typing import Any, List

import structlog

from core.config import get_settings
from core.node.context import ExecutionContext
from core.node.errors import NodeError
from core.node.items import NodeExecutionData
from plugins.base import NodeType
from plugins.slack.credentials import SlackApiCredential
from plugins.slack.operations import resolve_call, unwrap_response


logger = structlog.get_logger(__name__)


class SlackNode(NodeType):
    """Send and manage Slack messages and channels."""

    async def execute(self, context: ExecutionContext) -> List[List[NodeExecutionData]]:
        """Run one Slack call per input item, in order.

        ``resource`` and ``operation`` are read once from the first item;
        every other parameter is resolved per item. List results fan out to
        one output item each, all paired with the input index.
        """
        items = context.get_input_data()
        return_data: List[NodeExecutionData] = []
        resource = context.get_node_parameter("resource", 0)
        operation = context.get_node_parameter("operation", 0)
        base_url = get_settings().slack_api_base_url

        for i in range(len(items)):
            try:
                call = resolve_call(resource, operation)
                params = {name: context.get_node_parameter(name, i) for name in call.parameters}
                request = call.build(params, base_url)

                logger.debug(
                    "slack_request",
                    resource=resource,
                    operation=operation,
                    item_index=i,
                    method=request.method,
                    endpoint=call.endpoint,
                )

                response = await context.http_request_with_authentication(
                    SlackApiCredential.name, request
                )
                response_data: Any = unwrap_response(call.unwrap, response)

                if isinstance(response_data, list):
                    for entry in response_data:
                        return_data.append(NodeExecutionData.for_item(entry, i))
                else:
                    return_data.append(NodeExecutionData.for_item(response_data, i))

            except Exception as e:
                if isinstance(e, NodeError) and e.item_index is None:
                    e.item_index = i
                if context.continue_on_fail():
                    logger.warning("slack_item_failed", item_index=i, error=str(e))
                    return_data.append(NodeExecutionData.for_item({"error": str(e)}, i))
                    continue
                raise

        return [return_data]
