"""Slack request table.

Each supported (resource, operation) pair maps to one SlackCall: the HTTP
method, the Web API method name, which node parameters go into the query
string or JSON body, and how the response is unwrapped.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from core.http.request import RequestSpec
from core.node.errors import UnsupportedOperationError


class Resource(str, Enum):
    MESSAGE = "message"
    CHANNEL = "channel"


class Operation(str, Enum):
    CREATE = "create"
    GET = "get"
    GET_MANY = "getMany"
    UPDATE = "update"
    DELETE = "delete"


class Unwrap(str, Enum):
    """How a Slack response is reshaped before it is emitted."""
    NONE = "none"
    FIRST_MESSAGE = "first_message"
    MESSAGES = "messages"
    CHANNEL = "channel"
    CHANNELS = "channels"


# (api field, node parameter)
Binding = Tuple[str, str]


@dataclass(frozen=True)
class SlackCall:
    method: str
    endpoint: str
    query: Tuple[Binding, ...] = ()
    body: Tuple[Binding, ...] = ()
    constants: Mapping[str, Any] = field(default_factory=dict)
    unwrap: Unwrap = Unwrap.NONE

    @property
    def parameters(self) -> Tuple[str, ...]:
        """Node parameters this call reads, in request order."""
        names = [param for _, param in self.query + self.body]
        return tuple(dict.fromkeys(names))

    def build(self, params: Mapping[str, Any], base_url: str) -> RequestSpec:
        url = f"{base_url.rstrip('/')}/{self.endpoint}"
        if self.method == "GET":
            qs = {api_field: params[param] for api_field, param in self.query}
            qs.update(self.constants)
            return RequestSpec(method="GET", url=url, qs=qs)

        body = {api_field: params[param] for api_field, param in self.body}
        body.update(self.constants)
        return RequestSpec(method=self.method, url=url, body=body)


SLACK_CALLS: Dict[Tuple[Resource, Operation], SlackCall] = {
    (Resource.MESSAGE, Operation.CREATE): SlackCall(
        "POST", "chat.postMessage",
        body=(("channel", "channel"), ("text", "text")),
    ),
    (Resource.MESSAGE, Operation.GET): SlackCall(
        "GET", "conversations.history",
        query=(("channel", "channel"), ("latest", "ts")),
        constants={"limit": 1, "inclusive": "true"},
        unwrap=Unwrap.FIRST_MESSAGE,
    ),
    (Resource.MESSAGE, Operation.GET_MANY): SlackCall(
        "GET", "conversations.history",
        query=(("channel", "channel"), ("limit", "limit")),
        unwrap=Unwrap.MESSAGES,
    ),
    (Resource.MESSAGE, Operation.UPDATE): SlackCall(
        "POST", "chat.update",
        body=(("channel", "channel"), ("ts", "ts"), ("text", "text")),
    ),
    (Resource.MESSAGE, Operation.DELETE): SlackCall(
        "POST", "chat.delete",
        body=(("channel", "channel"), ("ts", "ts")),
    ),
    (Resource.CHANNEL, Operation.CREATE): SlackCall(
        "POST", "conversations.create",
        body=(("name", "channelName"),),
    ),
    (Resource.CHANNEL, Operation.GET): SlackCall(
        "GET", "conversations.info",
        query=(("channel", "channelId"),),
        unwrap=Unwrap.CHANNEL,
    ),
    (Resource.CHANNEL, Operation.GET_MANY): SlackCall(
        "GET", "conversations.list",
        query=(("limit", "limit"),),
        unwrap=Unwrap.CHANNELS,
    ),
    # "Archive" in the editor
    (Resource.CHANNEL, Operation.DELETE): SlackCall(
        "POST", "conversations.archive",
        body=(("channel", "channelId"),),
    ),
}


def resolve_call(resource: Any, operation: Any) -> SlackCall:
    """Look up the call for a pair, failing fast on anything not in the table."""
    try:
        key = (Resource(resource), Operation(operation))
    except ValueError:
        raise UnsupportedOperationError(resource, operation) from None

    call = SLACK_CALLS.get(key)
    if call is None:
        raise UnsupportedOperationError(resource, operation)
    return call


def build_request(
    resource: Any,
    operation: Any,
    params: Mapping[str, Any],
    base_url: str = "https://slack.com/api",
) -> RequestSpec:
    return resolve_call(resource, operation).build(params, base_url)


def unwrap_response(rule: Unwrap, response: Any) -> Any:
    if not isinstance(response, dict):
        return response

    if rule == Unwrap.FIRST_MESSAGE:
        messages = response.get("messages")
        if messages:
            return messages[0]
        return response

    if rule == Unwrap.MESSAGES:
        return response.get("messages") or []

    if rule == Unwrap.CHANNELS:
        return response.get("channels") or []

    if rule == Unwrap.CHANNEL:
        channel: Optional[Any] = response.get("channel")
        return channel if channel is not None else response

    return response
