"""
core.node.context
=================

Execution context passed to a node for one batch of input items.

Highlights
----------
• get_input_data                    – the batch, as NodeExecutionData
• get_node_parameter(name, index)   – per-item resolution; values starting
                                      with "=" are Jinja2 expressions over the
                                      item's JSON
• http_request_with_authentication  – injected transport that adds the
                                      credential's auth headers
• continue_on_fail                  – per-item error capture flag

The context never sees credential secrets: the injected sender owns them.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

import jinja2

from core.http.request import RequestSpec
from core.node.errors import NodeOperationError, NodeParameterError
from core.node.items import NodeExecutionData
from core.node.parameters import NodeDescription, NodeProperty, PropertyType


SendAuthenticated = Callable[[str, RequestSpec], Awaitable[Any]]

_MISSING = object()


class ExecutionContext:
    """
    Container handed to ``NodeType.execute``.

    Parameters
    ----------
    description : NodeDescription
        Declared properties, used for defaults, coercion and required checks.
    items : iterable
        Input records; raw JSON values are wrapped in NodeExecutionData.
    parameters : dict
        Node parameters as configured by the user (static values or
        "=" expressions).
    send_authenticated : callable, optional
        ``await send_authenticated(credential_name, request)`` -> parsed body.
    continue_on_fail : bool, default False
        Capture per-item errors as output records instead of raising.
    """

    _EXPRESSION_PREFIX = "="

    # ---------------------------------------------------------------- init --

    def __init__(
        self,
        description: NodeDescription,
        items: Iterable[Any],
        parameters: Dict[str, Any],
        send_authenticated: Optional[SendAuthenticated] = None,
        continue_on_fail: bool = False,
    ) -> None:
        self.description = description
        self._items: List[NodeExecutionData] = [self._wrap_item(item) for item in items]
        self._parameters = dict(parameters)
        self._send_authenticated = send_authenticated
        self._continue_on_fail = continue_on_fail
        self._env = jinja2.Environment(undefined=jinja2.StrictUndefined, autoescape=False)

    @staticmethod
    def _wrap_item(item: Any) -> NodeExecutionData:
        if isinstance(item, NodeExecutionData):
            return item
        return NodeExecutionData(json_data=item)

    # ---------------------------------------------------------------- items --

    def get_input_data(self) -> List[NodeExecutionData]:
        return list(self._items)

    def continue_on_fail(self) -> bool:
        return self._continue_on_fail

    # ----------------------------------------------------------- parameters --

    def _selector_values(self) -> Dict[str, Any]:
        """Non-expression values used to evaluate display conditions."""
        values = self.description.default_values()
        for key, value in self._parameters.items():
            if not self._is_expression(value):
                values[key] = value
        return values

    def _is_expression(self, value: Any) -> bool:
        return isinstance(value, str) and value.startswith(self._EXPRESSION_PREFIX)

    def _item_json(self, index: int) -> Any:
        if 0 <= index < len(self._items):
            return self._items[index].json_data
        return {}

    def _evaluate(self, name: str, value: Any, index: int) -> Any:
        if not self._is_expression(value):
            return value
        try:
            template = self._env.from_string(value[len(self._EXPRESSION_PREFIX):])
            return template.render(json=self._item_json(index), item_index=index)
        except jinja2.TemplateError as e:
            raise NodeParameterError(
                f"Could not resolve expression for parameter '{name}': {e}",
                name,
                index,
            ) from e

    def _coerce(self, prop: NodeProperty, value: Any, index: int) -> Any:
        if prop.type == PropertyType.NUMBER and value not in (None, ""):
            if isinstance(value, bool):
                raise NodeParameterError(
                    f"Parameter '{prop.name}' must be a number", prop.name, index
                )
            try:
                number = int(value)
            except (TypeError, ValueError):
                raise NodeParameterError(
                    f"Parameter '{prop.name}' must be a number, got {value!r}",
                    prop.name,
                    index,
                )
            min_value = prop.type_options.get("min_value")
            max_value = prop.type_options.get("max_value")
            if min_value is not None and number < min_value:
                raise NodeParameterError(
                    f"Parameter '{prop.name}' must be at least {min_value}", prop.name, index
                )
            if max_value is not None and number > max_value:
                raise NodeParameterError(
                    f"Parameter '{prop.name}' must be at most {max_value}", prop.name, index
                )
            return number

        if prop.type == PropertyType.OPTIONS and prop.options:
            if value not in prop.option_values():
                raise NodeParameterError(
                    f"Invalid value {value!r} for parameter '{prop.name}'",
                    prop.name,
                    index,
                )
        return value

    def get_node_parameter(self, name: str, index: int, default: Any = _MISSING) -> Any:
        """
        Resolve parameter ``name`` for input item ``index``.

        Raises NodeParameterError when a required parameter resolves to an
        empty value, when an expression fails or is given for a property
        marked ``no_data_expression``, or when the value does not fit the
        declared type.
        """
        prop = self.description.find_property(name, self._selector_values())
        value = self._parameters.get(name, _MISSING)

        if value is _MISSING:
            if default is not _MISSING:
                return default
            if prop is None:
                raise NodeParameterError(f"Could not get parameter '{name}'", name, index)
            value = prop.default

        if prop is not None and prop.no_data_expression and self._is_expression(value):
            raise NodeParameterError(
                f"The parameter '{prop.display_name}' does not accept expressions", name, index
            )

        value = self._evaluate(name, value, index)
        if prop is None:
            return value

        if prop.required and value in (None, ""):
            raise NodeParameterError(
                f"The parameter '{prop.display_name}' is required", name, index
            )
        return self._coerce(prop, value, index)

    # ------------------------------------------------------------- requests --

    async def http_request_with_authentication(
        self, credential_name: str, request: RequestSpec
    ) -> Any:
        if self._send_authenticated is None:
            raise NodeOperationError("No authenticated transport is configured")
        return await self._send_authenticated(credential_name, request)
