"""Errors raised while a node processes its input items."""

from typing import Any, Optional


class NodeError(Exception):
    """Base class for node execution errors.

    ``item_index`` is the input item being processed when the error was
    raised, or ``None`` when the error is not tied to one item.
    """

    def __init__(self, message: str, item_index: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.item_index = item_index

    def __str__(self) -> str:
        return self.message


class NodeParameterError(NodeError):
    """A parameter is missing or its value cannot be used."""

    def __init__(self, message: str, parameter: str, item_index: Optional[int] = None):
        super().__init__(message, item_index)
        self.parameter = parameter


class NodeOperationError(NodeError):
    """The node cannot carry out the requested operation."""


class UnsupportedOperationError(NodeOperationError):
    """No request is defined for the resource/operation pair."""

    def __init__(self, resource: Any, operation: Any, item_index: Optional[int] = None):
        super().__init__(
            f"The operation '{operation}' is not supported for resource '{resource}'",
            item_index,
        )
        self.resource = resource
        self.operation = operation


class NodeApiError(NodeError):
    """The remote API call failed at the transport or HTTP status level."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Any = None,
        item_index: Optional[int] = None,
    ):
        super().__init__(message, item_index)
        self.status_code = status_code
        self.response = response


class CredentialError(NodeError):
    """Credentials are unknown, incomplete or rejected."""
