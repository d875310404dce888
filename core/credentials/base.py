"""Credential type base class."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from core.http.request import RequestSpec
from core.node.errors import CredentialError
from core.node.parameters import NodeProperty


class CredentialType(ABC):
    """Declares how a credential is stored, applied to requests and tested."""

    name: str = ""
    display_name: str = ""
    documentation_url: str = ""
    properties: List[NodeProperty] = []

    def validate(self, data: Dict[str, Any]) -> None:
        """Raise CredentialError if a required property is empty."""
        for prop in self.properties:
            if prop.required and not data.get(prop.name):
                raise CredentialError(
                    f"Credential '{self.name}' is missing '{prop.display_name}'"
                )

    @abstractmethod
    def authenticate(self, data: Dict[str, Any]) -> Dict[str, str]:
        """Return the headers that authenticate a request."""
        pass

    def test_request(self) -> Optional[RequestSpec]:
        """Request used to check stored credentials, if the type supports it."""
        return None

    def check_test_response(self, response: Any) -> Optional[str]:
        """Return an error message if ``response`` means the test failed."""
        return None

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "display_name": self.display_name,
            "documentation_url": self.documentation_url,
            "properties": [prop.model_dump(exclude_none=True) for prop in self.properties],
        }
