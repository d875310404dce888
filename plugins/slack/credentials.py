"""Slack credential type."""

from typing import Any, Dict, Optional

from core.config import get_settings
from core.credentials.base import CredentialType
from core.http.request import RequestSpec
from core.node.parameters import NodeProperty, PropertyType


class SlackApiCredential(CredentialType):
    """Bot User OAuth Token sent as a bearer header."""

    name = "slackApi"
    display_name = "Slack API"
    documentation_url = "https://api.slack.com/"
    properties = [
        NodeProperty(
            display_name="Bot User OAuth Token",
            name="botToken",
            type=PropertyType.STRING,
            required=True,
            type_options={"password": True},
            default="",
            description="Bot User OAuth Token (starts with xoxb-)",
        ),
    ]

    def authenticate(self, data: Dict[str, Any]) -> Dict[str, str]:
        return {"Authorization": f"Bearer {data['botToken']}"}

    def test_request(self) -> Optional[RequestSpec]:
        base_url = get_settings().slack_api_base_url.rstrip("/")
        return RequestSpec(method="POST", url=f"{base_url}/auth.test")

    def check_test_response(self, response: Any) -> Optional[str]:
        if not isinstance(response, dict) or not response.get("ok"):
            error = response.get("error", "unknown_error") if isinstance(response, dict) else "unknown_error"
            return f"Slack API error: {error}"
        return None
