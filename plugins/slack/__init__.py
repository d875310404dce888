"""Slack plugin for messaging and channel operations."""

from pathlib import Path
from typing import Dict, Type

from core.credentials.base import CredentialType
from plugins.base import NodeType, Plugin
from plugins.slack.credentials import SlackApiCredential
from plugins.slack.node import SlackNode


class SlackPlugin(Plugin):
    """Slack integration plugin."""

    def __init__(self):
        manifest_path = Path(__file__).parent / "manifest.yaml"
        super().__init__(manifest_path)

    def register_nodes(self) -> Dict[str, Type[NodeType]]:
        """Register Slack nodes."""
        return {
            "slack": SlackNode
        }

    def register_credentials(self) -> Dict[str, Type[CredentialType]]:
        return {
            SlackApiCredential.name: SlackApiCredential
        }
