"""In-memory credential storage loaded from YAML and the environment."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog
import yaml

from core.config import Settings, get_settings
from core.node.errors import CredentialError

logger = structlog.get_logger(__name__)


class CredentialStore:
    """Maps credential type names to their stored data."""

    def __init__(self, data: Optional[Dict[str, Dict[str, Any]]] = None):
        self._data: Dict[str, Dict[str, Any]] = {
            name: dict(values) for name, values in (data or {}).items()
        }

    def set(self, name: str, values: Dict[str, Any]) -> None:
        self._data[name] = dict(values)

    def get(self, name: str) -> Dict[str, Any]:
        if name not in self._data:
            raise CredentialError(f"No credentials stored for '{name}'")
        return dict(self._data[name])

    def names(self) -> List[str]:
        return sorted(self._data)

    def __contains__(self, name: str) -> bool:
        return name in self._data

    @classmethod
    def from_file(cls, path: Path) -> "CredentialStore":
        """Load a YAML mapping of ``credential name -> properties``."""
        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise CredentialError(f"Could not read credentials file {path}: {e}")

        if not isinstance(data, dict) or not all(isinstance(v, dict) for v in data.values()):
            raise CredentialError(f"Credentials file {path} must map names to mappings")

        logger.debug("credentials_loaded", path=str(path), names=sorted(data))
        return cls(data)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "CredentialStore":
        settings = settings or get_settings()
        store = cls.from_file(settings.credentials_file) if settings.credentials_file else cls()

        if settings.slack_bot_token is not None:
            store.set("slackApi", {"botToken": settings.slack_bot_token.get_secret_value()})

        return store
