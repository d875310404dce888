"""Outbound request description."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx


@dataclass
class RequestSpec:
    """A single HTTP call a node wants the host to make.

    Query parameters are kept as a mapping and percent-encoded when the
    request is sent.
    """
    method: str
    url: str
    qs: Dict[str, Any] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=dict)

    def full_url(self) -> str:
        return str(httpx.URL(self.url, params=self.qs or None))
