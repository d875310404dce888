"""Authenticated HTTP transport used by nodes through their context."""

from typing import Any, Dict, Optional

import httpx
import structlog
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from core.config import Settings, get_settings
from core.credentials.base import CredentialType
from core.credentials.store import CredentialStore
from core.http.request import RequestSpec
from core.node.errors import CredentialError, NodeApiError


logger = structlog.get_logger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, httpx.TransportError):
        return True
    return isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code >= 500


class AuthenticatedHttpClient:
    """Sends RequestSpecs with headers from a named credential.

    Nodes receive ``client.request`` as their ``send_authenticated``
    capability and never handle the secret itself.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        credential_types: Dict[str, CredentialType],
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self._credentials = credentials
        self._credential_types = credential_types
        self._client = httpx.AsyncClient(
            timeout=self.settings.http_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "AuthenticatedHttpClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    def _auth_headers(self, credential_name: str) -> Dict[str, str]:
        credential_type = self._credential_types.get(credential_name)
        if credential_type is None:
            raise CredentialError(f"Unknown credential type '{credential_name}'")
        data = self._credentials.get(credential_name)
        credential_type.validate(data)
        return credential_type.authenticate(data)

    async def request(self, credential_name: str, spec: RequestSpec) -> Any:
        """Send ``spec`` authenticated as ``credential_name`` and return the JSON body."""
        headers = dict(spec.headers)
        if spec.body is not None:
            headers.setdefault("Content-Type", "application/json")
        headers.update(self._auth_headers(credential_name))

        logger.debug(
            "http_request",
            method=spec.method,
            url=spec.url,
            credential=credential_name,
        )

        try:
            response = await self._send(spec, headers)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("http_request_failed", url=spec.url, status_code=status)
            raise NodeApiError(
                f"Request to {spec.url} failed with status {status}",
                status_code=status,
                response=e.response.text,
            ) from e
        except httpx.TransportError as e:
            logger.warning("http_transport_error", url=spec.url, error=str(e))
            raise NodeApiError(f"Request to {spec.url} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise NodeApiError(
                f"Response from {spec.url} is not valid JSON",
                status_code=response.status_code,
                response=response.text,
            ) from e

    async def _send(self, spec: RequestSpec, headers: Dict[str, str]) -> httpx.Response:
        @retry(
            stop=stop_after_attempt(self.settings.http_max_attempts),
            wait=wait_exponential(multiplier=self.settings.http_retry_backoff),
            retry=retry_if_exception(_is_retryable),
            reraise=True,
        )
        async def send_request() -> httpx.Response:
            response = await self._client.request(
                spec.method,
                spec.url,
                params=spec.qs or None,
                json=spec.body,
                headers=headers,
            )
            response.raise_for_status()
            return response

        return await send_request()
