"""Check stored credentials against the service they belong to."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from core.credentials.base import CredentialType
from core.node.errors import NodeError

if TYPE_CHECKING:
    from core.http.client import AuthenticatedHttpClient


logger = structlog.get_logger(__name__)


@dataclass
class CredentialTestResult:
    ok: bool
    message: str


async def verify_credentials(
    client: "AuthenticatedHttpClient",
    credential_type: CredentialType,
) -> CredentialTestResult:
    """Send the credential type's test request and interpret the response."""
    request = credential_type.test_request()
    if request is None:
        return CredentialTestResult(False, f"Credential '{credential_type.name}' cannot be tested")

    try:
        response = await client.request(credential_type.name, request)
    except NodeError as e:
        logger.info("credential_test_failed", credential=credential_type.name, error=e.message)
        return CredentialTestResult(False, e.message)

    error = credential_type.check_test_response(response)
    if error:
        logger.info("credential_test_failed", credential=credential_type.name, error=error)
        return CredentialTestResult(False, error)

    logger.info("credential_test_succeeded", credential=credential_type.name)
    return CredentialTestResult(True, "Connection tested successfully")
