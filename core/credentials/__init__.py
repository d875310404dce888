"""Credential types, storage and verification."""

from core.credentials.base import CredentialType
from core.credentials.store import CredentialStore
from core.credentials.tester import CredentialTestResult, verify_credentials

__all__ = [
    "CredentialType",
    "CredentialStore",
    "CredentialTestResult",
    "verify_credentials",
]
