# tracker_mcp/auth.py
"""Credential resolution: inbound token to UserCredential.

Token formats belong to the host application; the server only sees this
interface.
"""

import os
from abc import ABC, abstractmethod
from typing import Optional

from .domain.models import UserCredential
from .errors import AuthenticationError


class CredentialResolver(ABC):
    """Resolves an inbound bearer token to the caller's credential."""

    @abstractmethod
    def resolve(self, token: Optional[str]) -> UserCredential:
        """
        Args:
            token: Opaque bearer token (may be None for local transports)

        Raises:
            AuthenticationError: Token missing, unknown or expired
        """
        pass


class StaticTokenResolver(CredentialResolver):
    """Fixed token to credential map (tests, single-tenant deployments)."""

    def __init__(self, credentials: dict[str, UserCredential]):
        self._credentials = dict(credentials)

    def resolve(self, token: Optional[str]) -> UserCredential:
        if not token:
            raise AuthenticationError("Missing bearer token")
        credential = self._credentials.get(token)
        if credential is None:
            raise AuthenticationError("Invalid or expired token")
        return credential


class EnvCredentialResolver(CredentialResolver):
    """Credential from TRACKER_* environment variables (stdio mode).

    TRACKER_URL goes to org config; TRACKER_API_KEY and TRACKER_EMAIL go
    to user credentials.
    """

    def __init__(self, environ: Optional[dict] = None):
        self._environ = environ if environ is not None else os.environ

    def resolve(self, token: Optional[str] = None) -> UserCredential:
        env = self._environ
        provider = env.get("TRACKER_PROVIDER", "").strip().lower()
        if not provider:
            raise AuthenticationError("TRACKER_PROVIDER is not set")

        org_config = {}
        if env.get("TRACKER_URL"):
            org_config["url"] = env["TRACKER_URL"]

        user_credentials = {}
        if env.get("TRACKER_API_KEY"):
            user_credentials["api_key"] = env["TRACKER_API_KEY"]
        if env.get("TRACKER_EMAIL"):
            user_credentials["email"] = env["TRACKER_EMAIL"]

        try:
            user_id = int(env.get("TRACKER_USER_ID", "0"))
        except ValueError:
            raise AuthenticationError(f"TRACKER_USER_ID must be an integer: {env.get('TRACKER_USER_ID')}")

        return UserCredential(
            user_id=user_id,
            provider=provider,
            org_config=org_config,
            user_credentials=user_credentials,
            role=env.get("TRACKER_ROLE", "user"),
        )
