"""
Identity Provider
=================

Admin sign-in is delegated to an external users service (Google OAuth plus
opaque session tokens). CampusVoice never sees passwords; it only passes
the OAuth code through and asks the service whether a session token is
still valid.

Routes depend on the IdentityProvider interface through
``get_identity_provider`` so tests can swap in a fake.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx
import pydantic

from campusvoice.core.config import (
    USERS_SERVICE_API_KEY,
    USERS_SERVICE_API_URL,
    USERS_SERVICE_TIMEOUT,
)
from campusvoice.core.errors import IdentityServiceError, ValidationError
from campusvoice.models.user import AuthUser

logger = logging.getLogger(__name__)

# Status codes from the users service meaning "no such session"
_REJECTED = (401, 403, 404)


class IdentityProvider(ABC):
    @abstractmethod
    def get_oauth_redirect_url(self, provider: str) -> str:
        ...

    @abstractmethod
    def exchange_code(self, code: str) -> str:
        """Trade an OAuth authorization code for a session token."""

    @abstractmethod
    def current_user(self, session_token: str) -> Optional[AuthUser]:
        """The user behind a session token, or None if the session is invalid."""

    @abstractmethod
    def delete_session(self, session_token: str) -> None:
        ...

    def validate_session(self, session_token: str) -> bool:
        return self.current_user(session_token) is not None


class UsersServiceClient(IdentityProvider):
    def __init__(
        self,
        api_url: str = USERS_SERVICE_API_URL,
        api_key: str = USERS_SERVICE_API_KEY,
        timeout: float = USERS_SERVICE_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.api_url,
            headers={"x-api-key": self.api_key, "Accept": "application/json"},
            timeout=self.timeout,
            transport=self.transport,
        )

    def _request(self, method: str, path: str, session_token: Optional[str] = None, **kwargs) -> httpx.Response:
        headers = {}
        if session_token is not None:
            headers["Authorization"] = f"Bearer {session_token}"
        try:
            with self._client() as client:
                resp = client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error("Users service %s %s failed: %s", method, path, e)
            raise IdentityServiceError(detail=str(e)) from e

        if resp.status_code >= 500:
            logger.error("Users service %s %s returned %s", method, path, resp.status_code)
            raise IdentityServiceError(detail=f"HTTP {resp.status_code}: {resp.text}")
        return resp

    def _parse(self, resp: httpx.Response, parse):
        # A 2xx with a body we cannot read is a provider fault, not ours
        try:
            return parse(resp.json())
        except (ValueError, KeyError, TypeError, pydantic.ValidationError) as e:
            logger.error("Users service %s returned an unreadable body: %s", resp.request.url.path, e)
            raise IdentityServiceError(detail=f"malformed response: {e}") from e

    def get_oauth_redirect_url(self, provider: str) -> str:
        resp = self._request("GET", f"/oauth/{provider}/redirect_url")
        if resp.status_code != 200:
            raise IdentityServiceError(detail=f"redirect_url HTTP {resp.status_code}")
        return self._parse(resp, lambda body: body["redirect_url"])

    def exchange_code(self, code: str) -> str:
        resp = self._request("POST", "/sessions", json={"code": code})
        if resp.status_code in _REJECTED or resp.status_code == 400:
            raise ValidationError("Invalid authorization code")
        if resp.status_code not in (200, 201):
            raise IdentityServiceError(detail=f"session exchange HTTP {resp.status_code}")
        return self._parse(resp, lambda body: body["session_token"])

    def current_user(self, session_token: str) -> Optional[AuthUser]:
        resp = self._request("GET", "/users/me", session_token=session_token)
        if resp.status_code in _REJECTED:
            return None
        if resp.status_code != 200:
            raise IdentityServiceError(detail=f"users/me HTTP {resp.status_code}")
        return self._parse(resp, lambda body: AuthUser(**body))

    def delete_session(self, session_token: str) -> None:
        resp = self._request("DELETE", "/sessions", session_token=session_token)
        if resp.status_code not in (200, 204) and resp.status_code not in _REJECTED:
            raise IdentityServiceError(detail=f"session delete HTTP {resp.status_code}")


_provider: Optional[IdentityProvider] = None


def get_identity_provider() -> IdentityProvider:
    global _provider
    if _provider is None:
        _provider = UsersServiceClient()
    return _provider
