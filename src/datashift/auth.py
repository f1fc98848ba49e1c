"""API key authentication.

Keys are issued per environment: ``sk_live_...`` for production and
``sk_test_...`` for sandbox organizations.
"""

from __future__ import annotations

from typing import Generator

import httpx

from datashift.errors import ConfigurationError

LIVE_PREFIX = "sk_live_"
TEST_PREFIX = "sk_test_"
API_KEY_PREFIXES = (LIVE_PREFIX, TEST_PREFIX)


def validate_api_key(api_key: str) -> None:
    """Fail fast on a missing or malformed API key."""
    if not api_key:
        raise ConfigurationError("API key is required")
    if not api_key.startswith(API_KEY_PREFIXES):
        raise ConfigurationError(
            f"Invalid API key format. Expected a key starting with {' or '.join(API_KEY_PREFIXES)}"
        )


class ApiKeyAuth(httpx.Auth):
    """Attaches the bearer token to every outbound request."""

    def __init__(self, api_key: str):
        validate_api_key(api_key)
        self._api_key = api_key

    @property
    def environment(self) -> str:
        return "live" if self._api_key.startswith(LIVE_PREFIX) else "test"

    def attach(self, request: httpx.Request) -> None:
        request.headers["Authorization"] = f"Bearer {self._api_key}"

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        self.attach(request)
        yield request

    def __repr__(self) -> str:
        # never leak the key itself
        return f"ApiKeyAuth(environment={self.environment!r})"
