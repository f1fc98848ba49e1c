"""HTTP transport for the Datashift API.

Wraps a single httpx.AsyncClient. Every request goes through one loop
that retries transient failures and converts anything else into the
error taxonomy, so callers never see raw httpx exceptions.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

import httpx
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from datashift import __version__
from datashift.auth import ApiKeyAuth
from datashift.config import DEFAULT_BASE_URL
from datashift.errors import (
    AuthenticationError,
    DatashiftError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from datashift.retry import next_retry

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_RETRIES = 3
DEFAULT_RETRY_DELAY = 1.0

Sleep = Callable[[float], Awaitable[Any]]


class ErrorBody(BaseModel):
    """Fields the API may put in an error response. All optional."""

    message: str | None = None
    code: str | None = None
    resource: str | None = None
    entity_id: str | None = Field(default=None, alias="entityId")
    errors: dict[str, list[str]] | None = None
    retry_after: float | None = Field(default=None, alias="retryAfter")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def decode_error_body(response: httpx.Response) -> tuple[ErrorBody, Any]:
    """Best-effort decode of an error response.

    Returns the parsed fields and the raw JSON body (None if the body is
    not JSON). Fields with the wrong shape are dropped instead of failing.
    """
    try:
        raw = response.json()
    except ValueError:
        return ErrorBody(), None
    if not isinstance(raw, dict):
        return ErrorBody(), raw

    try:
        return ErrorBody.model_validate(raw), raw
    except PydanticValidationError as e:
        bad_fields = {err["loc"][0] for err in e.errors() if err["loc"]}
        cleaned = {k: v for k, v in raw.items() if k not in bad_fields}
        logger.debug(f"Ignoring malformed error body fields: {sorted(map(str, bad_fields))}")
    try:
        return ErrorBody.model_validate(cleaned), raw
    except PydanticValidationError:
        return ErrorBody(), raw


def _resource_from_path(path: str) -> str:
    head = path.strip("/").split("/", 1)[0].split("?", 1)[0]
    return head.capitalize() if head else "Resource"


def map_error(
    response: httpx.Response | None, *, path: str = "", cause: Exception | None = None
) -> DatashiftError:
    """Map a failed exchange onto the error taxonomy."""
    if response is None:
        detail = f": {cause}" if cause else ""
        return NetworkError(f"Network error: Unable to reach Datashift API{detail}")

    status = response.status_code
    body, raw = decode_error_body(response)
    message = body.message or response.reason_phrase or f"HTTP {status}"

    if status == 401:
        return AuthenticationError(message)
    if status == 404:
        return NotFoundError(body.resource or _resource_from_path(path), body.entity_id)
    if status == 400:
        return ValidationError(message, body.errors)
    if status == 429:
        return RateLimitError(body.retry_after)
    if status in (500, 502, 503, 504):
        return ServerError(message, status)
    return DatashiftError(message, status, body.code or "HTTP_ERROR", raw)


class Transport:
    """Authenticated HTTP transport with retries and error mapping."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retries: int = DEFAULT_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep | None = None,
    ):
        self.auth = ApiKeyAuth(api_key)
        self.retries = retries
        self.retry_delay = retry_delay
        self.sleep = sleep or asyncio.sleep
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            auth=self.auth,
            headers={
                "Accept": "application/json",
                "User-Agent": f"datashift-python/{__version__}",
            },
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request, retrying transient failures.

        Returns the decoded JSON body, or None when the body is empty.
        """
        attempt = 0
        while True:
            response: httpx.Response | None = None
            failure: httpx.RequestError | None = None
            try:
                response = await self._client.request(method, path, params=params, json=json)
            except httpx.RequestError as e:
                # includes undecodable bodies and redirect loops
                failure = e

            if response is not None and response.is_success:
                return self._decode(response)

            status = response.status_code if response is not None else None
            decision = next_retry(
                attempt, status, max_retries=self.retries, base_delay=self.retry_delay
            )
            if not decision.retry:
                error = map_error(response, path=path, cause=failure)
                logger.warning(f"{method} {path} failed: {error.message} (code={error.code})")
                raise error from failure

            attempt += 1
            reason = f"HTTP {status}" if status is not None else f"{type(failure).__name__}"
            logger.warning(
                f"{method} {path} failed with {reason}, retrying in {decision.delay:.1f}s "
                f"(attempt {attempt}/{self.retries})"
            )
            await self.sleep(decision.delay)

    async def get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, *, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def aclose(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise DatashiftError(
                "Invalid JSON in API response", response.status_code, "INVALID_RESPONSE"
            ) from e
