"""Datashift REST client.

Example:
    async with DatashiftClient(api_key="sk_live_...") as datashift:
        task = await datashift.task.submit("approvals", {"action": "delete-account"})
        reviewed = await datashift.task.wait_for_review(task.id)
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from datashift.config import Settings
from datashift.errors import ConfigurationError
from datashift.resources import QueueResource, ReviewResource, TaskResource
from datashift.transport import Sleep, Transport

logger = logging.getLogger(__name__)


class DatashiftClient:
    """Entry point for the Datashift API.

    Options not passed explicitly are read from ``settings``, or from a
    fresh ``Settings()`` built from ``DATASHIFT_`` environment variables.
    Settings and the API key are validated here, before any request is made.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        retries: int | None = None,
        retry_delay: float | None = None,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep | None = None,
    ):
        cfg = settings or _load_settings()
        self._transport = Transport(
            api_key if api_key is not None else cfg.api_key,
            base_url=base_url or cfg.base_url,
            timeout=timeout if timeout is not None else cfg.timeout,
            retries=retries if retries is not None else cfg.retries,
            retry_delay=retry_delay if retry_delay is not None else cfg.retry_delay,
            transport=transport,
            sleep=sleep,
        )
        self.task = TaskResource(self._transport)
        self.queue = QueueResource(self._transport)
        self.review = ReviewResource(self._transport)
        logger.debug(
            f"Datashift client ready ({self._transport.auth.environment} key, "
            f"{self._transport.base_url})"
        )

    @property
    def environment(self) -> str:
        return self._transport.auth.environment

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> DatashiftClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def _load_settings() -> Settings:
    try:
        return Settings()
    except PydanticValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise ConfigurationError(f"Invalid DATASHIFT_ settings: {', '.join(fields)}") from e
