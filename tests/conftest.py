"""Shared test fixtures."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from datashift import DatashiftClient

API_KEY = "sk_test_4f9a2c"


class SleepRecorder:
    """Stands in for asyncio.sleep and records requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class Script:
    """MockTransport handler that replays responses in order."""

    def __init__(self, *responses: httpx.Response | Exception):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def task_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "id": "task_1",
        "organization_id": "org_1",
        "queue_id": "queue_1",
        "external_id": None,
        "state": "queued",
        "data": {"action": "delete-account"},
        "context": {},
        "metadata": {},
        "summary": None,
        "sla_deadline": None,
        "reviewed_at": None,
        "created_at": "2026-10-01T12:00:00Z",
        "updated_at": "2026-10-01T12:00:00Z",
    }
    payload.update(overrides)
    return payload


def review_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "id": "review_1",
        "task_id": "task_1",
        "queue_id": "queue_1",
        "reviewer_id": "user_7",
        "result": ["approve"],
        "data": {},
        "comment": None,
        "created_at": "2026-10-01T12:05:00Z",
    }
    payload.update(overrides)
    return payload


def queue_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "id": "queue_1",
        "organization_id": "org_1",
        "key": "approvals",
        "name": "Approvals",
        "description": None,
        "review_type": "approval",
        "review_options": [
            {"id": "opt_approve", "label": "approve", "display_order": 0},
            {"id": "opt_reject", "label": "reject", "display_order": 1},
        ],
        "multi_select": False,
        "assignment": "round_robin",
        "sla_minutes": 60,
        "deleted_at": None,
        "created_at": "2026-09-01T00:00:00Z",
        "updated_at": "2026-09-01T00:00:00Z",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
async def make_client(sleeps):
    """Build clients wired to a MockTransport handler; closed after the test."""
    clients: list[DatashiftClient] = []

    def factory(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> DatashiftClient:
        kwargs.setdefault("retry_delay", 1.0)
        client = DatashiftClient(
            API_KEY, transport=httpx.MockTransport(handler), sleep=sleeps, **kwargs
        )
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()
