"""Tests for the transport retry loop and error mapping."""

from __future__ import annotations

import httpx
import pytest

from conftest import API_KEY, Script
from datashift import (
    AuthenticationError,
    DatashiftError,
    ErrorKind,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from datashift.transport import Transport, decode_error_body, map_error


@pytest.fixture
async def make_transport(sleeps):
    transports: list[Transport] = []

    def factory(handler, **kwargs):
        kwargs.setdefault("retry_delay", 1.0)
        transport = Transport(
            API_KEY, transport=httpx.MockTransport(handler), sleep=sleeps, **kwargs
        )
        transports.append(transport)
        return transport

    yield factory

    for transport in transports:
        await transport.aclose()


class TestRetries:
    async def test_recovers_after_two_server_errors(self, make_transport, sleeps):
        script = Script(
            httpx.Response(500),
            httpx.Response(500),
            httpx.Response(200, json={"ok": True}),
        )
        transport = make_transport(script, retries=3)

        assert await transport.get("/queue") == {"ok": True}
        assert len(script.requests) == 3
        assert sleeps.delays == [1.0, 2.0]

    async def test_gives_up_after_max_retries(self, make_transport, sleeps):
        script = Script(*[httpx.Response(500) for _ in range(4)])
        transport = make_transport(script, retries=3)

        with pytest.raises(ServerError) as exc_info:
            await transport.get("/queue")
        assert len(script.requests) == 4
        assert sleeps.delays == [1.0, 2.0, 4.0]
        assert exc_info.value.status == 500

    async def test_client_error_not_retried(self, make_transport, sleeps):
        script = Script(httpx.Response(404))
        transport = make_transport(script)

        with pytest.raises(NotFoundError):
            await transport.get("/task/task_1")
        assert len(script.requests) == 1
        assert sleeps.delays == []

    async def test_rate_limit_not_retried(self, make_transport, sleeps):
        script = Script(httpx.Response(429, json={"retryAfter": 5}))
        transport = make_transport(script)

        with pytest.raises(RateLimitError):
            await transport.get("/queue")
        assert sleeps.delays == []

    async def test_network_failure_retried_then_succeeds(self, make_transport, sleeps):
        script = Script(
            httpx.ConnectError("connection refused"),
            httpx.Response(200, json=[]),
        )
        transport = make_transport(script)

        assert await transport.get("/queue") == []
        assert sleeps.delays == [1.0]

    async def test_network_failure_exhausted(self, make_transport):
        script = Script(*[httpx.ConnectError("connection refused") for _ in range(3)])
        transport = make_transport(script, retries=2)

        with pytest.raises(NetworkError) as exc_info:
            await transport.get("/queue")
        assert len(script.requests) == 3
        assert exc_info.value.kind == ErrorKind.NETWORK
        assert exc_info.value.status is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    async def test_undecodable_body_is_network_error(self, make_transport, sleeps):
        corrupt = [
            httpx.Response(
                200, headers={"content-encoding": "gzip"}, stream=httpx.ByteStream(b"not gzip")
            )
            for _ in range(2)
        ]
        script = Script(*corrupt)
        transport = make_transport(script, retries=1)

        with pytest.raises(NetworkError) as exc_info:
            await transport.get("/queue")
        assert len(script.requests) == 2
        assert sleeps.delays == [1.0]
        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)

    async def test_undecodable_body_retried_then_succeeds(self, make_transport):
        script = Script(
            httpx.Response(
                200, headers={"content-encoding": "gzip"}, stream=httpx.ByteStream(b"not gzip")
            ),
            httpx.Response(200, json=[]),
        )
        transport = make_transport(script)

        assert await transport.get("/queue") == []

    async def test_read_timeout_is_network_error(self, make_transport):
        script = Script(httpx.ReadTimeout("timed out"))
        transport = make_transport(script, retries=0)

        with pytest.raises(NetworkError):
            await transport.get("/queue")

    async def test_attempt_counter_is_per_request(self, make_transport, sleeps):
        script = Script(
            httpx.Response(502),
            httpx.Response(200, json={"n": 1}),
            httpx.Response(502),
            httpx.Response(200, json={"n": 2}),
        )
        transport = make_transport(script, retries=1)

        assert await transport.get("/queue") == {"n": 1}
        assert await transport.get("/queue") == {"n": 2}
        assert sleeps.delays == [1.0, 1.0]

    async def test_retry_resends_same_request(self, make_transport):
        script = Script(httpx.Response(503), httpx.Response(201, json={"id": "task_1"}))
        transport = make_transport(script)

        await transport.post("/task", json={"queue_key": "approvals"})
        first, second = script.requests
        assert first.method == second.method == "POST"
        assert first.url == second.url
        assert first.content == second.content
        assert second.headers["Authorization"] == f"Bearer {API_KEY}"


class TestErrorMapping:
    async def test_rate_limit_retry_after(self, make_transport):
        transport = make_transport(Script(httpx.Response(429, json={"retryAfter": 30})))

        with pytest.raises(RateLimitError) as exc_info:
            await transport.get("/queue")
        assert exc_info.value.retry_after == 30
        assert exc_info.value.code == "RATE_LIMITED"

    async def test_validation_errors(self, make_transport):
        body = {"message": "Invalid task", "errors": {"field": ["required"]}}
        transport = make_transport(Script(httpx.Response(400, json=body)))

        with pytest.raises(ValidationError) as exc_info:
            await transport.post("/task", json={})
        assert exc_info.value.errors == {"field": ["required"]}
        assert exc_info.value.message == "Invalid task"
        assert exc_info.value.status == 400

    async def test_authentication(self, make_transport):
        transport = make_transport(Script(httpx.Response(401, json={"message": "Key revoked"})))

        with pytest.raises(AuthenticationError, match="Key revoked"):
            await transport.get("/queue")

    async def test_not_found_uses_entity_id_and_path(self, make_transport):
        transport = make_transport(Script(httpx.Response(404, json={"entityId": "task_9"})))

        with pytest.raises(NotFoundError) as exc_info:
            await transport.get("/task/task_9")
        assert exc_info.value.resource == "Task"
        assert exc_info.value.resource_id == "task_9"
        assert str(exc_info.value) == "Task 'task_9' not found"

    async def test_not_found_prefers_body_resource(self, make_transport):
        body = {"resource": "Queue", "entityId": "approvals"}
        transport = make_transport(Script(httpx.Response(404, json=body)))

        with pytest.raises(NotFoundError, match="Queue 'approvals' not found"):
            await transport.get("/queue/approvals")

    async def test_unmapped_status_is_generic(self, make_transport):
        body = {"message": "Queue is archived", "code": "QUEUE_ARCHIVED"}
        transport = make_transport(Script(httpx.Response(409, json=body)))

        with pytest.raises(DatashiftError) as exc_info:
            await transport.post("/task", json={})
        err = exc_info.value
        assert type(err) is DatashiftError
        assert err.kind == ErrorKind.API
        assert err.status == 409
        assert err.code == "QUEUE_ARCHIVED"
        assert err.data == body

    async def test_server_error_keeps_status(self, make_transport):
        transport = make_transport(Script(httpx.Response(504)), retries=0)

        with pytest.raises(ServerError) as exc_info:
            await transport.get("/queue")
        assert exc_info.value.status == 504

    async def test_unlisted_5xx_is_generic_after_retries(self, make_transport):
        transport = make_transport(Script(httpx.Response(501), httpx.Response(501)), retries=1)

        with pytest.raises(DatashiftError) as exc_info:
            await transport.get("/queue")
        assert not isinstance(exc_info.value, ServerError)
        assert exc_info.value.status == 501

    async def test_invalid_json_success_body(self, make_transport):
        transport = make_transport(Script(httpx.Response(200, content=b"<html>")))

        with pytest.raises(DatashiftError) as exc_info:
            await transport.get("/queue")
        assert exc_info.value.code == "INVALID_RESPONSE"

    async def test_empty_success_body(self, make_transport):
        transport = make_transport(Script(httpx.Response(204)))
        assert await transport.get("/queue") is None


class TestDecodeErrorBody:
    def test_missing_body(self):
        body, raw = decode_error_body(httpx.Response(500, content=b""))
        assert body.message is None
        assert raw is None

    def test_non_object_body(self):
        body, raw = decode_error_body(httpx.Response(400, json=["bad"]))
        assert body.errors is None
        assert raw == ["bad"]

    def test_malformed_fields_are_dropped(self):
        response = httpx.Response(
            400, json={"message": "Bad input", "errors": "nope", "retryAfter": "soon"}
        )
        body, _ = decode_error_body(response)
        assert body.message == "Bad input"
        assert body.errors is None
        assert body.retry_after is None

    def test_malformed_validation_body_maps_without_errors(self):
        response = httpx.Response(400, json={"message": "Bad input", "errors": [1, 2]})
        err = map_error(response, path="/task")
        assert isinstance(err, ValidationError)
        assert err.message == "Bad input"
        assert err.errors is None

    def test_no_response_is_network_error(self):
        err = map_error(None, cause=httpx.ConnectError("refused"))
        assert isinstance(err, NetworkError)
        assert "refused" in err.message
