"""Queue endpoints."""

from __future__ import annotations

from pydantic import TypeAdapter

from datashift.models.queue import Queue
from datashift.resources.base import decode, segment
from datashift.transport import Transport

_queue = TypeAdapter(Queue)
_queue_list = TypeAdapter(list[Queue])


class QueueResource:
    def __init__(self, transport: Transport):
        self._transport = transport

    async def list(self) -> list[Queue]:
        """List all queues available to the organization."""
        return decode(_queue_list, await self._transport.get("/queue"))

    async def get(self, key: str) -> Queue:
        """Get a queue by its key."""
        return decode(_queue, await self._transport.get(f"/queue/{segment(key)}"))
