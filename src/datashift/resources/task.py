"""Task endpoints."""

from __future__ import annotations

import asyncio
from typing import Any

from pydantic import TypeAdapter

from datashift.errors import NotFoundError
from datashift.models.task import ReviewResult, Task, TaskState, TaskStatus
from datashift.polling import WaitOptions, wait_for_review
from datashift.resources.base import decode, segment
from datashift.transport import Transport

_task = TypeAdapter(Task)
_task_status = TypeAdapter(TaskStatus)
_task_list = TypeAdapter(list[Task])


class TaskResource:
    def __init__(self, transport: Transport):
        self._transport = transport

    async def submit(
        self,
        queue_key: str,
        data: dict[str, Any],
        *,
        context: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
        summary: str | None = None,
        external_id: str | None = None,
    ) -> Task:
        """Submit a task to a queue for review."""
        payload: dict[str, Any] = {
            "queue_key": queue_key,
            "data": data,
            "context": context or {},
            "metadata": metadata or {},
        }
        if summary is not None:
            payload["summary"] = summary
        if external_id is not None:
            payload["external_id"] = external_id
        body = await self._transport.post("/task", json=payload)
        return decode(_task, body)

    async def get(self, task_id: str) -> Task:
        """Get a task with its queue and reviews."""
        body = await self._transport.get(f"/task/{segment(task_id)}")
        return decode(_task, body)

    async def get_status(self, task_id: str) -> TaskStatus:
        body = await self._transport.get(f"/task/{segment(task_id)}/status")
        return decode(_task_status, body)

    async def list(
        self, *, queue_id: str | None = None, state: TaskState | str | None = None
    ) -> list[Task]:
        params: dict[str, str] = {}
        if queue_id:
            params["queue_id"] = queue_id
        if state:
            params["state"] = TaskState(state).value
        body = await self._transport.get("/task", params=params or None)
        return decode(_task_list, body)

    async def wait_for_review(
        self,
        task_id: str,
        options: WaitOptions | None = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> Task:
        """Poll until the task is reviewed and return it with its reviews."""
        return await wait_for_review(
            task_id,
            self.get_status,
            self.get,
            options,
            cancel=cancel,
            sleep=self._transport.sleep,
        )

    async def wait_for_result(
        self,
        task_id: str,
        options: WaitOptions | None = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> ReviewResult:
        """Wait for review and return the outcome of the most recent review."""
        task = await self.wait_for_review(task_id, options, cancel=cancel)
        review = task.latest_review()
        if review is None:
            raise NotFoundError("Review", task_id)
        return ReviewResult.from_task(task, review)

