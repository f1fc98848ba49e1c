"""Waiting for a task to be reviewed.

Polls the cheap status endpoint with a growing interval until the task
reaches ``reviewed``, then fetches the full task once.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, Field

from datashift.errors import TimeoutError, WaitCancelledError
from datashift.models.task import Task, TaskState, TaskStatus

logger = logging.getLogger(__name__)

BACKOFF_FACTOR = 1.5


class WaitOptions(BaseModel):
    """All values in seconds."""

    timeout: float = Field(default=300.0, gt=0)
    poll_interval: float = Field(default=2.0, gt=0)
    max_poll_interval: float = Field(default=30.0, gt=0)


def next_interval(interval: float, max_interval: float) -> float:
    return min(interval * BACKOFF_FACTOR, max_interval)


async def _pause(
    seconds: float,
    cancel: asyncio.Event | None,
    sleep: Callable[[float], Awaitable[Any]],
) -> bool:
    """Suspend for ``seconds``. Returns True if ``cancel`` was set meanwhile."""
    if cancel is None:
        await sleep(seconds)
        return False
    try:
        await asyncio.wait_for(cancel.wait(), timeout=seconds)
    except asyncio.TimeoutError:
        return False
    return True


async def wait_for_review(
    task_id: str,
    fetch_status: Callable[[str], Awaitable[TaskStatus]],
    fetch_task: Callable[[str], Awaitable[Task]],
    options: WaitOptions | None = None,
    *,
    cancel: asyncio.Event | None = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> Task:
    """Block (cooperatively) until ``task_id`` is reviewed.

    Args:
        task_id: Task to wait on
        fetch_status: Returns the status projection for a task
        fetch_task: Returns the full task, reviews included
        options: Timeout and interval settings
        cancel: Optional event; setting it stops the wait with WaitCancelledError.
            While waiting on it, ``sleep`` is not used.
        sleep: Suspension function between polls
        clock: Monotonic clock used to measure elapsed time

    Returns:
        The reviewed task

    Raises:
        TimeoutError: the task was not reviewed within ``options.timeout``
    """
    opts = options or WaitOptions()
    start = clock()
    interval = opts.poll_interval
    polls = 0

    while clock() - start < opts.timeout:
        if cancel is not None and cancel.is_set():
            raise WaitCancelledError(f"Wait for task {task_id} cancelled")

        status = await fetch_status(task_id)
        polls += 1
        if status.state == TaskState.REVIEWED:
            logger.info(f"Task {task_id} reviewed after {polls} status checks")
            return await fetch_task(task_id)

        logger.debug(f"Task {task_id} is {status.state.value}, next check in {interval:.1f}s")
        if await _pause(interval, cancel, sleep):
            raise WaitCancelledError(f"Wait for task {task_id} cancelled")
        interval = next_interval(interval, opts.max_poll_interval)

    logger.warning(f"Task {task_id} not reviewed after {polls} status checks ({opts.timeout}s)")
    raise TimeoutError(f"Task {task_id} was not reviewed within {opts.timeout}s")
