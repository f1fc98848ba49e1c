"""Models for tasks and their review outcome."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from datashift.models.queue import Queue
from datashift.models.review import Review


class TaskState(str, enum.Enum):
    """Task lifecycle. Moves forward only: pending -> queued -> reviewed."""

    PENDING = "pending"
    QUEUED = "queued"
    REVIEWED = "reviewed"


class TaskStatus(BaseModel):
    """Lightweight status projection used for polling."""

    state: TaskState
    reviewed_at: datetime | None = None

    @property
    def is_reviewed(self) -> bool:
        return self.state == TaskState.REVIEWED


class Task(BaseModel):
    id: str
    organization_id: str | None = None
    queue_id: str
    external_id: str | None = None
    state: TaskState = TaskState.PENDING
    data: dict[str, Any] = Field(default_factory=dict)
    context: dict[str, Any] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)
    summary: str | None = None
    sla_deadline: datetime | None = None
    reviewed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # Denormalized, only present on some reads
    queue: Queue | None = None
    reviews: list[Review] = Field(default_factory=list)

    @property
    def is_reviewed(self) -> bool:
        return self.state == TaskState.REVIEWED

    def latest_review(self) -> Review | None:
        if not self.reviews:
            return None
        dated = [r for r in self.reviews if r.created_at is not None]
        if len(dated) == len(self.reviews):
            return max(dated, key=lambda r: r.created_at)
        return self.reviews[-1]


class ReviewResult(BaseModel):
    """Client-side view joining a reviewed task with its review."""

    task_id: str
    result: list[str] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)
    reviewed_at: datetime | None = None
    review: Review

    @classmethod
    def from_task(cls, task: Task, review: Review) -> ReviewResult:
        return cls(
            task_id=task.id,
            result=list(review.result),
            data=dict(review.data),
            reviewed_at=task.reviewed_at,
            review=review,
        )
