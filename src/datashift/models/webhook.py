"""Payloads delivered to webhook endpoints.

The client does not receive webhooks itself; these models let an
application's own endpoint decode what Datashift posts to it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from datashift.errors import ValidationError
from datashift.models.queue import Queue
from datashift.models.review import ReviewerType
from datashift.models.task import Task


class WebhookReviewer(BaseModel):
    id: str | None = None
    name: str | None = None
    type: ReviewerType


class WebhookReview(BaseModel):
    id: str
    result: list[str] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)
    comment: str | None = None
    created_at: datetime | None = None
    reviewer: WebhookReviewer


class TaskCreatedData(BaseModel):
    task: Task
    queue: Queue


class TaskReviewedData(BaseModel):
    task: Task
    queue: Queue
    reviews: list[WebhookReview] = Field(default_factory=list)


class TaskCreatedEvent(BaseModel):
    event: Literal["task.created"]
    timestamp: datetime
    data: TaskCreatedData


class TaskReviewedEvent(BaseModel):
    event: Literal["task.reviewed"]
    timestamp: datetime
    data: TaskReviewedData


WebhookEvent = Annotated[Union[TaskCreatedEvent, TaskReviewedEvent], Field(discriminator="event")]

_event_adapter: TypeAdapter[WebhookEvent] = TypeAdapter(WebhookEvent)


def parse_webhook_event(
    payload: dict[str, Any] | str | bytes,
) -> TaskCreatedEvent | TaskReviewedEvent:
    """Decode a webhook body into its event model."""
    try:
        if isinstance(payload, (str, bytes)):
            return _event_adapter.validate_json(payload)
        return _event_adapter.validate_python(payload)
    except PydanticValidationError as e:
        errors: dict[str, list[str]] = {}
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"]) or "payload"
            errors.setdefault(field, []).append(err["msg"])
        raise ValidationError(
            "Invalid webhook payload", errors, status=None, code="INVALID_WEBHOOK"
        ) from e
