from datashift.models.queue import AssignmentStrategy, Queue, ReviewOption, ReviewType
from datashift.models.review import Review, ReviewerType
from datashift.models.task import ReviewResult, Task, TaskState, TaskStatus
from datashift.models.webhook import (
    TaskCreatedData,
    TaskCreatedEvent,
    TaskReviewedData,
    TaskReviewedEvent,
    WebhookEvent,
    WebhookReview,
    WebhookReviewer,
    parse_webhook_event,
)

__all__ = [
    "Task",
    "TaskState",
    "TaskStatus",
    "ReviewResult",
    "Queue",
    "ReviewOption",
    "ReviewType",
    "AssignmentStrategy",
    "Review",
    "ReviewerType",
    "WebhookEvent",
    "TaskCreatedEvent",
    "TaskCreatedData",
    "TaskReviewedEvent",
    "TaskReviewedData",
    "WebhookReview",
    "WebhookReviewer",
    "parse_webhook_event",
]
