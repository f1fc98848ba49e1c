"""Python client for the Datashift human review API."""

__version__ = "0.1.0"

from datashift.client import DatashiftClient
from datashift.errors import (
    AuthenticationError,
    ConfigurationError,
    DatashiftError,
    ErrorKind,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TimeoutError,
    ValidationError,
    WaitCancelledError,
)
from datashift.models import (
    AssignmentStrategy,
    Queue,
    Review,
    ReviewerType,
    ReviewOption,
    ReviewResult,
    ReviewType,
    Task,
    TaskCreatedEvent,
    TaskReviewedEvent,
    TaskState,
    TaskStatus,
    WebhookEvent,
    parse_webhook_event,
)
from datashift.polling import WaitOptions

__all__ = [
    "DatashiftClient",
    "WaitOptions",
    # Errors
    "DatashiftError",
    "ErrorKind",
    "AuthenticationError",
    "NotFoundError",
    "ValidationError",
    "RateLimitError",
    "ServerError",
    "TimeoutError",
    "NetworkError",
    "ConfigurationError",
    "WaitCancelledError",
    # Models
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
    "TaskReviewedEvent",
    "parse_webhook_event",
]
