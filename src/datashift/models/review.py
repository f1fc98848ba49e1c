"""Models for reviews recorded against tasks."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ReviewerType(str, enum.Enum):
    AI = "ai"
    HUMAN = "human"


class Review(BaseModel):
    id: str
    task_id: str
    queue_id: str | None = None
    reviewer_id: str | None = None
    result: list[str] = Field(default_factory=list)
    data: dict[str, Any] = Field(default_factory=dict)
    comment: str | None = None
    created_at: datetime | None = None

    # Reviews are never updated once created
    model_config = {"frozen": True}
