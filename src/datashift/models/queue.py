"""Models for review queues."""

from __future__ import annotations

import enum
from datetime import datetime

from pydantic import BaseModel, Field


class ReviewType(str, enum.Enum):
    APPROVAL = "approval"
    LABELING = "labeling"
    CLASSIFICATION = "classification"
    SCORING = "scoring"
    AUGMENTATION = "augmentation"


class AssignmentStrategy(str, enum.Enum):
    MANUAL = "manual"
    ROUND_ROBIN = "round_robin"
    AI_FIRST = "ai_first"
    AI_LAST = "ai_last"


class ReviewOption(BaseModel):
    id: str
    label: str
    display_order: int = 0


class Queue(BaseModel):
    id: str
    organization_id: str | None = None
    key: str
    name: str = ""
    description: str | None = None
    review_type: ReviewType = ReviewType.APPROVAL
    # Kept in server order; display_order is what UIs sort by.
    review_options: list[ReviewOption] = Field(default_factory=list)
    multi_select: bool = False
    assignment: AssignmentStrategy = AssignmentStrategy.MANUAL
    sla_minutes: int | None = None
    deleted_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def option_labels(self) -> list[str]:
        """Option labels sorted by display order."""
        return [o.label for o in sorted(self.review_options, key=lambda o: o.display_order)]
