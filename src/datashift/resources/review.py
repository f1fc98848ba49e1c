"""Review endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import TypeAdapter

from datashift.models.review import Review, ReviewerType
from datashift.resources.base import decode, query_datetime, segment
from datashift.transport import Transport

_review = TypeAdapter(Review)
_review_list = TypeAdapter(list[Review])


class ReviewResource:
    def __init__(self, transport: Transport):
        self._transport = transport

    async def list(
        self,
        *,
        task_id: str | None = None,
        reviewer_id: str | None = None,
        queue_key: str | None = None,
        reviewer_type: ReviewerType | str | None = None,
        created_after: datetime | str | None = None,
        created_before: datetime | str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Review]:
        """List reviews, filtered by any combination of the arguments."""
        params: dict[str, str] = {}
        if task_id:
            params["task_id"] = task_id
        if reviewer_id:
            params["reviewer_id"] = reviewer_id
        if queue_key:
            params["queue_key"] = queue_key
        if reviewer_type:
            params["reviewer_type"] = ReviewerType(reviewer_type).value
        if created_after:
            params["created_after"] = query_datetime(created_after)
        if created_before:
            params["created_before"] = query_datetime(created_before)
        if limit is not None:
            params["limit"] = str(limit)
        if offset is not None:
            params["offset"] = str(offset)

        body = await self._transport.get("/review", params=params or None)
        return decode(_review_list, body)

    async def get(self, review_id: str) -> Review:
        return decode(_review, await self._transport.get(f"/review/{segment(review_id)}"))
