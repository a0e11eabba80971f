"""Feedback triage request models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class FeedbackStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    REJECTED = "rejected"


class FeedbackPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class UpdateFeedbackRequest(BaseModel):
    status: FeedbackStatus | None = None
    priority: FeedbackPriority | None = None
    admin_response: str | None = None
