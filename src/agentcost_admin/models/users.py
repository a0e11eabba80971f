"""User management request models."""

from __future__ import annotations

from pydantic import BaseModel


class UpdateUserRequest(BaseModel):
    is_active: bool | None = None
    is_superuser: bool | None = None


class AdminNotesRequest(BaseModel):
    notes: str


class SendEmailRequest(BaseModel):
    subject: str
    body: str
