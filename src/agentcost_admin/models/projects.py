"""Project management request models."""

from __future__ import annotations

from pydantic import BaseModel


class UpdateProjectRequest(BaseModel):
    is_active: bool | None = None
