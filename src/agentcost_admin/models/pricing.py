"""Model pricing request models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class PricingSource(str, Enum):
    LITELLM = "litellm"
    OPENROUTER = "openrouter"


class UpdateModelPricingRequest(BaseModel):
    input_price_per_1k: float | None = Field(default=None, ge=0)
    output_price_per_1k: float | None = Field(default=None, ge=0)
    is_active: bool | None = None
    notes: str | None = None
