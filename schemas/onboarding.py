from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class OnboardingSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    interest_ids: List[str] = Field(alias="interestIds", min_length=1)


class OnboardingResultSchema(BaseModel):
    success: bool = True
