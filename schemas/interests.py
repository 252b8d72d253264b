from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class InterestSchema(BaseModel):
    # interests may carry extra catalog columns; pass them through untouched
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
