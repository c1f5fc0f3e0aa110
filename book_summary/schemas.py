from __future__ import annotations
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SummaryRequest(BaseModel):
    title: Optional[str] = None
    style: Optional[str] = None
    # the frontend may send the count as a string; clamped later
    num: Any = None


class SummaryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    found: bool
    corrected_title: Optional[str] = Field(default=None, alias="correctedTitle")
    intro: str = ""
    summary: str = ""
    sentences: List[str] = Field(default_factory=list)
    requested_count: int = Field(default=0, alias="requestedCount")
    delivered_count: int = Field(default=0, alias="deliveredCount")
    error: Optional[str] = None
