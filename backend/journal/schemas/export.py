"""
Pydantic schemas for diary export.
"""
from pydantic import BaseModel, model_validator
from typing import List, Literal, Optional
from datetime import date
from journal.schemas.diary import DiaryResponse


class ExportRequest(BaseModel):
    """Which diaries to export."""
    type: Literal["all", "selected", "date_range"] = "all"
    diary_ids: List[int] = []
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def check_selection(self):
        """Date ranges need both ends."""
        if self.type == "date_range" and (self.start_date is None or self.end_date is None):
            raise ValueError("start_date and end_date are required for date_range export")
        return self


class ExportResponse(BaseModel):
    diaries: List[DiaryResponse]
    count: int
