"""
Pydantic schemas for dashboard statistics.
"""
from pydantic import BaseModel
from typing import Dict, List


class MonthlyTrendItem(BaseModel):
    month: str  # YYYY-MM
    count: int


class TopTagItem(BaseModel):
    tag: str
    count: int


class DashboardStatsResponse(BaseModel):
    """Schema for the dashboard summary."""
    diary_count: int
    todo_completed_rate: float  # 0.0 - 1.0
    monthly_trend: List[MonthlyTrendItem] = []
    top_tags: List[TopTagItem] = []
    mood_stats: Dict[str, int] = {}
