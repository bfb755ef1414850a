"""
Dashboard statistics.
"""
from collections import Counter
from sqlalchemy.orm import Session
from journal.repositories.diary_repository import DiaryRepository
from journal.repositories.todo_repository import TodoRepository
from journal.schemas.stats import DashboardStatsResponse, MonthlyTrendItem, TopTagItem
from journal.services.confidentiality import FieldCipher

TOP_TAG_LIMIT = 6


def get_dashboard_stats(user_id: int, cipher: FieldCipher, db: Session) -> DashboardStatsResponse:
    """Diary count, todo completion rate, monthly trend, top tags and mood spread."""
    diaries = DiaryRepository(db)
    todos = TodoRepository(db)

    todo_total = todos.count_by_user(user_id)
    todo_pending = todos.count_pending(user_id)
    completed_rate = (todo_total - todo_pending) / todo_total if todo_total else 0.0

    # Moods are stored protected, so they are counted after revealing
    moods = Counter(cipher.reveal(mood) or "unknown" for mood in diaries.list_moods(user_id))

    return DashboardStatsResponse(
        diary_count=diaries.count_by_user(user_id),
        todo_completed_rate=completed_rate,
        monthly_trend=[MonthlyTrendItem(month=m, count=c) for m, c in diaries.get_monthly_trend(user_id)],
        top_tags=[TopTagItem(tag=t, count=c) for t, c in diaries.get_top_tags(user_id, TOP_TAG_LIMIT)],
        mood_stats=dict(moods),
    )
