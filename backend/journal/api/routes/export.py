"""
Diary export routes. Returns revealed diaries as JSON.
"""
from fastapi import APIRouter, Depends
from journal.api.dependencies import get_current_user, get_diary_service
from journal.api.routes.diaries import to_response
from journal.models.user import User
from journal.schemas.export import ExportRequest, ExportResponse
from journal.services.diary_service import DiaryService

router = APIRouter(prefix="/export", tags=["export"])


@router.post("", response_model=ExportResponse)
async def export_diaries(
    request: ExportRequest,
    current_user: User = Depends(get_current_user),
    service: DiaryService = Depends(get_diary_service)
):
    """Export all, selected, or date-ranged diaries of the current user."""
    if request.type == "selected":
        views = service.get_by_ids(current_user.id, request.diary_ids)
    elif request.type == "date_range":
        views = service.get_by_date_range(current_user.id, request.start_date, request.end_date)
    else:
        views = service.get_all(current_user.id)
    return ExportResponse(diaries=[to_response(v) for v in views], count=len(views))
