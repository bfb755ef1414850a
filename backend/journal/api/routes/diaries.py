"""
Diary routes. Responses always carry revealed (decrypted) fields.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from typing import Optional
from journal.api.dependencies import get_current_user, get_diary_service
from journal.core.exceptions import NotOwner
from journal.models.user import User
from journal.schemas.diary import (
    DiaryCreate, DiaryUpdate, DiaryResponse, DiaryListResponse, PinResponse
)
from journal.schemas.export import ExportResponse
from journal.services.diary_service import DiaryService

router = APIRouter(prefix="/diaries", tags=["diaries"])


def to_response(view, include_content: bool = True) -> DiaryResponse:
    """Build the API schema from a diary view."""
    response = DiaryResponse.model_validate(view)
    if not include_content:
        response.content = None
    return response


def to_list_response(result, include_content: bool = True) -> DiaryListResponse:
    views, total, page, page_size = result
    return DiaryListResponse(
        diaries=[to_response(v, include_content) for v in views],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post("", response_model=DiaryResponse, status_code=status.HTTP_201_CREATED)
async def create_diary(
    diary_data: DiaryCreate,
    current_user: User = Depends(get_current_user),
    service: DiaryService = Depends(get_diary_service)
):
    """Create a diary. Images not owned by the caller are skipped."""
    return to_response(service.create(current_user.id, diary_data))


@router.get("", response_model=DiaryListResponse)
async def list_diaries(
    page: int = 1,
    page_size: int = 10,
    tag: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    service: DiaryService = Depends(get_diary_service)
):
    """List the current user's diaries, pinned first, optionally only those with ?tag=."""
    if tag:
        return to_list_response(service.list_by_tag(current_user.id, tag, page, page_size))
    return to_list_response(service.list_by_user(current_user.id, page, page_size))


@router.get("/public", response_model=DiaryListResponse)
async def list_public_diaries(
    page: int = 1,
    page_size: int = 10,
    current_user: User = Depends(get_current_user),
    service: DiaryService = Depends(get_diary_service)
):
    """List public diaries of all users (summaries only)."""
    return to_list_response(service.list_public(page, page_size), include_content=False)


@router.get("/search", response_model=DiaryListResponse)
async def search_diaries(
    q: str = "",
    page: int = 1,
    page_size: int = 20,
    current_user: User = Depends(get_current_user),
    service: DiaryService = Depends(get_diary_service)
):
    """Search the current user's diaries by keyword."""
    keyword = q.strip()
    if not keyword:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search keyword must not be empty"
        )
    return to_list_response(service.search(current_user.id, keyword, page, page_size), include_content=False)


@router.get("/{diary_id}", response_model=DiaryResponse)
async def get_diary(
    diary_id: int,
    current_user: User = Depends(get_current_user),
    service: DiaryService = Depends(get_diary_service)
):
    """Get one diary; others' diaries are visible only when public."""
    view = service.get(diary_id)
    if view.user_id != current_user.id and not view.is_public:
        raise NotOwner("Not allowed to view this diary")
    return to_response(view)


@router.put("/{diary_id}", response_model=DiaryResponse)
async def update_diary(
    diary_id: int,
    diary_data: DiaryUpdate,
    current_user: User = Depends(get_current_user),
    service: DiaryService = Depends(get_diary_service)
):
    """Replace a diary's fields and tags."""
    service.ensure_owner(diary_id, current_user.id)
    return to_response(service.update(diary_id, diary_data))


@router.delete("/{diary_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_diary(
    diary_id: int,
    current_user: User = Depends(get_current_user),
    service: DiaryService = Depends(get_diary_service)
):
    """Soft delete a diary."""
    service.ensure_owner(diary_id, current_user.id)
    service.delete(diary_id)


@router.get("/{diary_id}/export", response_model=ExportResponse)
async def export_diary(
    diary_id: int,
    current_user: User = Depends(get_current_user),
    service: DiaryService = Depends(get_diary_service)
):
    """Export one of the user's diaries with its full content."""
    service.ensure_owner(diary_id, current_user.id)
    return ExportResponse(diaries=[to_response(service.get(diary_id))], count=1)


@router.post("/{diary_id}/pin", response_model=PinResponse)
async def toggle_pin(
    diary_id: int,
    current_user: User = Depends(get_current_user),
    service: DiaryService = Depends(get_diary_service)
):
    """Pin or unpin a diary (at most 3 pinned per user)."""
    is_pinned = service.toggle_pin(current_user.id, diary_id)
    return PinResponse(is_pinned=is_pinned, message="Pinned" if is_pinned else "Unpinned")
