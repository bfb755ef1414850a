"""
Dashboard statistics routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from journal.api.dependencies import get_current_user, get_field_cipher
from journal.db.session import get_db
from journal.models.user import User
from journal.schemas.stats import DashboardStatsResponse
from journal.services.confidentiality import FieldCipher
from journal.services.stats_service import get_dashboard_stats

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/dashboard", response_model=DashboardStatsResponse)
async def dashboard(
    current_user: User = Depends(get_current_user),
    cipher: FieldCipher = Depends(get_field_cipher),
    db: Session = Depends(get_db)
):
    """Summary numbers for the home screen."""
    return get_dashboard_stats(current_user.id, cipher, db)
