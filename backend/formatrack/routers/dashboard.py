"""
Router du tableau de bord.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from formatrack.database import get_db
from formatrack.dependencies import get_current_user
from formatrack.schemas.dashboard import DashboardStats
from formatrack.services import dashboard_service

router = APIRouter(
    prefix="/api/dashboard",
    tags=["Tableau de bord"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/stats", response_model=DashboardStats, summary="Statistiques du jour")
def get_stats(db: Session = Depends(get_db)):
    """Statistiques calculées à la demande."""
    return dashboard_service.get_stats(db)
