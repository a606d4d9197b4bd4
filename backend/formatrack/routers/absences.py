"""
Router pour le journal des absences et retards.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from formatrack.database import get_db
from formatrack.dependencies import get_current_user
from formatrack.schemas.common import MessageResponse, PathId
from formatrack.schemas.presence import AbsenceRetardResponse
from formatrack.services import absence_service

router = APIRouter(
    prefix="/api/absences-retards",
    tags=["Absences et retards"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[AbsenceRetardResponse], summary="Lister les absences et retards")
def list_absences_retards(db: Session = Depends(get_db)):
    return absence_service.get_absences_retards(db)


@router.delete("/{absence_id}", response_model=MessageResponse, summary="Supprimer une absence ou un retard")
def delete_absence_retard(absence_id: PathId, db: Session = Depends(get_db)):
    """Supprime un incident saisi par erreur. Aucun effet sur les soldes."""
    absence_service.delete_absence_retard(db, absence_id)
    return MessageResponse(message="Absence/Retard supprimé avec succès")
