"""
Router pour les présences.
L'enregistrement d'une présence peut générer une absence ou un retard.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from formatrack.database import get_db
from formatrack.dependencies import get_current_user
from formatrack.schemas.presence import PresenceCreate, PresenceResponse
from formatrack.services import presence_service

router = APIRouter(
    prefix="/api/presences",
    tags=["Présences"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[PresenceResponse], summary="Lister les présences")
def list_presences(db: Session = Depends(get_db)):
    return presence_service.get_presences(db)


@router.post("", response_model=PresenceResponse, status_code=201, summary="Enregistrer une présence")
def create_presence(data: PresenceCreate, db: Session = Depends(get_db)):
    """
    Enregistre une présence datée du jour.

    - absent → une absence est ajoutée au journal
    - present après 09:00 → un retard est ajouté avec l'heure de pointage
    - present à 09:00 ou avant → aucun incident
    """
    return presence_service.create_presence(db, data)
