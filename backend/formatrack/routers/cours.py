"""
Router pour les cours et leurs inscriptions.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from formatrack.database import get_db
from formatrack.dependencies import get_current_user
from formatrack.schemas.client import ClientResponse
from formatrack.schemas.common import MessageResponse, PathId
from formatrack.schemas.cours import CoursCreate, CoursResponse, CoursUpdate
from formatrack.services import cours_service

router = APIRouter(
    prefix="/api/cours",
    tags=["Cours"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[CoursResponse], summary="Lister les cours")
def list_cours(db: Session = Depends(get_db)):
    """Retourne tous les cours avec la liste et le nombre de clients inscrits."""
    return cours_service.get_cours_list(db)


@router.get("/{cours_id}", response_model=CoursResponse, summary="Détail d'un cours")
def get_cours(cours_id: PathId, db: Session = Depends(get_db)):
    return cours_service.get_cours(db, cours_id)


@router.post("", response_model=CoursResponse, status_code=201, summary="Créer un cours")
def create_cours(data: CoursCreate, db: Session = Depends(get_db)):
    """Crée un cours et y inscrit les clients fournis (doublons ignorés)."""
    return cours_service.create_cours(db, data)


@router.put("/{cours_id}", response_model=CoursResponse, summary="Modifier un cours")
def update_cours(cours_id: PathId, data: CoursUpdate, db: Session = Depends(get_db)):
    """
    Met à jour l'intitulé et/ou l'enseignant.
    Si `clients` est fourni, la liste des inscrits est entièrement remplacée.
    """
    return cours_service.update_cours(db, cours_id, data)


@router.delete("/{cours_id}", response_model=MessageResponse, summary="Supprimer un cours")
def delete_cours(cours_id: PathId, db: Session = Depends(get_db)):
    """Supprime un cours, ses inscriptions et ses présences. Les clients sont conservés."""
    cours_service.delete_cours(db, cours_id)
    return MessageResponse(message="Cours supprimé avec succès")


@router.get("/{cours_id}/clients", response_model=List[ClientResponse],
            summary="Clients inscrits à un cours")
def list_cours_clients(cours_id: PathId, db: Session = Depends(get_db)):
    return cours_service.get_cours_clients(db, cours_id)
