"""
Router pour la gestion des comptes utilisateurs.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from formatrack.database import get_db
from formatrack.dependencies import get_current_user
from formatrack.schemas.auth import CurrentUser
from formatrack.schemas.common import MessageResponse, PathId
from formatrack.schemas.user import UserCreate, UserResponse
from formatrack.services import user_service

router = APIRouter(
    prefix="/api/users",
    tags=["Utilisateurs"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[UserResponse], summary="Lister les utilisateurs")
def list_users(db: Session = Depends(get_db)):
    return user_service.get_users(db)


@router.post("", response_model=UserResponse, status_code=201, summary="Créer un utilisateur")
def create_user(data: UserCreate, db: Session = Depends(get_db)):
    """Crée un compte. Retourne 409 si le nom d'utilisateur est déjà pris."""
    return user_service.create_user(db, data)


@router.delete("/{user_id}", response_model=MessageResponse, summary="Supprimer un utilisateur")
def delete_user(
    user_id: PathId,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Supprime un compte. Supprimer son propre compte est refusé (400)."""
    user_service.delete_user(db, user_id, current_user)
    return MessageResponse(message="Utilisateur supprimé avec succès")
