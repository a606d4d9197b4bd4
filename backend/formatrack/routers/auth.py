"""
Router d'authentification.
POST /api/auth/login est la seule route métier accessible sans jeton.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from formatrack.database import get_db
from formatrack.dependencies import get_current_user
from formatrack.schemas.auth import CurrentUser, LoginRequest, LoginResponse
from formatrack.services import auth_service

router = APIRouter(prefix="/api/auth", tags=["Authentification"])


@router.post("/login", response_model=LoginResponse, summary="Se connecter")
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """
    Vérifie le couple identifiant / mot de passe et retourne un jeton valable 24 h.
    Retourne 401 si l'utilisateur est inconnu ou le mot de passe incorrect.
    """
    return auth_service.login(db, data.username, data.password)


@router.get("/me", response_model=CurrentUser, summary="Utilisateur courant")
def me(current_user: CurrentUser = Depends(get_current_user)):
    """Retourne l'identité portée par le jeton présenté."""
    return current_user
