"""
Service d'authentification : vérification des identifiants et émission du jeton.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from formatrack.exceptions import InvalidCredentials
from formatrack.models.user import User
from formatrack.schemas.auth import LoginResponse
from formatrack.schemas.user import UserResponse
from formatrack.security import create_access_token, verify_password

logger = logging.getLogger(__name__)


def login(db: Session, username: str, password: str) -> LoginResponse:
    """
    Authentifie un utilisateur et retourne un jeton valable 24 h avec sa projection publique.
    Lève InvalidCredentials si l'utilisateur est inconnu ou le mot de passe incorrect.
    """
    user = db.execute(
        select(User).where(User.username == username)
    ).scalar()

    if user is None:
        logger.warning("Connexion refusée : utilisateur inconnu '%s'", username)
        raise InvalidCredentials("Utilisateur non trouvé.")

    if not verify_password(password, user.password_hash):
        logger.warning("Connexion refusée : mot de passe incorrect pour '%s'", username)
        raise InvalidCredentials("Mot de passe incorrect.")

    token = create_access_token(user.id, user.username)
    logger.info("Connexion réussie : %s", user.username)
    return LoginResponse(token=token, user=UserResponse.model_validate(user))
