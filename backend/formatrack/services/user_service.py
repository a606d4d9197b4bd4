"""
Service métier pour les comptes utilisateurs.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from formatrack.database import is_unique_violation
from formatrack.exceptions import ConflictError, NotFoundError, SelfDeletionForbidden
from formatrack.models.user import User
from formatrack.schemas.auth import CurrentUser
from formatrack.schemas.user import UserCreate
from formatrack.security import hash_password

logger = logging.getLogger(__name__)


def get_users(db: Session) -> list[User]:
    """Retourne tous les utilisateurs, du plus récent au plus ancien."""
    return db.execute(
        select(User).order_by(User.created_at.desc(), User.id.desc())
    ).scalars().all()


def create_user(db: Session, data: UserCreate) -> User:
    """
    Crée un compte avec un mot de passe haché.
    Lève ConflictError si le nom d'utilisateur est déjà pris.
    """
    user = User(username=data.username, password_hash=hash_password(data.password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if is_unique_violation(exc):
            raise ConflictError(f"Le nom d'utilisateur '{data.username}' existe déjà.")
        raise
    db.refresh(user)
    logger.info("Utilisateur créé : %s (%s)", user.username, user.id)
    return user


def delete_user(db: Session, user_id: int, current_user: CurrentUser) -> None:
    """
    Supprime un compte. Un utilisateur ne peut pas supprimer le sien.
    Les paiements qu'il a encaissés sont conservés (utilisateur_id passe à NULL).
    """
    if user_id == current_user.id:
        raise SelfDeletionForbidden()

    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("Utilisateur introuvable.")

    db.delete(user)
    db.commit()
    logger.info("Utilisateur %s supprimé par %s", user_id, current_user.username)


def ensure_default_admin(db: Session, username: str, password: str) -> bool:
    """Crée le compte administrateur initial si la table users est vide. Retourne True si créé."""
    count = db.execute(select(func.count()).select_from(User)).scalar() or 0
    if count:
        return False

    db.add(User(username=username, password_hash=hash_password(password)))
    db.commit()
    logger.info("Utilisateur administrateur '%s' créé.", username)
    return True
