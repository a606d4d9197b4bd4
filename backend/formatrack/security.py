"""
Hachage des mots de passe (bcrypt via passlib) et jetons d'accès JWT (PyJWT).

Les jetons sont sans état : ils embarquent {id, username} et expirent
après ACCESS_TOKEN_EXPIRE_MINUTES. Aucune liste de révocation côté serveur.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from formatrack.config import settings
from formatrack.exceptions import Forbidden
from formatrack.schemas.auth import CurrentUser

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    """Hache un mot de passe avec bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Vérifie un mot de passe contre son hash. Un hash illisible vaut un échec."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def create_access_token(user_id: int, username: str, expires_delta: Optional[timedelta] = None) -> str:
    """Signe un jeton contenant l'identité de l'utilisateur et sa date d'expiration."""
    expire = datetime.now(timezone.utc) + (
        expires_delta if expires_delta is not None
        else timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    payload = {"id": user_id, "username": username, "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> CurrentUser:
    """
    Vérifie la signature et l'expiration d'un jeton.
    Lève Forbidden si le jeton est expiré, falsifié ou incomplet.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": ["exp", "id", "username"]},
        )
    except jwt.ExpiredSignatureError:
        raise Forbidden("Token expiré.")
    except jwt.InvalidTokenError:
        raise Forbidden("Token invalide.")

    if not isinstance(payload.get("id"), int) or not payload.get("username"):
        raise Forbidden("Token invalide.")
    return CurrentUser(id=payload["id"], username=payload["username"])
