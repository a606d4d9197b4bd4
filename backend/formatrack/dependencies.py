"""
Dépendances FastAPI partagées par les routers : identité de l'utilisateur courant.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from formatrack.exceptions import Unauthenticated
from formatrack.schemas.auth import CurrentUser
from formatrack.security import decode_access_token

# auto_error=False : l'absence de jeton doit produire un 401 au format {"error": ...}
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    """
    Contrôle d'accès : exige un en-tête `Authorization: Bearer <token>`.
    Sans jeton → 401 ; jeton invalide ou expiré → 403.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    return decode_access_token(credentials.credentials)
