"""
Schémas Pydantic pour l'authentification.
"""

from pydantic import BaseModel

from formatrack.schemas.user import UserResponse


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


class CurrentUser(BaseModel):
    """Identité extraite du jeton d'accès et attachée à la requête."""
    id: int
    username: str
