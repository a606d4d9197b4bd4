"""
Schémas Pydantic pour les utilisateurs.
La projection publique n'expose jamais le hash du mot de passe.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class UserCreate(BaseModel):
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def username_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom d'utilisateur ne peut pas être vide.")
        return v.strip()

    @field_validator("password")
    @classmethod
    def password_valid(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Le mot de passe doit contenir au moins 6 caractères.")
        # Limite de bcrypt : les octets au-delà de 72 seraient ignorés
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Le mot de passe ne peut pas dépasser 72 octets.")
        return v


class UserResponse(BaseModel):
    id: int
    username: str
    created_at: Optional[datetime]

    model_config = {"from_attributes": True}
