"""
Schémas Pydantic pour les cours et leurs inscriptions.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator

from formatrack.schemas.common import DbId


def _dedupe(ids: List[int]) -> List[int]:
    """Supprime les doublons en conservant l'ordre (une inscription par paire cours/client)."""
    return list(dict.fromkeys(ids))


class CoursCreate(BaseModel):
    intitule: str
    enseignant: str
    clients: List[DbId] = []  # IDs des clients inscrits

    model_config = {"extra": "forbid"}

    @field_validator("intitule", "enseignant")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()

    @field_validator("clients")
    @classmethod
    def unique_clients(cls, v: List[int]) -> List[int]:
        return _dedupe(v)


class CoursUpdate(BaseModel):
    intitule: Optional[str] = None
    enseignant: Optional[str] = None
    clients: Optional[List[DbId]] = None  # si fourni, remplace les inscriptions du cours

    model_config = {"extra": "forbid"}

    @field_validator("intitule", "enseignant")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip() if v else v

    @field_validator("clients")
    @classmethod
    def unique_clients(cls, v: Optional[List[int]]) -> Optional[List[int]]:
        return _dedupe(v) if v is not None else v


class CoursResponse(BaseModel):
    id: int
    intitule: str
    enseignant: str
    created_at: Optional[datetime]
    clients: List[int] = []
    clients_noms: Optional[str] = None  # "Nom Prénom, Nom Prénom"
    nombre_clients: int = 0

    model_config = {"from_attributes": True}
