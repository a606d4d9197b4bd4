"""
Schémas Pydantic pour les clients (stagiaires / apprenants).

montant_restant n'apparaît que dans la réponse : il est calculé par la base
et toute tentative de l'envoyer est rejetée (extra="forbid").
"""

import datetime as dt
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from formatrack.schemas.common import MAX_INT

TYPES_FORMATION = {"stagiaire", "apprenant"}
STATUTS_FORMATION = {"en_cours", "suspendu", "termine"}


def _check_type(v: Optional[str]) -> Optional[str]:
    if v is not None and v not in TYPES_FORMATION:
        raise ValueError(f"Type de formation invalide. Valeurs acceptées : {sorted(TYPES_FORMATION)}")
    return v


def _check_statut(v: Optional[str]) -> Optional[str]:
    if v is not None and v not in STATUTS_FORMATION:
        raise ValueError(f"Statut de formation invalide. Valeurs acceptées : {sorted(STATUTS_FORMATION)}")
    return v


class ClientCreate(BaseModel):
    """Schéma d'inscription d'un client (POST /clients)."""
    nom: str
    prenom: str
    localite: Optional[str] = None
    telephone_parent: Optional[str] = None
    niveau_scolaire: Optional[str] = None
    domaine_etude: Optional[str] = None
    date_inscription: Optional[dt.date] = None   # Aujourd'hui si absent
    duree_formation: Optional[int] = Field(default=None, ge=0, le=MAX_INT)
    type_formation: str
    statut_formation: str = "en_cours"
    prix_formation: int = Field(default=0, ge=0, le=MAX_INT)
    montant_verse: int = Field(default=0, ge=0, le=MAX_INT)

    model_config = {"extra": "forbid"}

    @field_validator("nom", "prenom")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip()

    @field_validator("type_formation")
    @classmethod
    def valid_type(cls, v: str) -> str:
        return _check_type(v)

    @field_validator("statut_formation")
    @classmethod
    def valid_statut(cls, v: str) -> str:
        return _check_statut(v)

    @model_validator(mode="after")
    def montant_verse_within_prix(self) -> "ClientCreate":
        if self.montant_verse > self.prix_formation:
            raise ValueError("Le montant versé ne peut pas dépasser le prix de la formation.")
        return self


class ClientUpdate(BaseModel):
    """
    Mise à jour partielle (PUT /clients/{id}) : seuls les champs fournis sont modifiés.
    Un champ inconnu (y compris montant_restant) est rejeté.
    """
    nom: Optional[str] = None
    prenom: Optional[str] = None
    localite: Optional[str] = None
    telephone_parent: Optional[str] = None
    niveau_scolaire: Optional[str] = None
    domaine_etude: Optional[str] = None
    date_inscription: Optional[dt.date] = None
    duree_formation: Optional[int] = Field(default=None, ge=0, le=MAX_INT)
    type_formation: Optional[str] = None
    statut_formation: Optional[str] = None
    prix_formation: Optional[int] = Field(default=None, ge=0, le=MAX_INT)
    montant_verse: Optional[int] = Field(default=None, ge=0, le=MAX_INT)

    model_config = {"extra": "forbid"}

    @field_validator("nom", "prenom")
    @classmethod
    def not_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Le champ ne peut pas être vide.")
        return v.strip() if v else v

    @field_validator("type_formation")
    @classmethod
    def valid_type(cls, v: Optional[str]) -> Optional[str]:
        return _check_type(v)

    @field_validator("statut_formation")
    @classmethod
    def valid_statut(cls, v: Optional[str]) -> Optional[str]:
        return _check_statut(v)

    @field_validator(
        "nom", "prenom", "date_inscription", "type_formation",
        "statut_formation", "prix_formation", "montant_verse",
        mode="before",
    )
    @classmethod
    def required_not_null(cls, v):
        # Ces colonnes sont NOT NULL : null explicite interdit, omission autorisée
        if v is None:
            raise ValueError("Ce champ ne peut pas être null.")
        return v


class ClientResponse(BaseModel):
    id: int
    nom: str
    prenom: str
    localite: Optional[str]
    telephone_parent: Optional[str]
    niveau_scolaire: Optional[str]
    domaine_etude: Optional[str]
    date_inscription: dt.date
    duree_formation: Optional[int]
    type_formation: str
    statut_formation: str
    date_statut_modifie: Optional[dt.date]
    prix_formation: int
    montant_verse: int
    montant_restant: int
    created_at: Optional[datetime]

    model_config = {"from_attributes": True}
