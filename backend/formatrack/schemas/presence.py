"""
Schémas Pydantic pour les présences et les absences/retards.

Note : on importe datetime en tant que module (dt) pour éviter le conflit de nommage
entre le champ `date` et le type `datetime.date` dans Pydantic v2.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from formatrack.schemas.common import DbId

ETATS_PRESENCE = {"present", "absent"}


class PresenceCreate(BaseModel):
    client_id: DbId
    cours_id: DbId
    etat: str
    heure_presence: Optional[dt.time] = None  # "HH:MM", obligatoire si present

    @field_validator("etat")
    @classmethod
    def valid_etat(cls, v: str) -> str:
        if v not in ETATS_PRESENCE:
            raise ValueError(f"État invalide. Valeurs acceptées : {sorted(ETATS_PRESENCE)}")
        return v

    @model_validator(mode="after")
    def heure_required_if_present(self) -> "PresenceCreate":
        if self.etat == "present" and self.heure_presence is None:
            raise ValueError("L'heure de présence est obligatoire pour un client présent.")
        return self


class PresenceResponse(BaseModel):
    id: int
    client_id: int
    cours_id: int
    date_presence: dt.date
    heure_presence: Optional[dt.time]
    etat: str
    nom: Optional[str] = None
    prenom: Optional[str] = None
    cours_nom: Optional[str] = None

    model_config = {"from_attributes": True}


class AbsenceRetardResponse(BaseModel):
    id: int
    client_id: int
    cours_id: int
    date: dt.date
    heure_presence: Optional[dt.time]
    type: str
    remarque: Optional[str]
    nom: Optional[str] = None
    prenom: Optional[str] = None
    cours_nom: Optional[str] = None

    model_config = {"from_attributes": True}
