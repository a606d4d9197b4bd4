"""
Schémas Pydantic pour les paiements.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from formatrack.schemas.common import MAX_INT, DbId


class PaiementCreate(BaseModel):
    """
    Corps de POST /paiements.
    La positivité et le plafond (montant_restant) sont contrôlés par le service,
    afin de renvoyer InvalidPayment plutôt qu'une erreur de schéma.
    """
    client_id: DbId
    montant: int = Field(le=MAX_INT)


class PaiementResponse(BaseModel):
    id: int
    client_id: int
    montant: int
    date_paiement: datetime
    utilisateur_id: Optional[int]        # NULL si l'utilisateur a été supprimé
    nom: Optional[str] = None
    prenom: Optional[str] = None
    username: Optional[str] = None

    model_config = {"from_attributes": True}
