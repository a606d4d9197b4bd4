"""
Schémas et types génériques partagés par plusieurs routers.
"""

from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, Field

# Plus grande valeur d'une colonne INTEGER (PostgreSQL comme SQLite côté pilote)
MAX_INT = 2_147_483_647

# Identifiant reçu dans un corps JSON
DbId = Annotated[int, Field(ge=1, le=MAX_INT)]

# Identifiant reçu dans l'URL
PathId = Annotated[int, Path(ge=1, le=MAX_INT)]


class MessageResponse(BaseModel):
    """Réponse des suppressions : {"message": "..."}."""
    message: str
