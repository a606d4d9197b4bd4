"""
Router pour les clients (stagiaires / apprenants).
CRUD complet + historique des paiements et des absences/retards d'un client.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from formatrack.database import get_db
from formatrack.dependencies import get_current_user
from formatrack.schemas.client import ClientCreate, ClientResponse, ClientUpdate
from formatrack.schemas.common import MessageResponse, PathId
from formatrack.schemas.paiement import PaiementResponse
from formatrack.schemas.presence import AbsenceRetardResponse
from formatrack.services import absence_service, client_service, paiement_service

router = APIRouter(
    prefix="/api/clients",
    tags=["Clients"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[ClientResponse], summary="Lister les clients")
def list_clients(db: Session = Depends(get_db)):
    """Retourne tous les clients, du plus récent au plus ancien."""
    return client_service.get_clients(db)


@router.get("/{client_id}", response_model=ClientResponse, summary="Détail d'un client")
def get_client(client_id: PathId, db: Session = Depends(get_db)):
    return client_service.get_client(db, client_id)


@router.post("", response_model=ClientResponse, status_code=201, summary="Inscrire un client")
def create_client(data: ClientCreate, db: Session = Depends(get_db)):
    """
    Inscrit un nouveau client.
    montant_restant est calculé automatiquement (prix_formation - montant_verse).
    """
    return client_service.create_client(db, data)


@router.put("/{client_id}", response_model=ClientResponse, summary="Modifier un client")
def update_client(client_id: PathId, data: ClientUpdate, db: Session = Depends(get_db)):
    """
    Mise à jour partielle : seuls les champs fournis sont modifiés.
    Un champ inconnu ou montant_restant dans le corps → 400.
    """
    return client_service.update_client(db, client_id, data)


@router.delete("/{client_id}", response_model=MessageResponse, summary="Supprimer un client")
def delete_client(client_id: PathId, db: Session = Depends(get_db)):
    """Supprime un client et, en cascade, ses inscriptions, présences, incidents et paiements."""
    client_service.delete_client(db, client_id)
    return MessageResponse(message="Client supprimé avec succès")


@router.get("/{client_id}/paiements", response_model=List[PaiementResponse],
            summary="Paiements d'un client")
def list_client_paiements(client_id: PathId, db: Session = Depends(get_db)):
    return paiement_service.get_client_paiements(db, client_id)


@router.get("/{client_id}/absences-retards", response_model=List[AbsenceRetardResponse],
            summary="Absences et retards d'un client")
def list_client_absences_retards(client_id: PathId, db: Session = Depends(get_db)):
    return absence_service.get_client_absences_retards(db, client_id)
