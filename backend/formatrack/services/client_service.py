"""
Service métier pour les clients (stagiaires / apprenants).

Le solde montant_restant est une colonne générée : ce service ne l'écrit jamais,
il se contente de refuser les écritures qui le rendraient négatif.
"""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from formatrack.exceptions import NotFoundError, ValidationError
from formatrack.models.client import Client
from formatrack.schemas.client import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)


def get_clients(db: Session) -> list[Client]:
    """Retourne tous les clients, du plus récent au plus ancien."""
    return db.execute(
        select(Client).order_by(Client.created_at.desc(), Client.id.desc())
    ).scalars().all()


def get_client(db: Session, client_id: int) -> Client:
    """Retourne un client par son ID. Lève NotFoundError s'il n'existe pas."""
    client = db.get(Client, client_id)
    if client is None:
        raise NotFoundError("Client introuvable.")
    return client


def create_client(db: Session, data: ClientCreate) -> Client:
    """Inscrit un nouveau client. La date d'inscription vaut aujourd'hui si elle n'est pas fournie."""
    values = data.model_dump()
    today = date.today()
    if values["date_inscription"] is None:
        values["date_inscription"] = today

    client = Client(**values, date_statut_modifie=today)
    db.add(client)
    db.commit()
    db.refresh(client)

    logger.info("Client inscrit : %s %s (%s)", client.nom, client.prenom, client.id)
    return client


def update_client(db: Session, client_id: int, data: ClientUpdate) -> Client:
    """
    Met à jour les champs fournis d'un client. Les champs absents ne sont pas modifiés.

    Le solde est recalculé par la base à partir des valeurs après mise à jour
    de prix_formation et montant_verse, quel que soit le champ modifié.
    Lève ValidationError si ces valeurs donneraient un solde négatif.
    """
    client = get_client(db, client_id)
    update_data = data.model_dump(exclude_unset=True)

    prix = update_data.get("prix_formation", client.prix_formation)
    verse = update_data.get("montant_verse", client.montant_verse)
    if verse > prix:
        raise ValidationError("Le montant versé ne peut pas dépasser le prix de la formation.")

    nouveau_statut = update_data.get("statut_formation")
    if nouveau_statut is not None and nouveau_statut != client.statut_formation:
        client.date_statut_modifie = date.today()

    for field, value in update_data.items():
        setattr(client, field, value)

    try:
        db.commit()
    except IntegrityError:
        # Un paiement a été commité entre la lecture et l'écriture
        db.rollback()
        raise ValidationError("Le montant versé ne peut pas dépasser le prix de la formation.")
    db.refresh(client)
    return client


def delete_client(db: Session, client_id: int) -> None:
    """
    Supprime définitivement un client.
    Inscriptions, présences, absences/retards et paiements sont supprimés en cascade.
    """
    client = get_client(db, client_id)
    db.delete(client)
    db.commit()
    logger.info("Client supprimé : %s", client_id)
