"""
Service du journal des absences et retards.
Les incidents sont créés par presence_service ; ici on les consulte et on les supprime.
Supprimer un incident (correction d'une erreur de saisie) n'a aucun effet sur les soldes.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from formatrack.exceptions import NotFoundError
from formatrack.models.client import Client
from formatrack.models.cours import Cours
from formatrack.models.presence import AbsenceRetard
from formatrack.schemas.presence import AbsenceRetardResponse

logger = logging.getLogger(__name__)


def get_absences_retards(db: Session) -> list[AbsenceRetardResponse]:
    """Retourne tous les incidents, les plus récents d'abord."""
    rows = db.execute(
        select(AbsenceRetard, Client.nom, Client.prenom, Cours.intitule)
        .join(Client, Client.id == AbsenceRetard.client_id)
        .join(Cours, Cours.id == AbsenceRetard.cours_id)
        .order_by(AbsenceRetard.date.desc(), AbsenceRetard.id.desc())
    ).all()
    return [_to_response(ar, nom, prenom, intitule) for ar, nom, prenom, intitule in rows]


def get_client_absences_retards(db: Session, client_id: int) -> list[AbsenceRetardResponse]:
    """Retourne les incidents d'un client. Lève NotFoundError si le client n'existe pas."""
    if db.get(Client, client_id) is None:
        raise NotFoundError("Client introuvable.")

    rows = db.execute(
        select(AbsenceRetard, Cours.intitule)
        .join(Cours, Cours.id == AbsenceRetard.cours_id)
        .where(AbsenceRetard.client_id == client_id)
        .order_by(AbsenceRetard.date.desc(), AbsenceRetard.id.desc())
    ).all()
    return [_to_response(ar, cours_nom=intitule) for ar, intitule in rows]


def delete_absence_retard(db: Session, absence_id: int) -> None:
    incident = db.get(AbsenceRetard, absence_id)
    if incident is None:
        raise NotFoundError("Absence/retard introuvable.")
    db.delete(incident)
    db.commit()
    logger.info("Absence/retard supprimé : %s", absence_id)


def _to_response(ar: AbsenceRetard, nom=None, prenom=None, cours_nom=None) -> AbsenceRetardResponse:
    return AbsenceRetardResponse(
        id=ar.id,
        client_id=ar.client_id,
        cours_id=ar.cours_id,
        date=ar.date,
        heure_presence=ar.heure_presence,
        type=ar.type,
        remarque=ar.remarque,
        nom=nom,
        prenom=prenom,
        cours_nom=cours_nom,
    )
