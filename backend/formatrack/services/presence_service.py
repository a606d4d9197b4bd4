"""
Service métier pour les présences.

Chaque présence enregistrée peut générer un incident dans absences_retards :
- absent                       → incident "absence" daté du jour, sans heure
- present après 09:00 (exclu)  → incident "retard" portant l'heure de pointage
- present à 09:00 ou avant     → aucun incident
Le seuil de 09:00 est une règle fixe du centre, non paramétrable par cours.
"""

import logging
from datetime import date, time
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from formatrack.exceptions import NotFoundError
from formatrack.models.client import Client
from formatrack.models.cours import Cours
from formatrack.models.presence import AbsenceRetard, Presence
from formatrack.schemas.presence import PresenceCreate, PresenceResponse

logger = logging.getLogger(__name__)

LATE_THRESHOLD = time(9, 0)


def is_late(heure: time) -> bool:
    """Vrai si l'heure (à la minute près) est strictement après 09:00."""
    return (heure.hour, heure.minute) > (LATE_THRESHOLD.hour, LATE_THRESHOLD.minute)


def derive_incident(presence: Presence) -> Optional[AbsenceRetard]:
    """Construit l'absence ou le retard correspondant à une présence, ou None si le client est à l'heure."""
    if presence.etat == "absent":
        return AbsenceRetard(
            client_id=presence.client_id,
            cours_id=presence.cours_id,
            date=presence.date_presence,
            type="absence",
        )

    if presence.heure_presence is not None and is_late(presence.heure_presence):
        return AbsenceRetard(
            client_id=presence.client_id,
            cours_id=presence.cours_id,
            date=presence.date_presence,
            heure_presence=presence.heure_presence,
            type="retard",
        )
    return None


def create_presence(db: Session, data: PresenceCreate) -> Presence:
    """
    Enregistre une présence datée du jour et l'incident éventuel qui en découle.
    Les deux lignes sont commitées ensemble.
    Lève NotFoundError si le client ou le cours n'existe pas.
    """
    if db.get(Client, data.client_id) is None:
        raise NotFoundError("Client introuvable.")
    if db.get(Cours, data.cours_id) is None:
        raise NotFoundError("Cours introuvable.")

    presence = Presence(
        client_id=data.client_id,
        cours_id=data.cours_id,
        date_presence=date.today(),
        heure_presence=data.heure_presence,
        etat=data.etat,
    )
    db.add(presence)

    incident = derive_incident(presence)
    if incident is not None:
        db.add(incident)

    db.commit()
    db.refresh(presence)

    if incident is not None:
        logger.info(
            "%s enregistré(e) : client %s, cours %s",
            incident.type.capitalize(), presence.client_id, presence.cours_id,
        )
    return presence


def get_presences(db: Session) -> list[PresenceResponse]:
    """Retourne toutes les présences, les plus récentes d'abord, avec nom du client et du cours."""
    rows = db.execute(
        select(Presence, Client.nom, Client.prenom, Cours.intitule)
        .join(Client, Client.id == Presence.client_id)
        .join(Cours, Cours.id == Presence.cours_id)
        .order_by(
            Presence.date_presence.desc(),
            Presence.heure_presence.desc(),
            Presence.id.desc(),
        )
    ).all()

    return [
        PresenceResponse(
            id=p.id,
            client_id=p.client_id,
            cours_id=p.cours_id,
            date_presence=p.date_presence,
            heure_presence=p.heure_presence,
            etat=p.etat,
            nom=nom,
            prenom=prenom,
            cours_nom=intitule,
        )
        for p, nom, prenom, intitule in rows
    ]
