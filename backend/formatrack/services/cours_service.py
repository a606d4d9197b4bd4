"""
Service métier pour les cours et les inscriptions cours ↔ clients.
"""

import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from formatrack.database import is_unique_violation
from formatrack.exceptions import ConflictError, NotFoundError
from formatrack.models.client import Client
from formatrack.models.cours import Cours, CoursClient
from formatrack.schemas.cours import CoursCreate, CoursResponse, CoursUpdate

logger = logging.getLogger(__name__)


def get_cours_list(db: Session) -> list[CoursResponse]:
    """Retourne tous les cours, du plus récent au plus ancien, avec leurs inscrits."""
    cours_list = db.execute(
        select(Cours).order_by(Cours.created_at.desc(), Cours.id.desc())
    ).scalars().all()
    return [_to_response(db, c) for c in cours_list]


def get_cours(db: Session, cours_id: int) -> CoursResponse:
    return _to_response(db, _get_or_404(db, cours_id))


def create_cours(db: Session, data: CoursCreate) -> CoursResponse:
    """
    Crée un cours et inscrit les clients fournis.
    Lève NotFoundError si un des clients n'existe pas.
    """
    _check_clients_exist(db, data.clients)

    cours = Cours(intitule=data.intitule, enseignant=data.enseignant)
    db.add(cours)
    db.flush()  # Obtenir l'ID avant d'insérer les inscriptions

    _insert_enrollments(db, cours.id, data.clients)
    _commit(db)
    db.refresh(cours)

    logger.info("Cours créé : %s (%s), %d clients inscrits", cours.intitule, cours.id, len(data.clients))
    return _to_response(db, cours)


def update_cours(db: Session, cours_id: int, data: CoursUpdate) -> CoursResponse:
    """
    Met à jour les champs fournis d'un cours.
    Si `clients` est fourni, les inscriptions sont remplacées par cette liste.
    """
    cours = _get_or_404(db, cours_id)

    update_data = data.model_dump(exclude_unset=True, exclude={"clients"})
    for field, value in update_data.items():
        setattr(cours, field, value)

    if data.clients is not None:
        _check_clients_exist(db, data.clients)
        db.execute(delete(CoursClient).where(CoursClient.cours_id == cours.id))
        _insert_enrollments(db, cours.id, data.clients)

    _commit(db)
    db.refresh(cours)
    return _to_response(db, cours)


def delete_cours(db: Session, cours_id: int) -> None:
    """
    Supprime un cours. Inscriptions, présences et absences/retards liés
    sont supprimés en cascade ; les clients sont conservés.
    """
    cours = _get_or_404(db, cours_id)
    db.delete(cours)
    db.commit()
    logger.info("Cours supprimé : %s", cours_id)


def get_cours_clients(db: Session, cours_id: int) -> list[Client]:
    """Retourne les clients inscrits à un cours, triés par nom puis prénom."""
    _get_or_404(db, cours_id)
    return db.execute(
        select(Client)
        .join(CoursClient, CoursClient.client_id == Client.id)
        .where(CoursClient.cours_id == cours_id)
        .order_by(Client.nom, Client.prenom)
    ).scalars().all()


def _get_or_404(db: Session, cours_id: int) -> Cours:
    cours = db.get(Cours, cours_id)
    if cours is None:
        raise NotFoundError("Cours introuvable.")
    return cours


def _check_clients_exist(db: Session, client_ids: List[int]) -> None:
    if not client_ids:
        return
    found = set(db.execute(
        select(Client.id).where(Client.id.in_(client_ids))
    ).scalars().all())
    missing = [cid for cid in client_ids if cid not in found]
    if missing:
        raise NotFoundError(f"Client(s) introuvable(s) : {', '.join(str(m) for m in missing)}.")


def _insert_enrollments(db: Session, cours_id: int, client_ids: List[int]) -> None:
    if client_ids:
        db.bulk_insert_mappings(CoursClient, [
            {"cours_id": cours_id, "client_id": cid}
            for cid in client_ids
        ])


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if is_unique_violation(exc):
            raise ConflictError("Ce client est déjà inscrit à ce cours.")
        raise


def _to_response(db: Session, cours: Cours) -> CoursResponse:
    """Construit le schéma de réponse avec la liste des inscrits."""
    rows = db.execute(
        select(Client.id, Client.nom, Client.prenom)
        .join(CoursClient, CoursClient.client_id == Client.id)
        .where(CoursClient.cours_id == cours.id)
        .order_by(Client.nom, Client.prenom)
    ).all()

    return CoursResponse(
        id=cours.id,
        intitule=cours.intitule,
        enseignant=cours.enseignant,
        created_at=cours.created_at,
        clients=[row.id for row in rows],
        clients_noms=", ".join(f"{row.nom} {row.prenom}" for row in rows) or None,
        nombre_clients=len(rows),
    )
