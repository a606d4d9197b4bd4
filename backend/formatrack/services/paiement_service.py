"""
Service métier pour les paiements.

Enregistrer un paiement = deux effets dans une seule transaction :
1. insertion de la ligne paiements (utilisateur courant, horodatage serveur)
2. incrément atomique de clients.montant_verse (le solde généré baisse d'autant)

L'incrément est une instruction UPDATE conditionnelle unique, jamais une
lecture suivie d'une écriture côté Python : deux paiements concurrents sur
le même client ne peuvent ni se perdre ni dépasser le reste à payer.
"""

import logging
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from formatrack.exceptions import Forbidden, InvalidPayment, NotFoundError
from formatrack.models.client import Client
from formatrack.models.paiement import Paiement
from formatrack.models.user import User
from formatrack.schemas.auth import CurrentUser
from formatrack.schemas.paiement import PaiementCreate, PaiementResponse

logger = logging.getLogger(__name__)


def validate_paiement(db: Session, data: PaiementCreate) -> Client:
    """
    Contrôles préalables : 0 < montant <= montant_restant du client.
    Lève InvalidPayment (ou NotFoundError) avant toute écriture.
    """
    if data.montant <= 0:
        raise InvalidPayment("Le montant du paiement doit être strictement positif.")

    client = db.get(Client, data.client_id)
    if client is None:
        raise NotFoundError("Client introuvable.")

    if data.montant > client.montant_restant:
        raise InvalidPayment(
            f"Le montant ({data.montant}) dépasse le reste à payer ({client.montant_restant})."
        )
    return client


def record_paiement(db: Session, client_id: int, montant: int, utilisateur_id: int) -> Paiement:
    """
    Insère le paiement et incrémente le montant versé du client dans la même transaction.
    Si le solde ne permet plus le paiement au moment de l'UPDATE, rien n'est commité.
    """
    paiement = Paiement(
        client_id=client_id,
        montant=montant,
        date_paiement=datetime.now(),
        utilisateur_id=utilisateur_id,
    )
    db.add(paiement)
    db.flush()

    result = db.execute(
        update(Client)
        .where(Client.id == client_id, Client.montant_restant >= montant)
        .values(montant_verse=Client.montant_verse + montant)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        db.rollback()
        raise InvalidPayment("Le reste à payer du client a changé, paiement refusé.")

    db.commit()
    logger.info(
        "Paiement %s enregistré : %d pour le client %s (utilisateur %s)",
        paiement.id, montant, client_id, utilisateur_id,
    )
    return paiement


def create_paiement(db: Session, data: PaiementCreate, current_user: CurrentUser) -> PaiementResponse:
    """
    Valide puis enregistre un paiement encaissé par l'utilisateur courant.
    Lève Forbidden si le compte porté par le jeton a été supprimé depuis sa délivrance.
    """
    if db.get(User, current_user.id) is None:
        raise Forbidden("Compte utilisateur supprimé.")

    client = validate_paiement(db, data)
    paiement = record_paiement(db, client.id, data.montant, current_user.id)
    return get_paiement(db, paiement.id)


def get_paiements(db: Session) -> list[PaiementResponse]:
    """Retourne tous les paiements, les plus récents d'abord."""
    rows = db.execute(
        _base_query().order_by(Paiement.date_paiement.desc(), Paiement.id.desc())
    ).all()
    return [_to_response(*row) for row in rows]


def get_client_paiements(db: Session, client_id: int) -> list[PaiementResponse]:
    """Historique des paiements d'un client. Lève NotFoundError si le client n'existe pas."""
    if db.get(Client, client_id) is None:
        raise NotFoundError("Client introuvable.")

    rows = db.execute(
        _base_query()
        .where(Paiement.client_id == client_id)
        .order_by(Paiement.date_paiement.desc(), Paiement.id.desc())
    ).all()
    return [_to_response(*row) for row in rows]


def get_paiement(db: Session, paiement_id: int) -> PaiementResponse:
    row = db.execute(_base_query().where(Paiement.id == paiement_id)).first()
    if row is None:
        raise NotFoundError("Paiement introuvable.")
    return _to_response(*row)


def _base_query():
    # outerjoin : un paiement dont l'utilisateur a été supprimé reste listé (username NULL)
    return (
        select(Paiement, Client.nom, Client.prenom, User.username)
        .join(Client, Client.id == Paiement.client_id)
        .outerjoin(User, User.id == Paiement.utilisateur_id)
    )


def _to_response(paiement: Paiement, nom, prenom, username) -> PaiementResponse:
    return PaiementResponse(
        id=paiement.id,
        client_id=paiement.client_id,
        montant=paiement.montant,
        date_paiement=paiement.date_paiement,
        utilisateur_id=paiement.utilisateur_id,
        nom=nom,
        prenom=prenom,
        username=username,
    )
