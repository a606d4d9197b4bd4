"""
Router pour les paiements et les reçus PDF.
"""

from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from formatrack.database import get_db
from formatrack.dependencies import get_current_user
from formatrack.schemas.auth import CurrentUser
from formatrack.schemas.common import PathId
from formatrack.schemas.paiement import PaiementCreate, PaiementResponse
from formatrack.services import client_service, paiement_service, receipt_service

router = APIRouter(
    prefix="/api/paiements",
    tags=["Paiements"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[PaiementResponse], summary="Lister les paiements")
def list_paiements(db: Session = Depends(get_db)):
    return paiement_service.get_paiements(db)


@router.post("", response_model=PaiementResponse, status_code=201, summary="Enregistrer un paiement")
def create_paiement(
    data: PaiementCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Enregistre un paiement encaissé par l'utilisateur courant et met à jour le solde du client.

    Retourne 400 si le montant est nul, négatif ou supérieur au reste à payer ;
    dans ce cas aucun paiement n'est créé et le solde est inchangé.
    """
    return paiement_service.create_paiement(db, data, current_user)


@router.get("/{paiement_id}/recu", summary="Télécharger le reçu PDF d'un paiement")
def download_receipt(paiement_id: PathId, db: Session = Depends(get_db)):
    """Génère le reçu A4 du paiement avec la situation financière actuelle du client."""
    paiement = paiement_service.get_paiement(db, paiement_id)
    client = client_service.get_client(db, paiement.client_id)
    pdf = receipt_service.build_receipt_pdf(paiement, client)

    return StreamingResponse(
        iter([pdf]),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={receipt_service.receipt_filename(paiement, client)}"
        },
    )
