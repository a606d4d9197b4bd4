"""
Tests de la génération du reçu PDF.
"""

from datetime import date, datetime

from formatrack.models.client import Client
from formatrack.schemas.paiement import PaiementResponse
from formatrack.services.receipt_service import (
    build_receipt_pdf,
    format_date_courte,
    format_montant,
    numero_recu,
    receipt_filename,
)


def make_paiement(**kwargs) -> PaiementResponse:
    return PaiementResponse(
        id=kwargs.get("id", 7),
        client_id=1,
        montant=kwargs.get("montant", 25000),
        date_paiement=datetime(2025, 3, 14, 10, 30),
        utilisateur_id=kwargs.get("utilisateur_id", 1),
        nom="Diallo",
        prenom="Aminata",
        username=kwargs.get("username", "admin"),
    )


def make_client(**kwargs) -> Client:
    return Client(
        id=1,
        nom=kwargs.get("nom", "Diallo"),
        prenom=kwargs.get("prenom", "Aminata"),
        telephone_parent=None,
        type_formation="apprenant",
        statut_formation="en_cours",
        date_inscription=date(2025, 1, 6),
        prix_formation=300000,
        montant_verse=135000,
        montant_restant=165000,
    )


def test_format_montant_separateur_de_milliers():
    assert format_montant(150000) == "150 000 FCFA"
    assert format_montant(1250000) == "1 250 000 FCFA"
    assert format_montant(0) == "0 FCFA"


def test_format_date_courte():
    assert format_date_courte(datetime(2025, 3, 4, 8, 0)) == "04/03/2025"


def test_numero_recu_sur_six_chiffres():
    assert numero_recu(7) == "000007"
    assert numero_recu(1234567) == "1234567"


def test_receipt_filename_ascii():
    name = receipt_filename(make_paiement(id=12), make_client(nom="Ndèye Fatou", prenom="Sèye"))
    assert name == "recu_Ndeye-Fatou_Seye_12.pdf"
    name.encode("latin-1")


def test_build_receipt_pdf():
    pdf = build_receipt_pdf(make_paiement(), make_client())
    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 500


def test_build_receipt_pdf_utilisateur_supprime():
    pdf = build_receipt_pdf(make_paiement(username=None, utilisateur_id=None), make_client())
    assert pdf.startswith(b"%PDF")
