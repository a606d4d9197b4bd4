"""
Génération du reçu de paiement au format PDF (reportlab).

Le reçu reprend le paiement (numéro, date, montant, encaissé par) et la
situation financière du client après ce paiement.
"""

import re
import unicodedata
from datetime import datetime
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from formatrack.models.client import Client
from formatrack.schemas.paiement import PaiementResponse

CENTRE_NOM = "FormaTrack - Centre de Formation"


def format_montant(montant: int) -> str:
    """Montant entier en FCFA avec séparateur de milliers : 150000 → '150 000 FCFA'."""
    return f"{montant:,}".replace(",", " ") + " FCFA"


def format_date_courte(value: datetime) -> str:
    return value.strftime("%d/%m/%Y")


def numero_recu(paiement_id: int) -> str:
    return str(paiement_id).zfill(6)


def receipt_filename(paiement: PaiementResponse, client: Client) -> str:
    """Nom du fichier en ASCII (en-tête Content-Disposition) : recu_<nom>_<prenom>_<id>.pdf."""
    def _slug(value: str) -> str:
        ascii_value = unicodedata.normalize("NFKD", value or "").encode("ascii", "ignore").decode("ascii")
        return re.sub(r"[^A-Za-z0-9-]+", "-", ascii_value).strip("-") or "client"

    return f"recu_{_slug(client.nom)}_{_slug(client.prenom)}_{paiement.id}.pdf"


def build_receipt_pdf(paiement: PaiementResponse, client: Client) -> bytes:
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4
    left = 20 * mm
    y = height - 30 * mm

    # En-tête
    c.setFont("Helvetica-Bold", 20)
    c.drawCentredString(width / 2, y, "REÇU DE PAIEMENT")
    y -= 15 * mm
    c.setFont("Helvetica", 12)
    c.drawCentredString(width / 2, y, CENTRE_NOM)

    # Référence
    y -= 25 * mm
    c.setFont("Helvetica", 14)
    c.drawString(left, y, f"Reçu N°: {numero_recu(paiement.id)}")
    y -= 15 * mm
    c.drawString(left, y, f"Date: {format_date_courte(paiement.date_paiement)}")

    # Client
    y -= 25 * mm
    c.drawString(left, y, "INFORMATIONS CLIENT")
    c.setFont("Helvetica", 12)
    for line in (
        f"Nom: {client.nom} {client.prenom}",
        f"Téléphone: {client.telephone_parent or '-'}",
        f"Type: {client.type_formation}",
    ):
        y -= 15 * mm
        c.drawString(left, y, line)

    # Paiement
    y -= 25 * mm
    c.setFont("Helvetica", 14)
    c.drawString(left, y, "DÉTAILS DU PAIEMENT")
    c.setFont("Helvetica", 12)
    for line in (
        f"Montant versé: {format_montant(paiement.montant)}",
        f"Prix total formation: {format_montant(client.prix_formation)}",
        f"Total versé: {format_montant(client.montant_verse)}",
        f"Montant restant: {format_montant(client.montant_restant)}",
    ):
        y -= 15 * mm
        c.drawString(left, y, line)

    # Signature
    y -= 30 * mm
    c.drawString(left, y, "Signature:")
    c.drawString(width / 2 + 15 * mm, y, f"Reçu par: {paiement.username or '-'}")

    c.showPage()
    c.save()
    return buffer.getvalue()
