"""
Statistiques du tableau de bord, calculées à la demande (aucun cache).
"""

from datetime import date, datetime, time, timedelta

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from formatrack.models.client import Client
from formatrack.models.cours import Cours
from formatrack.models.paiement import Paiement
from formatrack.models.presence import AbsenceRetard
from formatrack.schemas.dashboard import DashboardStats


def get_stats(db: Session) -> DashboardStats:
    """
    Agrège en une seule session :
    clients (total / en cours), cours, recettes du jour, absences du jour, recettes totales.
    """
    today = date.today()
    debut_jour = datetime.combine(today, time.min)
    fin_jour = debut_jour + timedelta(days=1)

    total_clients = db.execute(
        select(func.count()).select_from(Client)
    ).scalar() or 0

    clients_actifs = db.execute(
        select(func.count()).select_from(Client)
        .where(Client.statut_formation == "en_cours")
    ).scalar() or 0

    total_cours = db.execute(
        select(func.count()).select_from(Cours)
    ).scalar() or 0

    paiements_jour = db.execute(
        select(func.coalesce(func.sum(Paiement.montant), 0))
        .where(Paiement.date_paiement >= debut_jour, Paiement.date_paiement < fin_jour)
    ).scalar() or 0

    absents_jour = db.execute(
        select(func.count()).select_from(AbsenceRetard)
        .where(AbsenceRetard.date == today, AbsenceRetard.type == "absence")
    ).scalar() or 0

    total_recettes = db.execute(
        select(func.coalesce(func.sum(Paiement.montant), 0))
    ).scalar() or 0

    return DashboardStats(
        totalClients=total_clients,
        clientsActifs=clients_actifs,
        totalCours=total_cours,
        paiementsAujourdhui=int(paiements_jour),
        absentsAujourdhui=absents_jour,
        totalRecettes=int(total_recettes),
    )
