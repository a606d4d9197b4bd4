"""
Schéma de réponse des statistiques du tableau de bord.
Les clés sont en camelCase pour rester compatibles avec le front existant.
"""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    totalClients: int
    clientsActifs: int
    totalCours: int
    paiementsAujourdhui: int
    absentsAujourdhui: int
    totalRecettes: int
