"""
Modèle SQLAlchemy pour les paiements.
Immuables : aucune modification ni suppression après création.
"""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer

from formatrack.database import Base


class Paiement(Base):
    __tablename__ = "paiements"
    __table_args__ = (CheckConstraint("montant > 0", name="ck_paiements_montant_positif"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False)
    montant = Column(Integer, nullable=False)
    date_paiement = Column(DateTime, nullable=False)
    # SET NULL : un paiement survit à la suppression de l'utilisateur qui l'a encaissé
    utilisateur_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
