"""
Modèles SQLAlchemy pour les cours et leurs inscriptions.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from formatrack.database import Base


class Cours(Base):
    __tablename__ = "cours"

    id = Column(Integer, primary_key=True, autoincrement=True)
    intitule = Column(String(200), nullable=False)
    enseignant = Column(String(150), nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class CoursClient(Base):
    """Association cours ↔ clients inscrits (paire unique)."""
    __tablename__ = "cours_clients"

    cours_id = Column(Integer, ForeignKey("cours.id", ondelete="CASCADE"), primary_key=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), primary_key=True)
