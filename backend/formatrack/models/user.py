"""
Modèle SQLAlchemy pour les utilisateurs (administrateurs du centre).
Aucun rôle : tout utilisateur authentifié a accès à l'ensemble de l'application.
"""

from sqlalchemy import Column, DateTime, Integer, String, func

from formatrack.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
