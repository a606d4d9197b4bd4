"""
Modèles SQLAlchemy pour les présences et le journal des absences/retards.

Une présence est enregistrée à chaque pointage (pas d'unicité par date).
Les absences/retards sont dérivés automatiquement à la création d'une présence.
"""

from sqlalchemy import Column, Date, ForeignKey, Integer, String, Text, Time

from formatrack.database import Base


class Presence(Base):
    __tablename__ = "presences"

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False)
    cours_id = Column(Integer, ForeignKey("cours.id", ondelete="CASCADE"), nullable=False)
    date_presence = Column(Date, nullable=False)
    heure_presence = Column(Time, nullable=True)
    etat = Column(String(10), nullable=False)  # present, absent


class AbsenceRetard(Base):
    """Incident dérivé d'une présence : absence, ou retard après 09:00."""
    __tablename__ = "absences_retards"

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False)
    cours_id = Column(Integer, ForeignKey("cours.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False)
    heure_presence = Column(Time, nullable=True)  # NULL pour une absence
    type = Column(String(10), nullable=False)     # absence, retard
    remarque = Column(Text, nullable=True)
