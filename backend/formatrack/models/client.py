"""
Modèle SQLAlchemy pour les clients (stagiaires et apprenants).

Le solde montant_restant est une colonne générée par la base
(prix_formation - montant_verse) : elle est recalculée à chaque écriture
de l'un des deux opérandes et ne peut jamais être écrite directement.
"""

from sqlalchemy import CheckConstraint, Column, Computed, Date, DateTime, Integer, String, func

from formatrack.database import Base


class Client(Base):
    __tablename__ = "clients"
    __table_args__ = (
        CheckConstraint("prix_formation >= 0", name="ck_clients_prix_positif"),
        CheckConstraint("montant_verse >= 0", name="ck_clients_verse_positif"),
        # Solde jamais négatif, y compris face à un paiement concurrent
        CheckConstraint("montant_verse <= prix_formation", name="ck_clients_solde_positif"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    nom = Column(String(100), nullable=False)
    prenom = Column(String(100), nullable=False)
    localite = Column(String(100), nullable=True)
    telephone_parent = Column(String(30), nullable=True)
    niveau_scolaire = Column(String(100), nullable=True)
    domaine_etude = Column(String(100), nullable=True)
    date_inscription = Column(Date, nullable=False)
    duree_formation = Column(Integer, nullable=True)               # En mois
    type_formation = Column(String(20), nullable=False)            # stagiaire, apprenant
    statut_formation = Column(String(20), nullable=False, default="en_cours")  # en_cours, suspendu, termine
    date_statut_modifie = Column(Date, nullable=True)

    prix_formation = Column(Integer, nullable=False, default=0, server_default="0")
    montant_verse = Column(Integer, nullable=False, default=0, server_default="0")
    montant_restant = Column(Integer, Computed("prix_formation - montant_verse", persisted=True))

    created_at = Column(DateTime, server_default=func.now())
