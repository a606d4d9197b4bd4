"""
Tests du service utilisateurs.
"""

from datetime import date, datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy import select

from formatrack.exceptions import ConflictError, NotFoundError, SelfDeletionForbidden
from formatrack.models.client import Client
from formatrack.models.paiement import Paiement
from formatrack.models.user import User
from formatrack.schemas.auth import CurrentUser
from formatrack.schemas.user import UserCreate
from formatrack.security import verify_password
from formatrack.services import user_service


# ============================================================
# Schéma
# ============================================================

def test_user_create_mot_de_passe_trop_court():
    with pytest.raises(ValueError):
        UserCreate(username="caissier", password="123")


def test_user_create_username_vide():
    with pytest.raises(ValueError):
        UserCreate(username="   ", password="secret123")


# ============================================================
# create_user
# ============================================================

def test_create_user_hache_le_mot_de_passe(db):
    user = user_service.create_user(db, UserCreate(username="caissier", password="secret123"))

    assert user.id is not None
    assert user.password_hash != "secret123"
    assert verify_password("secret123", user.password_hash)


def test_create_user_nom_deja_pris(db):
    user_service.create_user(db, UserCreate(username="caissier", password="secret123"))

    with pytest.raises(ConflictError, match="caissier"):
        user_service.create_user(db, UserCreate(username="caissier", password="autre123"))


# ============================================================
# delete_user
# ============================================================

def test_delete_user_soi_meme_refuse_sans_acces_bdd():
    db = MagicMock()
    with pytest.raises(SelfDeletionForbidden):
        user_service.delete_user(db, 1, CurrentUser(id=1, username="admin"))
    db.get.assert_not_called()
    db.delete.assert_not_called()


def test_delete_user_inexistant(db):
    with pytest.raises(NotFoundError):
        user_service.delete_user(db, 999, CurrentUser(id=1, username="admin"))


def test_delete_user_conserve_ses_paiements(db):
    caissier = user_service.create_user(db, UserCreate(username="caissier", password="secret123"))
    client = Client(nom="Diallo", prenom="Awa", type_formation="apprenant", statut_formation="en_cours",
                    date_inscription=date.today(), prix_formation=50000, montant_verse=10000)
    db.add(client)
    db.flush()
    db.add(Paiement(client_id=client.id, montant=10000, date_paiement=datetime.now(),
                    utilisateur_id=caissier.id))
    db.commit()

    user_service.delete_user(db, caissier.id, CurrentUser(id=caissier.id + 1, username="admin"))

    paiement = db.execute(select(Paiement)).scalar_one()
    db.refresh(paiement)
    assert paiement.utilisateur_id is None
    assert db.get(User, caissier.id) is None


# ============================================================
# ensure_default_admin
# ============================================================

def test_ensure_default_admin_cree_le_compte_si_table_vide(db):
    assert user_service.ensure_default_admin(db, "admin", "admin123") is True

    admin = db.execute(select(User)).scalar_one()
    assert admin.username == "admin"
    assert verify_password("admin123", admin.password_hash)


def test_ensure_default_admin_ne_fait_rien_si_un_compte_existe(db):
    user_service.create_user(db, UserCreate(username="caissier", password="secret123"))

    assert user_service.ensure_default_admin(db, "admin", "admin123") is False
    assert [u.username for u in user_service.get_users(db)] == ["caissier"]
