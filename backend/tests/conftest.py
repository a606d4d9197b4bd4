"""
Configuration partagée pour tous les tests.

Les variables d'environnement sont fixées avant tout import de formatrack :
base SQLite en mémoire (aucune connexion PostgreSQL) et bcrypt au coût minimal.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

from formatrack.database import Base, SessionLocal, engine, get_db  # noqa: E402
from formatrack.dependencies import get_current_user  # noqa: E402
from formatrack.main import app  # noqa: E402
from formatrack.schemas.auth import CurrentUser  # noqa: E402

CURRENT_USER = CurrentUser(id=1, username="admin")


@pytest.fixture
def client():
    """Client HTTP de test avec la BDD mockée et un utilisateur déjà authentifié."""
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    app.dependency_overrides[get_current_user] = lambda: CURRENT_USER
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client():
    """Client HTTP de test avec la BDD mockée, sans contournement du contrôle d'accès."""
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    """Session sur la base SQLite en mémoire, schéma recréé à chaque test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def live_client(db):
    """
    Client HTTP branché sur la vraie base SQLite.
    Le démarrage de l'application crée le compte admin / admin123.
    """
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers(live_client):
    """En-tête Authorization obtenu par une vraie connexion du compte admin."""
    response = live_client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
