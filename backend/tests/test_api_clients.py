"""
Tests d'intégration API pour les clients.
Testent les URLs, les codes HTTP, la validation et le format des réponses.
"""

from datetime import date, datetime
from unittest.mock import patch

from sqlalchemy.exc import DataError, IntegrityError

from formatrack.exceptions import NotFoundError, ValidationError
from formatrack.models.client import Client
from formatrack.schemas.paiement import PaiementResponse
from formatrack.schemas.presence import AbsenceRetardResponse


# --- Helper ---

def make_client(**kwargs) -> Client:
    prix = kwargs.get("prix_formation", 300000)
    verse = kwargs.get("montant_verse", 0)
    return Client(
        id=kwargs.get("id", 1),
        nom=kwargs.get("nom", "Diallo"),
        prenom=kwargs.get("prenom", "Aminata"),
        localite=kwargs.get("localite", "Thiès"),
        telephone_parent=kwargs.get("telephone_parent", "770000000"),
        niveau_scolaire=None,
        domaine_etude=None,
        date_inscription=date.today(),
        duree_formation=kwargs.get("duree_formation", 12),
        type_formation=kwargs.get("type_formation", "apprenant"),
        statut_formation=kwargs.get("statut_formation", "en_cours"),
        date_statut_modifie=date.today(),
        prix_formation=prix,
        montant_verse=verse,
        montant_restant=prix - verse,
        created_at=datetime.now(),
    )


def client_payload(**kwargs) -> dict:
    data = {
        "nom": "Diallo",
        "prenom": "Aminata",
        "type_formation": "apprenant",
        "prix_formation": 300000,
        "montant_verse": 0,
    }
    data.update(kwargs)
    return data


# ============================================================
# POST /api/clients
# ============================================================

def test_create_client_succes(client):
    """Inscription valide → 201 avec le solde calculé."""
    with patch("formatrack.routers.clients.client_service.create_client") as mock:
        mock.return_value = make_client(prix_formation=300000, montant_verse=50000)
        response = client.post("/api/clients", json=client_payload(montant_verse=50000))

    assert response.status_code == 201
    data = response.json()
    assert data["nom"] == "Diallo"
    assert data["montant_restant"] == 250000


def test_create_client_nom_vide(client):
    """Nom vide → 400 avec le nom du champ dans le message."""
    response = client.post("/api/clients", json=client_payload(nom="  "))
    assert response.status_code == 400
    assert "nom" in response.json()["error"]


def test_create_client_type_invalide(client):
    response = client.post("/api/clients", json=client_payload(type_formation="alternant"))
    assert response.status_code == 400


def test_create_client_montant_restant_refuse(client):
    """Le solde ne peut pas être fourni par l'appelant."""
    response = client.post("/api/clients", json=client_payload(montant_restant=1))
    assert response.status_code == 400
    assert "montant_restant" in response.json()["error"]


def test_create_client_body_manquant(client):
    response = client.post("/api/clients")
    assert response.status_code == 400


# ============================================================
# GET /api/clients, GET /api/clients/{id}
# ============================================================

def test_list_clients_succes(client):
    with patch("formatrack.routers.clients.client_service.get_clients") as mock:
        mock.return_value = [make_client(id=1), make_client(id=2)]
        response = client.get("/api/clients")

    assert response.status_code == 200
    assert len(response.json()) == 2
    assert "montant_restant" in response.json()[0]


def test_get_client_succes(client):
    with patch("formatrack.routers.clients.client_service.get_client") as mock:
        mock.return_value = make_client(id=7, nom="Sow")
        response = client.get("/api/clients/7")

    assert response.status_code == 200
    assert response.json()["id"] == 7
    assert response.json()["nom"] == "Sow"


def test_get_client_introuvable(client):
    with patch("formatrack.routers.clients.client_service.get_client") as mock:
        mock.side_effect = NotFoundError("Client introuvable.")
        response = client.get("/api/clients/999")

    assert response.status_code == 404
    assert response.json() == {"error": "Client introuvable."}


def test_get_client_id_non_numerique(client):
    response = client.get("/api/clients/abc")
    assert response.status_code == 400


def test_get_client_id_hors_bornes(client):
    """Un identifiant qui ne tient pas dans une colonne INTEGER est refusé avant la base."""
    with patch("formatrack.routers.clients.client_service.get_client") as mock:
        response = client.get(f"/api/clients/{10**20}")

    assert response.status_code == 400
    assert "client_id" in response.json()["error"]
    mock.assert_not_called()


def test_create_client_montant_hors_bornes(client):
    with patch("formatrack.routers.clients.client_service.create_client") as mock:
        response = client.post("/api/clients", json=client_payload(prix_formation=10**20))

    assert response.status_code == 400
    assert "prix_formation" in response.json()["error"]
    mock.assert_not_called()


# ============================================================
# PUT /api/clients/{id}
# ============================================================

def test_update_client_partiel(client):
    """Seuls les champs fournis sont transmis au service."""
    with patch("formatrack.routers.clients.client_service.update_client") as mock:
        mock.return_value = make_client(nom="Sow")
        response = client.put("/api/clients/1", json={"nom": "Sow"})

    assert response.status_code == 200
    data = mock.call_args[0][2]
    assert data.model_dump(exclude_unset=True) == {"nom": "Sow"}


def test_update_client_champ_inconnu(client):
    """Un nom de colonne arbitraire n'est jamais accepté."""
    response = client.put("/api/clients/1", json={"nom": "Sow", "id; DROP TABLE clients": 1})
    assert response.status_code == 400
    assert "error" in response.json()


def test_update_client_solde_negatif(client):
    with patch("formatrack.routers.clients.client_service.update_client") as mock:
        mock.side_effect = ValidationError("Le montant versé ne peut pas dépasser le prix de la formation.")
        response = client.put("/api/clients/1", json={"prix_formation": 10})

    assert response.status_code == 400


# ============================================================
# DELETE /api/clients/{id}
# ============================================================

def test_delete_client_succes(client):
    with patch("formatrack.routers.clients.client_service.delete_client") as mock:
        mock.return_value = None
        response = client.delete("/api/clients/1")

    assert response.status_code == 200
    assert response.json() == {"message": "Client supprimé avec succès"}


def test_delete_client_introuvable(client):
    with patch("formatrack.routers.clients.client_service.delete_client") as mock:
        mock.side_effect = NotFoundError("Client introuvable.")
        response = client.delete("/api/clients/999")

    assert response.status_code == 404


# ============================================================
# Historique d'un client
# ============================================================

def test_list_client_paiements(client):
    with patch("formatrack.routers.clients.paiement_service.get_client_paiements") as mock:
        mock.return_value = [PaiementResponse(
            id=3, client_id=1, montant=10000, date_paiement=datetime.now(),
            utilisateur_id=1, username="admin",
        )]
        response = client.get("/api/clients/1/paiements")

    assert response.status_code == 200
    assert response.json()[0]["montant"] == 10000
    assert response.json()[0]["username"] == "admin"


def test_list_client_absences_retards(client):
    with patch("formatrack.routers.clients.absence_service.get_client_absences_retards") as mock:
        mock.return_value = [AbsenceRetardResponse(
            id=1, client_id=1, cours_id=2, date=date.today(),
            heure_presence=None, type="absence", remarque=None, cours_nom="Couture",
        )]
        response = client.get("/api/clients/1/absences-retards")

    assert response.status_code == 200
    assert response.json()[0]["type"] == "absence"
    assert response.json()[0]["cours_nom"] == "Couture"


# ============================================================
# Erreurs remontées par la base
# ============================================================

def test_doublon_en_base_retourne_409(client):
    with patch("formatrack.routers.clients.client_service.create_client") as mock:
        mock.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: clients.id"))
        response = client.post("/api/clients", json=client_payload())

    assert response.status_code == 409


def test_cle_etrangere_violee_retourne_400(client):
    """Seules les violations d'unicité sont des conflits."""
    with patch("formatrack.routers.clients.client_service.create_client") as mock:
        mock.side_effect = IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))
        response = client.post("/api/clients", json=client_payload())

    assert response.status_code == 400
    assert response.json()["error"] != "Cette entrée existe déjà."


def test_valeur_hors_bornes_en_base_retourne_400(client):
    with patch("formatrack.routers.clients.client_service.create_client") as mock:
        mock.side_effect = DataError("INSERT", {}, Exception("integer out of range"))
        response = client.post("/api/clients", json=client_payload())

    assert response.status_code == 400
