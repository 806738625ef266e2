"""
Tests d'intégration API pour les badges alumni.
Testent GET    /api/v1/alumni-badges/user/{user_id}
      GET    /api/v1/alumni-badges/school/{school_id}
      DELETE /api/v1/alumni-badges/{badge_id}
"""

import uuid
from datetime import datetime
from unittest.mock import patch

from yearbook.schemas.alumni import AlumniBadgeResponse
from yearbook.services.exceptions import NotFoundError

SERVICE = "yearbook.routers.alumni_badges.alumni_service"


def make_badge_response(**kwargs) -> AlumniBadgeResponse:
    return AlumniBadgeResponse(
        id=kwargs.get("id", uuid.uuid4()),
        user_id=kwargs.get("user_id", uuid.uuid4()),
        school_id=kwargs.get("school_id", uuid.uuid4()),
        school=kwargs.get("school", "School A"),
        full_name=kwargs.get("full_name", "Ada Obi"),
        admission_year=kwargs.get("admission_year", "2015"),
        graduation_year=kwargs.get("graduation_year", "2019"),
        status=kwargs.get("status", "pending"),
        created_at=kwargs.get("created_at", datetime(2026, 3, 10)),
    )


# --- Lectures ---

def test_badges_utilisateur(client):
    user_id = uuid.uuid4()
    with patch(f"{SERVICE}.list_badges_for_user") as mock:
        mock.return_value = [make_badge_response(user_id=user_id), make_badge_response(status="verified")]
        response = client.get(f"/api/v1/alumni-badges/user/{user_id}")

    assert response.status_code == 200
    assert [b["status"] for b in response.json()] == ["pending", "verified"]


def test_badges_ecole_verifies_uniquement(client):
    school_id = uuid.uuid4()
    with patch(f"{SERVICE}.list_badges_for_school", return_value=[]) as mock:
        response = client.get(f"/api/v1/alumni-badges/school/{school_id}?verified_only=true")

    assert response.status_code == 200
    assert response.json() == []
    assert mock.call_args.kwargs["verified_only"] is True


def test_badges_ecole_id_invalide(client):
    response = client.get("/api/v1/alumni-badges/school/not-a-uuid")
    assert response.status_code == 422


# --- Suppression ---

def test_suppression_succes(client):
    badge_id, user_id = uuid.uuid4(), uuid.uuid4()
    with patch(f"{SERVICE}.delete_badge") as mock:
        response = client.delete(f"/api/v1/alumni-badges/{badge_id}?acting_user_id={user_id}")

    assert response.status_code == 204
    mock.assert_called_once_with(mock.call_args.args[0], badge_id, user_id)


def test_suppression_badge_introuvable(client):
    with patch(f"{SERVICE}.delete_badge", side_effect=NotFoundError("Alumni badge not found.")):
        response = client.delete(f"/api/v1/alumni-badges/{uuid.uuid4()}?acting_user_id={uuid.uuid4()}")

    assert response.status_code == 404


def test_suppression_sans_utilisateur(client):
    response = client.delete(f"/api/v1/alumni-badges/{uuid.uuid4()}")
    assert response.status_code == 422


def test_suppression_puis_nouvelle_demande_bloquee(db_client, viewer, school_a):
    """Supprimer un badge interdit une nouvelle demande vers la même école."""
    payload = {
        "user_id": str(viewer.id), "school_id": str(school_a.id), "full_name": "Ada Obi",
        "admission_year": "2015", "graduation_year": "2019",
    }
    assert db_client.post("/api/v1/alumni-requests", json=payload).status_code == 201
    badge_id = db_client.get(f"/api/v1/alumni-badges/user/{viewer.id}").json()[0]["id"]

    deleted = db_client.delete(f"/api/v1/alumni-badges/{badge_id}?acting_user_id={viewer.id}")
    assert deleted.status_code == 204

    # La demande pending existe toujours : le doublon est signalé en premier
    retry = db_client.post("/api/v1/alumni-requests", json=payload)
    assert retry.status_code == 409
