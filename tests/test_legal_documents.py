"""
Tests for terms & conditions and privacy policy endpoints.
"""

from datetime import date

import pytest

DOCUMENT = {"title": "Terms of Service", "content": "Be nice.", "version": "1.0"}


@pytest.fixture(params=["terms", "privacy"])
def base_url(request):
    return f"/api/{request.param}"


def _create(client, base_url, **overrides):
    response = client.post(base_url, json={**DOCUMENT, **overrides})
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_create_document_defaults(client, base_url):
    document = _create(client, base_url)

    assert document["status"] == "Draft"
    assert document["language"] == "en"
    assert document["createdBy"] == "admin"
    assert document["updatedBy"] == "admin"
    assert document["effectiveDate"] is None


def test_create_messages_name_the_document_kind(client):
    response = client.post("/api/terms", json=DOCUMENT)
    assert response.json()["message"] == "Terms and conditions created successfully"

    response = client.post("/api/privacy", json=DOCUMENT)
    assert response.json()["message"] == "Privacy policy created successfully"


@pytest.mark.parametrize(
    "missing, message",
    [("title", "Title is required"), ("content", "Content is required"), ("version", "Version is required")],
)
def test_create_document_requires_fields(client, base_url, missing, message):
    payload = {**DOCUMENT, missing: "   "}

    response = client.post(base_url, json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == message


def test_list_filters_by_status_and_language(client, base_url):
    _create(client, base_url, status="Active")
    _create(client, base_url, language="fr")
    _create(client, base_url, status="Archived", language="fr")

    body = client.get(base_url, params={"language": "fr"}).json()
    assert len(body["data"]) == 2
    assert body["meta"]["total"] == 2

    body = client.get(base_url, params={"status": "Active"}).json()
    assert [d["status"] for d in body["data"]] == ["Active"]


def test_update_and_delete_document(client, base_url):
    document = _create(client, base_url, createdBy="alice")

    response = client.put(
        f"{base_url}/{document['id']}",
        json={**DOCUMENT, "version": "1.1", "updatedBy": "bob", "status": "Inactive"},
    )
    data = response.json()["data"]
    assert data["version"] == "1.1"
    assert data["status"] == "Inactive"
    assert data["createdBy"] == "alice"
    assert data["updatedBy"] == "bob"

    response = client.delete(f"{base_url}/{document['id']}")
    assert response.status_code == 200
    assert response.json()["message"].endswith("'Terms of Service' deleted successfully")
    assert client.get(f"{base_url}/{document['id']}").status_code == 404


def test_publish_sets_active_and_effective_date(client, base_url):
    document = _create(client, base_url)

    response = client.post(f"{base_url}/{document['id']}/publish")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "Active"
    assert data["effectiveDate"] == date.today().isoformat()
    assert response.json()["message"].endswith("'Terms of Service' published successfully")


def test_publish_with_explicit_date_and_publisher(client, base_url):
    document = _create(client, base_url, status="Inactive")

    response = client.post(
        f"{base_url}/{document['id']}/publish",
        json={"effectiveDate": "2030-01-01", "publishedBy": "legal"},
    )

    data = response.json()["data"]
    assert data["effectiveDate"] == "2030-01-01"
    assert data["updatedBy"] == "legal"


def test_publish_rules(client):
    active = _create(client, "/api/terms", status="Active")
    response = client.post(f"/api/terms/{active['id']}/publish")
    assert response.status_code == 400
    assert response.json()["error"] == "Terms and conditions are already active/published"

    archived = _create(client, "/api/privacy", status="Archived")
    response = client.post(f"/api/privacy/{archived['id']}/publish")
    assert response.status_code == 400
    assert response.json()["error"] == "Archived privacy policy cannot be published"

    response = client.post("/api/privacy/999/publish")
    assert response.status_code == 404
    assert response.json()["error"] == "Privacy policy not found"
