"""
Tests for per-language homepage content and FAQ management.
"""

import pytest


def _content(**overrides):
    payload = {
        "language": "en",
        "hero": {
            "title": "Learn security",
            "subtitle": "Hands-on labs",
            "ctaText": "Start",
            "ctaLink": "/topics",
        },
        "about": {"title": "About", "content": "Who we are", "features": ["Labs", "Videos"]},
        "contact": {
            "email": "hello@example.com",
            "phone": "+1 555 0100",
            "socialLinks": {"twitter": "https://x.com/example"},
        },
        "faqs": [
            {"question": "Is it free?", "answer": "Partly", "order": 2},
            {"question": "Certificates?", "answer": "Soon", "order": 1, "isActive": False},
            {"question": "", "answer": "dropped"},
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def homepage(client):
    response = client.post("/api/homepage/content", json=_content())
    assert response.status_code == 201
    return response.json()["data"]


def test_create_homepage_content(homepage):
    assert homepage["id"].startswith("homepage_en_")
    assert homepage["language"] == "en"
    assert homepage["version"] == 1
    assert homepage["hero"]["ctaText"] == "Start"
    assert homepage["hero"]["id"].startswith("hero_")
    assert homepage["about"]["features"] == ["Labs", "Videos"]
    assert homepage["contact"]["socialLinks"] == {"twitter": "https://x.com/example"}
    # Blank FAQs are dropped; inactive ones are still returned to the editor
    assert [faq["question"] for faq in homepage["faqs"]] == ["Certificates?", "Is it free?"]
    assert homepage["faqs"][0]["id"].startswith("faq_")


def test_update_bumps_version_and_replaces_faqs(client, homepage):
    response = client.post(
        "/api/homepage/content",
        json=_content(faqs=[{"question": "New?", "answer": "Yes"}]),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["version"] == 2
    assert data["id"] == homepage["id"]
    assert [faq["question"] for faq in data["faqs"]] == ["New?"]


def test_update_without_faqs_keeps_them(client, homepage):
    payload = _content()
    del payload["faqs"]

    data = client.post("/api/homepage/content", json=payload).json()["data"]
    assert len(data["faqs"]) == 2


def test_content_validation_collects_every_error(client):
    response = client.post(
        "/api/homepage/content",
        json={"language": "fr", "hero": {"title": "x"}, "contact": {"email": "not-an-email"}},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Validation failed"
    fields = [(e["field"], e["code"]) for e in body["validationErrors"]]
    assert fields == [
        ("hero.subtitle", "REQUIRED"),
        ("about.title", "REQUIRED"),
        ("about.content", "REQUIRED"),
        ("contact.email", "INVALID_FORMAT"),
    ]


def test_content_rejects_malformed_contact_domain(client):
    payload = _content(contact={"email": "hello@bad..com"})

    response = client.post("/api/homepage/content", json=payload)

    assert response.status_code == 400
    errors = response.json()["validationErrors"]
    assert errors == [
        {"field": "contact.email", "message": "Invalid email format", "code": "INVALID_FORMAT"}
    ]


def test_get_homepage_returns_active_faqs_only(client, homepage):
    response = client.get("/api/homepage/en")

    assert response.status_code == 200
    data = response.json()["data"]
    assert [faq["question"] for faq in data["faqs"]] == ["Is it free?"]


def test_get_homepage_missing_language(client):
    response = client.get("/api/homepage/de")
    assert response.status_code == 404
    assert response.json()["error"] == "Homepage content not found for the specified language"


# ==================== FAQs ====================


def test_create_faq_appends_order(client, homepage):
    response = client.post(
        "/api/homepage/faqs", json={"language": "en", "question": "Refunds?", "answer": "No"}
    )

    assert response.status_code == 201
    faq = response.json()["data"]
    assert faq["order"] == 3
    assert faq["isActive"] is True


def test_create_faq_validation(client, homepage):
    response = client.post("/api/homepage/faqs", json={"language": "en", "answer": "x"})
    assert response.status_code == 400
    assert response.json()["error"] == "Question is required"

    response = client.post(
        "/api/homepage/faqs", json={"language": "es", "question": "q", "answer": "a"}
    )
    assert response.status_code == 404
    assert response.json()["error"] == "Homepage not found for the specified language"


def test_update_faq_by_prefixed_or_numeric_id(client, homepage):
    faq_id = homepage["faqs"][0]["id"]

    response = client.put(f"/api/homepage/faqs/{faq_id}", json={"isActive": True})
    assert response.status_code == 200
    assert response.json()["data"]["isActive"] is True

    numeric = int(faq_id.split("_")[1])
    response = client.put(f"/api/homepage/faqs/{numeric}", json={"answer": "Next year"})
    assert response.json()["data"]["answer"] == "Next year"

    response = client.put(f"/api/homepage/faqs/{numeric}", json={"question": "  "})
    assert response.status_code == 400
    assert response.json()["error"] == "No valid fields to update"


def test_faq_id_must_be_valid(client):
    response = client.put("/api/homepage/faqs/abc", json={"answer": "x"})
    assert response.status_code == 400
    assert response.json()["error"] == "Valid FAQ ID is required"

    response = client.delete("/api/homepage/faqs/faq_999")
    assert response.status_code == 404
    assert response.json()["error"] == "FAQ not found"


def test_delete_faq(client, homepage):
    faq_id = homepage["faqs"][1]["id"]

    response = client.delete(f"/api/homepage/faqs/{faq_id}")
    assert response.json()["data"] == {"deleted": True}
    assert client.get("/api/homepage/en").json()["data"]["faqs"] == []
