"""
Tests for topic status actions, duplication and export/import.
"""

import csv
import io


def test_toggle_status_cycles(client, make_topic):
    topic = make_topic()
    url = f"/api/topics/{topic['id']}/toggle-status"

    first = client.post(url).json()["data"]
    assert first["status"] == "published"
    assert first["publishedAt"] is not None

    assert client.post(url).json()["data"]["status"] == "archived"
    third = client.post(url).json()["data"]
    assert third["status"] == "draft"
    # The first publication date is kept
    assert third["publishedAt"] == first["publishedAt"]


def test_toggle_featured(client, make_topic):
    topic = make_topic()
    url = f"/api/topics/{topic['id']}/toggle-featured"

    assert client.post(url).json()["data"]["isFeatured"] is True
    assert client.post(url).json()["data"]["isFeatured"] is False


def test_publish_and_archive(client, make_topic):
    topic = make_topic()

    response = client.post(f"/api/topics/{topic['id']}/publish")
    assert response.status_code == 200
    assert response.json()["message"] == "Topic published successfully"
    published_at = response.json()["data"]["publishedAt"]
    assert published_at is not None

    response = client.post(f"/api/topics/{topic['id']}/publish")
    assert response.status_code == 404
    assert response.json()["error"] == "Topic not found or already published"

    response = client.post(f"/api/topics/{topic['id']}/archive")
    assert response.json()["data"]["status"] == "archived"
    assert client.post(f"/api/topics/{topic['id']}/archive").status_code == 404

    # Re-publishing an archived topic keeps the original date
    response = client.post(f"/api/topics/{topic['id']}/publish")
    assert response.json()["data"]["publishedAt"] == published_at


def test_actions_on_missing_topic(client):
    assert client.post("/api/topics/77/toggle-status").status_code == 404
    assert client.post("/api/topics/77/publish").status_code == 404
    assert client.post("/api/topics/77/duplicate").status_code == 404


def test_duplicate_copies_tree_as_draft(client, make_topic):
    topic = make_topic(
        title="Original",
        status="published",
        isFeatured=True,
        tags=["a"],
        modules=[{"title": "m1", "videos": [{"title": "v1", "duration": 2}]}],
    )

    response = client.post(f"/api/topics/{topic['id']}/duplicate")

    assert response.status_code == 201
    copy = response.json()["data"]
    assert copy["id"] != topic["id"]
    assert copy["title"] == "Original (Copy)"
    assert copy["slug"] == "original-copy"
    assert copy["status"] == "draft"
    assert copy["isFeatured"] is False
    assert copy["publishedAt"] is None
    assert copy["tags"] == ["a"]
    assert copy["durationMinutes"] == 2
    assert [m["title"] for m in copy["modules"]] == ["m1"]
    video = copy["modules"][0]["videos"][0]
    assert video["title"] == "v1"
    assert video["durationSeconds"] == 120
    assert video["id"] != topic["modules"][0]["videos"][0]["id"]

    # A second copy gets a fresh slug
    again = client.post(f"/api/topics/{topic['id']}/duplicate").json()["data"]
    assert again["slug"] == "original-copy-1"


# ==================== Export / Import ====================


def test_export_json(client, make_topic, category):
    make_topic(title="One", categoryId=category["id"], tags=["x", "y"])
    make_topic(title="Two", status="published")

    body = client.get("/api/topics/export").json()
    assert body["success"] is True
    assert body["count"] == 2
    assert "exportedAt" in body
    rows = {row["title"]: row for row in body["data"]}
    assert rows["One"]["category"] == "Network Security"
    assert rows["One"]["tags"] == ["x", "y"]
    assert rows["Two"]["category"] is None

    body = client.get("/api/topics/export", params={"status": "published"}).json()
    assert [row["title"] for row in body["data"]] == ["Two"]


def test_export_csv(client, make_topic):
    make_topic(title="One, with comma", tags=["x", "y"])

    response = client.get("/api/topics/export", params={"format": "csv"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "topics-export.csv" in response.headers["content-disposition"]
    rows = list(csv.DictReader(io.StringIO(response.text)))
    assert len(rows) == 1
    assert rows[0]["title"] == "One, with comma"
    assert rows[0]["tags"] == "x;y"
    assert rows[0]["isFeatured"] == "false"
    assert rows[0]["publishedAt"] == ""


def test_import_reports_each_item(client, category):
    response = client.post(
        "/api/topics/import",
        json={
            "topics": [
                {"title": "Imported", "category": "Network Security", "tags": ["t"]},
                {"description": "no title"},
                {"title": "Bad", "difficulty": "expert"},
                {"title": "Typed", "price": "free"},
                {"title": "Imported"},
            ]
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Import completed: 2 imported, 3 failed"
    data = body["data"]
    assert [r["slug"] for r in data["results"]] == ["imported", "imported-1"]
    assert [r["index"] for r in data["results"]] == [0, 4]
    errors = {e["index"]: e["error"] for e in data["errors"]}
    assert errors[1] == "Title is required"
    assert errors[2] == "Invalid difficulty level"
    assert errors[3].startswith("price")

    topic = client.get(f"/api/topics/{data['results'][0]['id']}").json()["data"]
    assert topic["categoryId"] == category["id"]


def test_import_requires_topics_array(client):
    response = client.post("/api/topics/import", json={})
    assert response.status_code == 400
    assert response.json()["error"] == "Topics array is required"
