"""
Tests for topic CRUD, nested module/video upsert and listing shortcuts.
"""

from sqlalchemy.exc import SQLAlchemyError

from app.services.duration import DurationService


def _tree(topic):
    return [
        (module["title"], [video["title"] for video in module["videos"]])
        for module in topic["modules"]
    ]


# ==================== Create ====================


def test_create_topic_defaults(client, make_topic):
    topic = make_topic(title="Intro to Firewalls!")

    assert topic["slug"] == "intro-to-firewalls"
    assert topic["status"] == "draft"
    assert topic["difficulty"] == "beginner"
    assert topic["isFree"] is True
    assert topic["isFeatured"] is False
    assert topic["featured"] is False
    assert topic["tags"] == []
    assert topic["publishedAt"] is None
    assert topic["modules"] == []
    assert topic["rating"] == 0.0


def test_create_topic_requires_title(client):
    response = client.post("/api/topics", json={"description": "no title"})
    assert response.status_code == 400
    assert response.json()["error"] == "Title is required"


def test_create_topic_rejects_invalid_enums(client):
    response = client.post("/api/topics", json={"title": "x", "status": "live"})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid status"

    response = client.post("/api/topics", json={"title": "x", "difficulty": "expert"})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid difficulty level"


def test_create_topic_rejects_malformed_body(client):
    response = client.post("/api/topics", json={"title": "x", "price": -5})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert body["details"][0]["field"] == "price"


def test_duplicate_titles_get_unique_slugs(make_topic):
    assert make_topic(title="Intro")["slug"] == "intro"
    assert make_topic(title="Intro")["slug"] == "intro-1"
    assert make_topic(title="Intro")["slug"] == "intro-2"


def test_published_topic_gets_published_at(make_topic):
    topic = make_topic(title="Live", status="published")
    assert topic["publishedAt"] is not None


def test_duration_in_hours_is_stored_as_minutes(make_topic):
    topic = make_topic(title="Long read", duration="1.5")
    assert topic["durationMinutes"] == 90
    assert topic["duration"] == 1.5


def test_category_resolved_by_name(make_topic, category, subcategory):
    topic = make_topic(title="Zones", category="network-security", subcategory="fire")

    assert topic["categoryId"] == category["id"]
    assert topic["subcategoryId"] == subcategory["id"]
    assert topic["categoryName"] == "Network Security"
    assert topic["category"] == str(category["id"])


def test_unknown_category_name_is_left_unset(make_topic, category):
    topic = make_topic(title="Zones", category="Quantum Cooking")
    assert topic["categoryId"] is None


def test_unknown_numeric_category_is_rejected(client):
    response = client.post("/api/topics", json={"title": "x", "categoryId": 404})
    assert response.status_code == 400
    assert response.json()["error"] == "Category not found"


def test_create_topic_with_modules_and_videos(make_topic):
    topic = make_topic(
        title="Packet Filtering",
        modules=[
            {
                "title": "Basics",
                "videos": [
                    {"title": "What is a packet", "duration": 2.5},
                    {"title": "Rules", "durationSeconds": 200},
                    {"title": "   "},
                ],
            },
            {"title": "", "videos": [{"title": "ignored"}]},
            {"title": "Advanced", "videos": [{"title": "Stateful", "duration": 10}]},
        ],
    )

    assert _tree(topic) == [
        ("Basics", ["What is a packet", "Rules"]),
        ("Advanced", ["Stateful"]),
    ]
    basics, advanced = topic["modules"]
    assert [v["durationSeconds"] for v in basics["videos"]] == [150, 200]
    # 350 seconds is 5 whole minutes
    assert basics["durationMinutes"] == 5
    assert advanced["durationMinutes"] == 10
    assert topic["durationMinutes"] == 15
    assert [m["orderIndex"] for m in topic["modules"]] == [1, 3]


# ==================== Read / Update ====================


def test_get_missing_topic(client):
    response = client.get("/api/topics/123")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Topic not found"}


def test_update_topic_scalars_and_slug(client, make_topic):
    topic = make_topic(title="Old title")
    make_topic(title="New title")

    response = client.put(
        f"/api/topics/{topic['id']}",
        json={"title": "New title", "tags": ["nmap", "recon"], "isFree": False, "price": 19.99},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["slug"] == "new-title-1"
    assert data["tags"] == ["nmap", "recon"]
    assert data["isFree"] is False
    assert data["price"] == 19.99


def test_update_topic_keeps_slug_when_title_unchanged(client, make_topic):
    topic = make_topic(title="Stable")
    response = client.put(
        f"/api/topics/{topic['id']}", json={"title": "Stable", "description": "new"}
    )
    assert response.json()["data"]["slug"] == "stable"


def test_update_topic_with_nothing_to_change(client, make_topic):
    topic = make_topic()
    response = client.put(f"/api/topics/{topic['id']}", json={"unknown": 1})
    assert response.status_code == 400
    assert response.json()["error"] == "No valid fields to update"


def test_update_reconciles_modules_and_videos(client, make_topic):
    topic = make_topic(
        title="Recon",
        modules=[
            {"title": "Keep", "videos": [{"title": "v1", "duration": 1}, {"title": "v2", "duration": 2}]},
            {"title": "Drop", "videos": [{"title": "gone", "duration": 4}]},
        ],
    )
    keep = topic["modules"][0]
    v1, v2 = keep["videos"]

    response = client.put(
        f"/api/topics/{topic['id']}",
        json={
            "modules": [
                {
                    "id": keep["id"],
                    "title": "Kept",
                    "videos": [
                        {"id": v2["id"], "title": "v2 renamed", "duration": 3},
                        {"id": "new-123", "title": "v3", "duration": 5},
                        {"id": 99999, "title": "not ours"},
                    ],
                },
                {"id": "new-abc", "videos": [{"title": "fresh", "duration": 1}]},
                {"id": "garbage", "title": "skipped"},
            ]
        },
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert _tree(data) == [
        ("Kept", ["v2 renamed", "v3"]),
        ("Untitled Module", ["fresh"]),
    ]
    kept = data["modules"][0]
    assert kept["id"] == keep["id"]
    assert kept["videos"][0]["id"] == v2["id"]
    assert v1["id"] not in [video["id"] for video in kept["videos"]]
    assert kept["durationMinutes"] == 8
    assert data["durationMinutes"] == 9


def test_update_with_empty_module_list_removes_children(client, make_topic):
    topic = make_topic(modules=[{"title": "m", "videos": [{"title": "v", "duration": 3}]}])

    response = client.put(f"/api/topics/{topic['id']}", json={"modules": []})

    data = response.json()["data"]
    assert data["modules"] == []
    assert data["durationMinutes"] == 0


def test_update_to_published_sets_published_at(client, make_topic):
    topic = make_topic()
    assert topic["publishedAt"] is None

    response = client.put(f"/api/topics/{topic['id']}", json={"status": "published"})

    data = response.json()["data"]
    assert data["status"] == "published"
    assert data["publishedAt"] is not None

    # A later update keeps the first publication date
    response = client.put(f"/api/topics/{topic['id']}", json={"description": "again"})
    assert response.json()["data"]["publishedAt"] == data["publishedAt"]


def test_failed_reconcile_keeps_scalars_and_children(client, make_topic, monkeypatch):
    topic = make_topic(
        title="Atomic",
        description="old",
        modules=[{"title": "m1", "videos": [{"title": "v1", "duration": 2}]}],
    )
    module = topic["modules"][0]

    def broken_recompute(self, topic_id):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(DurationService, "recompute_tree", broken_recompute)

    response = client.put(
        f"/api/topics/{topic['id']}",
        json={
            "description": "new",
            "modules": [
                {"id": module["id"], "title": "renamed", "videos": []},
                {"id": "new-1", "title": "m2", "videos": [{"title": "v2", "duration": 1}]},
            ],
        },
    )

    assert response.status_code == 500
    assert response.json()["success"] is False

    data = client.get(f"/api/topics/{topic['id']}").json()["data"]
    assert data["description"] == "new"
    assert _tree(data) == [("m1", ["v1"])]
    assert data["modules"][0]["videos"][0]["id"] == module["videos"][0]["id"]
    assert data["durationMinutes"] == 2


def test_subcategory_topic_count_follows_topics(client, category, subcategory, make_topic):
    other = client.post(
        "/api/subcategories", json={"name": "IDS", "categoryId": category["id"]}
    ).json()["data"]

    topic = make_topic(subcategoryId=subcategory["id"])
    assert client.get(f"/api/subcategories/{subcategory['id']}").json()["data"]["topicsCount"] == 1

    client.put(f"/api/topics/{topic['id']}", json={"subcategoryId": other["id"]})
    assert client.get(f"/api/subcategories/{subcategory['id']}").json()["data"]["topicsCount"] == 0
    assert client.get(f"/api/subcategories/{other['id']}").json()["data"]["topicsCount"] == 1

    client.delete(f"/api/topics/{topic['id']}")
    assert client.get(f"/api/subcategories/{other['id']}").json()["data"]["topicsCount"] == 0


# ==================== Delete ====================


def test_delete_topic(client, make_topic):
    topic = make_topic(modules=[{"title": "m", "videos": [{"title": "v"}]}])

    response = client.delete(f"/api/topics/{topic['id']}")
    assert response.status_code == 200
    assert response.json()["data"] == {"deleted": True}
    assert client.get(f"/api/topics/{topic['id']}").status_code == 404


def test_bulk_delete(client, make_topic):
    ids = [make_topic(title=f"t{i}")["id"] for i in range(3)]

    response = client.request("DELETE", "/api/topics/bulk-delete", json={"ids": ids[:2] + [999]})
    assert response.json()["data"] == {"deletedCount": 2}

    response = client.request("DELETE", "/api/topics/bulk-delete", json={"ids": []})
    assert response.status_code == 400
    assert response.json()["error"] == "Array of topic IDs is required"


# ==================== Listing ====================


def test_list_topics_with_filters(client, make_topic):
    make_topic(title="Alpha", status="published", isFeatured=True, tags=["web"])
    make_topic(title="Beta", status="published", difficulty="advanced")
    make_topic(title="Gamma")

    body = client.get("/api/topics", params={"status": "published"}).json()
    assert sorted(t["title"] for t in body["data"]) == ["Alpha", "Beta"]
    assert body["pagination"]["totalCount"] == 2
    assert body["pagination"]["currentPage"] == 1

    body = client.get("/api/topics", params={"featured": "true"}).json()
    assert [t["title"] for t in body["data"]] == ["Alpha"]

    body = client.get("/api/topics", params={"tag": "web"}).json()
    assert [t["title"] for t in body["data"]] == ["Alpha"]

    body = client.get("/api/topics", params={"search": "amm"}).json()
    assert [t["title"] for t in body["data"]] == ["Gamma"]

    body = client.get("/api/topics", params={"sortBy": "title", "sortOrder": "asc"}).json()
    assert [t["title"] for t in body["data"]] == ["Alpha", "Beta", "Gamma"]


def test_search_requires_query_and_matches_content(client, make_topic):
    make_topic(title="Hidden", status="published", content="all about honeypots")
    make_topic(title="Draft honeypots")

    response = client.get("/api/topics/search")
    assert response.status_code == 400
    assert response.json()["error"] == "Search query is required"

    body = client.get("/api/topics/search", params={"q": "honeypot"}).json()
    assert [t["title"] for t in body["data"]] == ["Hidden"]


def test_listing_shortcuts(client, make_topic, category):
    make_topic(title="Free", status="published", categoryId=category["id"])
    make_topic(title="Paid", status="published", isFree=False, price=10, difficulty="advanced")
    make_topic(title="Draft", isFeatured=True)

    def titles(path, **params):
        return sorted(t["title"] for t in client.get(path, params=params).json()["data"])

    assert titles("/api/topics/published") == ["Free", "Paid"]
    assert titles("/api/topics/draft") == ["Draft"]
    assert titles("/api/topics/featured") == []
    assert titles("/api/topics/free") == ["Free"]
    assert titles("/api/topics/paid") == ["Paid"]
    assert titles("/api/topics/difficulty/advanced") == ["Paid"]
    assert titles(f"/api/topics/category/{category['id']}") == ["Free"]
    assert titles(f"/api/topics/category/{category['id']}", status="draft") == []

    response = client.get("/api/topics/difficulty/expert")
    assert response.status_code == 400


def test_list_titles_and_counts(client, make_topic):
    make_topic(title="B", status="published", isFeatured=True)
    make_topic(title="A", status="published")
    make_topic(title="C", status="archived")
    make_topic(title="D")

    body = client.get("/api/topics/list").json()
    assert [t["title"] for t in body["data"]] == ["A", "B"]
    assert set(body["data"][0]) == {"id", "title", "slug", "status"}

    body = client.get("/api/topics/count").json()
    assert body["data"] == {
        "total": 4,
        "published": 2,
        "drafts": 1,
        "archived": 1,
        "featured": 1,
    }
