"""
Tests for category and subcategory endpoints, including the denormalized
topicsCount columns.
"""


def test_create_category_defaults_to_active(client):
    response = client.post(
        "/api/categories",
        json={"name": "  Cloud  ", "description": "Cloud security", "status": "Bogus"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Category created successfully"
    assert body["data"]["name"] == "Cloud"
    assert body["data"]["status"] == "Active"
    assert body["data"]["topicsCount"] == 0
    # Dates are reported without a time part
    assert len(body["data"]["createdAt"]) == 10


def test_create_category_requires_name_and_description(client):
    response = client.post("/api/categories", json={"description": "x"})
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Category name is required"}

    response = client.post("/api/categories", json={"name": "Cloud"})
    assert response.status_code == 400
    assert response.json()["error"] == "Category description is required"


def test_list_categories_paginates(client):
    for index in range(3):
        client.post(
            "/api/categories",
            json={"name": f"Category {index}", "description": "desc"},
        )

    response = client.get("/api/categories", params={"page": 2, "limit": 2})

    assert response.status_code == 200
    body = response.json()
    assert [item["name"] for item in body["data"]] == ["Category 2"]
    assert body["pagination"] == {
        "page": 2,
        "limit": 2,
        "total": 3,
        "totalPages": 2,
        "hasNext": False,
        "hasPrev": True,
    }


def test_get_update_and_missing_category(client, category):
    response = client.put(
        f"/api/categories/{category['id']}",
        json={"name": "NetSec", "description": "Updated", "status": "Draft"},
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "Draft"

    response = client.get(f"/api/categories/{category['id']}")
    assert response.json()["data"]["name"] == "NetSec"

    response = client.get("/api/categories/9999")
    assert response.status_code == 404
    assert response.json()["error"] == "Category not found"


def test_delete_category_with_subcategories_is_refused(client, category, subcategory):
    response = client.delete(f"/api/categories/{category['id']}")

    assert response.status_code == 400
    assert "It has 1 subcategories" in response.json()["error"]

    client.delete(f"/api/subcategories/{subcategory['id']}")
    response = client.delete(f"/api/categories/{category['id']}")
    assert response.status_code == 200
    assert response.json()["message"] == "Category 'Network Security' deleted successfully"


def test_category_topics_count_follows_subcategories(client, category):
    other = client.post(
        "/api/categories", json={"name": "Web", "description": "Web apps"}
    ).json()["data"]

    first = client.post(
        "/api/subcategories", json={"name": "IDS", "categoryId": category["id"]}
    ).json()["data"]
    client.post("/api/subcategories", json={"name": "VPN", "categoryId": category["id"]})
    assert client.get(f"/api/categories/{category['id']}").json()["data"]["topicsCount"] == 2

    # Moving a subcategory moves the count with it
    client.put(
        f"/api/subcategories/{first['id']}",
        json={"name": "IDS", "categoryId": other["id"]},
    )
    assert client.get(f"/api/categories/{category['id']}").json()["data"]["topicsCount"] == 1
    assert client.get(f"/api/categories/{other['id']}").json()["data"]["topicsCount"] == 1

    client.delete(f"/api/subcategories/{first['id']}")
    assert client.get(f"/api/categories/{other['id']}").json()["data"]["topicsCount"] == 0


# ==================== Subcategories ====================


def test_create_subcategory_validation(client, category):
    response = client.post("/api/subcategories", json={"categoryId": category["id"]})
    assert response.status_code == 400
    assert response.json()["error"] == "Subcategory name is required"

    response = client.post("/api/subcategories", json={"name": "IDS"})
    assert response.status_code == 400
    assert response.json()["error"] == "Category ID is required"

    response = client.post("/api/subcategories", json={"name": "IDS", "categoryId": 999})
    assert response.status_code == 400
    assert response.json()["error"] == "Category not found"


def test_subcategory_defaults(client, subcategory, category):
    assert subcategory["description"] == "Subcategory description"
    assert subcategory["status"] == "Active"
    assert subcategory["categoryId"] == category["id"]
    assert subcategory["categoryName"] == "Network Security"


def test_list_subcategories_reports_stats(client, category, make_topic):
    ids = []
    for name, status in (("IDS", "Active"), ("VPN", "Draft"), ("Proxy", "Inactive")):
        response = client.post(
            "/api/subcategories",
            json={"name": name, "categoryId": category["id"], "status": status},
        )
        ids.append(response.json()["data"]["id"])
    make_topic(title="Snort", subcategoryId=ids[0])
    make_topic(title="Suricata", subcategoryId=ids[0])

    response = client.get("/api/subcategories", params={"status": "Active"})

    assert response.status_code == 200
    body = response.json()
    assert [item["name"] for item in body["data"]] == ["IDS"]
    assert body["data"][0]["topicsCount"] == 2
    assert body["meta"] == {"total": 1, "page": 1, "limit": 10, "totalPages": 1}
    assert body["stats"] == {
        "total": 3,
        "active": 1,
        "draft": 1,
        "inactive": 1,
        "totalTopics": 2,
        "averageTopicsPerSubcategory": "0.7",
        "categoriesUsed": 1,
    }
    assert body["categories"] == [{"id": category["id"], "name": "Network Security"}]
    assert body["message"] == "Fetched 1 subcategories (page 1)"


def test_delete_missing_subcategory(client):
    response = client.delete("/api/subcategories/42")
    assert response.status_code == 404
    assert response.json()["error"] == "Subcategory not found"
