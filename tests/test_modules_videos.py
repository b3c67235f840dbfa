"""
Tests for module and video endpoints nested under a topic.
"""

import pytest


@pytest.fixture
def topic(make_topic):
    return make_topic(title="Web Security")


@pytest.fixture
def modules_url(topic):
    return f"/api/topics/{topic['id']}/modules"


@pytest.fixture
def module(client, modules_url):
    response = client.post(modules_url, json={"title": "Injection"})
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
def videos_url(modules_url, module):
    return f"{modules_url}/{module['id']}/videos"


def _topic_minutes(client, topic):
    return client.get(f"/api/topics/{topic['id']}").json()["data"]["durationMinutes"]


# ==================== Modules ====================


def test_create_module_appends_in_order(client, modules_url, module):
    assert module["orderIndex"] == 1
    assert module["isActive"] is True

    second = client.post(modules_url, json={"title": "XSS"}).json()["data"]
    assert second["orderIndex"] == 2

    listed = client.get(modules_url).json()["data"]
    assert [m["title"] for m in listed] == ["Injection", "XSS"]


def test_create_module_validation(client, modules_url):
    response = client.post(modules_url, json={"title": "  "})
    assert response.status_code == 400
    assert response.json()["error"] == "Module title is required"

    response = client.post("/api/topics/999/modules", json={"title": "x"})
    assert response.status_code == 404
    assert response.json()["error"] == "Topic not found"


def test_module_duration_rolls_up_to_topic(client, topic, modules_url):
    client.post(modules_url, json={"title": "a", "durationMinutes": 12})
    created = client.post(modules_url, json={"title": "b", "durationMinutes": 8}).json()["data"]
    assert _topic_minutes(client, topic) == 20

    client.put(f"{modules_url}/{created['id']}", json={"durationMinutes": 3})
    assert _topic_minutes(client, topic) == 15

    client.delete(f"{modules_url}/{created['id']}")
    assert _topic_minutes(client, topic) == 12


def test_update_module(client, modules_url, module):
    response = client.put(
        f"{modules_url}/{module['id']}",
        json={"title": "SQL Injection", "isActive": False},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "SQL Injection"
    assert data["isActive"] is False

    response = client.put(f"{modules_url}/{module['id']}", json={})
    assert response.status_code == 400
    assert response.json()["error"] == "No valid fields to update"


def test_get_module_includes_videos(client, modules_url, module, videos_url):
    client.post(videos_url, json={"title": "Union based"})

    data = client.get(f"{modules_url}/{module['id']}").json()["data"]
    assert [v["title"] for v in data["videos"]] == ["Union based"]

    response = client.get(f"{modules_url}/424242")
    assert response.status_code == 404
    assert response.json()["error"] == "Module not found"


def test_reorder_modules(client, modules_url, module):
    second = client.post(modules_url, json={"title": "XSS"}).json()["data"]

    response = client.post(
        f"{modules_url}/reorder", json={"moduleIds": [second["id"], module["id"], 999]}
    )
    assert response.json()["data"] == {"reordered": 2}
    assert [m["title"] for m in client.get(modules_url).json()["data"]] == ["XSS", "Injection"]

    response = client.post(f"{modules_url}/reorder", json={"moduleIds": []})
    assert response.status_code == 400
    assert response.json()["error"] == "Array of module IDs is required"


def test_delete_module_removes_videos(client, modules_url, module, videos_url):
    video = client.post(videos_url, json={"title": "v"}).json()["data"]

    response = client.delete(f"{modules_url}/{module['id']}")
    assert response.json()["data"] == {"deleted": True}
    assert client.get(f"{videos_url}/{video['id']}").status_code == 404


# ==================== Videos ====================


def test_create_video_defaults_and_durations(client, topic, videos_url, module, modules_url):
    response = client.post(
        videos_url,
        json={"title": "Blind SQLi", "videoUrl": "https://youtu.be/x", "durationSeconds": 130},
    )

    assert response.status_code == 201
    video = response.json()["data"]
    assert video["videoType"] == "mp4"
    assert video["orderIndex"] == 1
    assert video["isPreview"] is False
    assert video["resources"] == []
    assert video["moduleId"] == module["id"]

    client.post(videos_url, json={"title": "Second", "durationSeconds": 60})
    module_data = client.get(f"{modules_url}/{module['id']}").json()["data"]
    # 190 seconds is 3 whole minutes
    assert module_data["durationMinutes"] == 3
    assert _topic_minutes(client, topic) == 3


def test_create_video_validation(client, videos_url):
    response = client.post(videos_url, json={"title": ""})
    assert response.status_code == 400
    assert response.json()["error"] == "Video title is required"

    response = client.post(videos_url, json={"title": "x", "videoType": "flash"})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid video type"


def test_list_videos_hides_inactive(client, videos_url):
    client.post(videos_url, json={"title": "shown"})
    client.post(videos_url, json={"title": "hidden", "isActive": False})

    titles = [v["title"] for v in client.get(videos_url).json()["data"]]
    assert titles == ["shown"]

    response = client.get(videos_url, params={"includeInactive": "true"})
    assert [v["title"] for v in response.json()["data"]] == ["shown", "hidden"]


def test_update_and_delete_video(client, topic, videos_url):
    video = client.post(videos_url, json={"title": "v", "durationSeconds": 600}).json()["data"]
    assert _topic_minutes(client, topic) == 10

    response = client.put(
        f"{videos_url}/{video['id']}",
        json={"title": "renamed", "durationSeconds": 300, "videoType": "youtube"},
    )
    data = response.json()["data"]
    assert data["title"] == "renamed"
    assert data["videoType"] == "youtube"
    assert _topic_minutes(client, topic) == 5

    client.delete(f"{videos_url}/{video['id']}")
    assert _topic_minutes(client, topic) == 0
    assert client.get(f"{videos_url}/{video['id']}").status_code == 404


def test_reorder_videos(client, videos_url):
    first = client.post(videos_url, json={"title": "first"}).json()["data"]
    second = client.post(videos_url, json={"title": "second"}).json()["data"]

    response = client.post(
        f"{videos_url}/reorder", json={"videoIds": [second["id"], first["id"]]}
    )
    assert response.json()["data"] == {"reordered": 2}
    assert [v["title"] for v in client.get(videos_url).json()["data"]] == ["second", "first"]


def test_video_of_other_module_is_not_found(client, modules_url, videos_url):
    other = client.post(modules_url, json={"title": "Other"}).json()["data"]
    video = client.post(videos_url, json={"title": "v"}).json()["data"]

    response = client.get(f"{modules_url}/{other['id']}/videos/{video['id']}")
    assert response.status_code == 404
    assert response.json()["error"] == "Video not found"
