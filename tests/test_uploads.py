"""
Tests for file uploads: type and size checks, listing, deletion and the
links between stored files and topics/videos.
"""

from pathlib import Path

import pytest

from app.core.config import settings
from app.models.upload import Upload
from app.utils.file_upload import file_upload_service

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
MP4 = b"\x00\x00\x00\x18ftypmp42" + b"\x00" * 64


def _stored_path(upload):
    return Path(file_upload_service.base_storage_path) / upload["type"] / upload["filename"]


@pytest.fixture
def module_with_topic(make_topic, client):
    topic = make_topic(title="Uploads")
    module = client.post(
        f"/api/topics/{topic['id']}/modules", json={"title": "Media"}
    ).json()["data"]
    return topic, module


def test_upload_image(client):
    response = client.post(
        "/api/upload/image",
        files={"image": ("logo final.png", PNG, "image/png")},
        data={"category": "branding"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Image uploaded successfully"
    upload = body["data"]
    assert upload["originalName"] == "logo final.png"
    assert upload["filename"].startswith("logo_final-")
    assert upload["filename"].endswith(".png")
    assert upload["type"] == "image"
    assert upload["category"] == "branding"
    assert upload["size"] == len(PNG)
    assert upload["mimeType"] == "image/png"
    assert upload["url"] == f"{settings.app_url}/uploads/image/{upload['filename']}"
    assert _stored_path(upload).read_bytes() == PNG


def test_upload_rejects_wrong_mime_type(client):
    response = client.post(
        "/api/upload/image", files={"image": ("notes.txt", b"hello", "text/plain")}
    )
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid file type")


def test_upload_rejects_empty_file(client):
    response = client.post(
        "/api/upload/document", files={"document": ("empty.pdf", b"", "application/pdf")}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Empty file uploaded"


def test_upload_rejects_oversized_file(client, monkeypatch):
    monkeypatch.setattr(settings, "max_image_size_mb", 1)

    response = client.post(
        "/api/upload/image",
        files={"image": ("big.png", b"\x00" * (1024 * 1024 + 1), "image/png")},
    )
    assert response.status_code == 413
    assert response.json()["error"] == "File too large. Maximum size for image is 1MB"


def test_bulk_upload_and_listing(client):
    files = [
        ("files", ("a.png", PNG, "image/png")),
        ("files", ("b.png", PNG, "image/png")),
    ]
    response = client.post("/api/upload/bulk", files=files, data={"type": "image"})

    assert response.status_code == 200
    assert response.json()["data"]["uploaded"] == 2

    client.post("/api/upload/document", files={"document": ("a.pdf", b"%PDF-1.4", "application/pdf")})

    body = client.get("/api/upload/files").json()
    assert body["meta"]["total"] == 3
    body = client.get("/api/upload/files", params={"type": "image", "limit": 1}).json()
    assert len(body["data"]) == 1
    assert body["meta"] == {"total": 2, "page": 1, "limit": 1, "totalPages": 2}


def test_bulk_upload_limits(client, monkeypatch):
    monkeypatch.setattr(settings, "max_bulk_files", 1)
    files = [("files", ("a.png", PNG, "image/png")), ("files", ("b.png", PNG, "image/png"))]

    response = client.post("/api/upload/bulk", files=files, data={"type": "image"})
    assert response.status_code == 400
    assert response.json()["error"] == "Too many files. Maximum is 1"

    response = client.post("/api/upload/bulk", files=files[:1], data={"type": "audio"})
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid upload type")


def test_delete_file_removes_row_and_disk_copy(client):
    upload = client.post(
        "/api/upload/image", files={"image": ("a.png", PNG, "image/png")}
    ).json()["data"]
    assert _stored_path(upload).exists()

    response = client.delete(f"/api/upload/files/{upload['id']}")
    assert response.json()["data"] == {"deleted": True}
    assert not _stored_path(upload).exists()

    response = client.delete(f"/api/upload/files/{upload['id']}")
    assert response.status_code == 404
    assert response.json()["error"] == "File not found"


def test_delete_file_already_gone_from_disk(client):
    upload = client.post(
        "/api/upload/image", files={"image": ("a.png", PNG, "image/png")}
    ).json()["data"]
    _stored_path(upload).unlink()

    response = client.delete(f"/api/upload/files/{upload['id']}")
    assert response.status_code == 200


# ==================== Topic & video links ====================


def test_topic_thumbnail_upload_updates_topic(client, make_topic):
    topic = make_topic()

    response = client.post(
        f"/api/upload/topics/{topic['id']}/thumbnail",
        files={"thumbnail": ("cover.png", PNG, "image/png")},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert "/uploads/thumbnail/cover-" in data["thumbnailUrl"]
    assert data["thumbnail"] == data["thumbnailUrl"]

    response = client.post(
        "/api/upload/topics/999/thumbnail",
        files={"thumbnail": ("cover.png", PNG, "image/png")},
    )
    assert response.status_code == 404


def test_generic_thumbnail_links_video(client, module_with_topic):
    topic, module = module_with_topic
    videos_url = f"/api/topics/{topic['id']}/modules/{module['id']}/videos"
    video = client.post(videos_url, json={"title": "clip"}).json()["data"]

    response = client.post(
        "/api/upload/thumbnail",
        files={"thumbnail": ("thumb.webp", b"RIFF0000WEBP", "image/webp")},
        data={"videoId": str(video["id"])},
    )
    assert response.status_code == 200
    url = response.json()["data"]["url"]

    assert client.get(f"{videos_url}/{video['id']}").json()["data"]["thumbnailUrl"] == url


def test_module_video_upload_creates_linked_video(client, db_session, module_with_topic):
    topic, module = module_with_topic

    response = client.post(
        f"/api/upload/topics/{topic['id']}/modules/{module['id']}/video",
        files={"video": ("lesson.mp4", MP4, "video/mp4")},
        data={"title": "Lesson 1", "duration": "2.5"},
    )

    assert response.status_code == 201
    video = response.json()["data"]
    assert video["title"] == "Lesson 1"
    assert video["durationSeconds"] == 150
    assert "/uploads/video/lesson-" in video["videoUrl"]

    upload = db_session.query(Upload).filter(Upload.upload_type == "video").one()
    assert upload.file_metadata["video_id"] == video["id"]
    assert upload.file_metadata["module_id"] == module["id"]
    assert upload.file_metadata["topic_id"] == topic["id"]

    topic_data = client.get(f"/api/topics/{topic['id']}").json()["data"]
    assert topic_data["durationMinutes"] == 2


def test_nested_topic_payload_links_uploaded_video(client, db_session, make_topic):
    stored = client.post(
        "/api/upload/video", files={"video": ("intro.mp4", MP4, "video/mp4")}
    ).json()["data"]

    topic = make_topic(
        title="Linked",
        modules=[{"title": "m", "videos": [{"title": "intro", "videoUrl": stored["url"]}]}],
    )

    upload = db_session.query(Upload).filter(Upload.id == stored["id"]).one()
    db_session.refresh(upload)
    assert upload.file_metadata["video_id"] == topic["modules"][0]["videos"][0]["id"]
    assert upload.file_metadata["topic_id"] == topic["id"]


def test_upload_multiple_videos_to_module(client, module_with_topic):
    topic, module = module_with_topic
    files = [
        ("videos", ("one.mp4", MP4, "video/mp4")),
        ("videos", ("two.mp4", MP4, "video/mp4")),
    ]

    response = client.post(
        f"/api/topics/{topic['id']}/modules/{module['id']}/videos/upload-multiple",
        files=files,
    )

    assert response.status_code == 201
    created = response.json()["data"]
    assert [v["title"] for v in created] == ["one.mp4", "two.mp4"]
    assert [v["orderIndex"] for v in created] == [1, 2]


def test_replace_video_file(client, module_with_topic):
    topic, module = module_with_topic
    videos_url = f"/api/topics/{topic['id']}/modules/{module['id']}/videos"
    video = client.post(
        videos_url, json={"title": "clip", "videoUrl": "https://example.com/a.mp4"}
    ).json()["data"]

    response = client.put(
        f"/api/upload/videos/{video['id']}/replace",
        files={"video": ("new.mp4", MP4, "video/mp4")},
        data={"duration": "4"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert "/uploads/video/new-" in data["videoUrl"]
    assert data["durationSeconds"] == 240
    assert client.get(f"/api/topics/{topic['id']}").json()["data"]["durationMinutes"] == 4


def _files_in(upload_type):
    folder = Path(file_upload_service.base_storage_path) / upload_type
    return sorted(p.name for p in folder.iterdir()) if folder.exists() else []


def test_failed_bulk_upload_leaves_no_files(session_client, db_session):
    before = _files_in("image")
    files = [
        ("files", ("a.png", PNG, "image/png")),
        ("files", ("b.exe", b"MZ\x90\x00", "application/octet-stream")),
    ]

    response = session_client.post("/api/upload/bulk", files=files, data={"type": "image"})

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid file type")
    assert _files_in("image") == before
    assert db_session.query(Upload).count() == 0


def test_failed_multiple_video_upload_leaves_no_files(session_client, db_session):
    topic = session_client.post(
        "/api/topics", json={"title": "Uploads", "modules": [{"title": "Media"}]}
    ).json()["data"]
    module = topic["modules"][0]
    before = _files_in("video")
    files = [
        ("videos", ("one.mp4", MP4, "video/mp4")),
        ("videos", ("two.mp4", b"", "video/mp4")),
    ]

    response = session_client.post(
        f"/api/topics/{topic['id']}/modules/{module['id']}/videos/upload-multiple",
        files=files,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Empty file uploaded"
    assert _files_in("video") == before
    assert db_session.query(Upload).count() == 0
    videos = session_client.get(
        f"/api/topics/{topic['id']}/modules/{module['id']}/videos"
    ).json()["data"]
    assert videos == []
