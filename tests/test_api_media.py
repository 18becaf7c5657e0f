import base64
import os
import re

import pytest

PNG_DATA = "data:image/png;base64," + base64.b64encode(b"\x89PNG fake image").decode()


def _upload(client, headers, **overrides):
    payload = {"data": PNG_DATA, "filename": "Cover Shot.png", "entityType": "project", "entityId": "Demo 1"}
    payload.update(overrides)
    return client.post("/api/uploads", json=payload, headers=headers)


def test_upload_stores_file_under_entity_dir(client, auth_headers, uploads_dir):
    response = _upload(client, auth_headers)

    assert response.status_code == 201
    url = response.get_json()["url"]
    assert re.fullmatch(r"/uploads/projects/demo-1/upload-\d+-[0-9a-z]{6}-cover-shot\.png", url)
    with open(os.path.join(uploads_dir, url[len("/uploads/"):]), "rb") as f:
        assert f.read() == b"\x89PNG fake image"

    served = client.get(url)
    assert served.status_code == 200
    assert served.data == b"\x89PNG fake image"


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"data": "http://example.com/a.png"}, "Invalid image payload"),
        ({"entityType": "user"}, "Invalid entity type"),
        ({"entityId": "!!!"}, "Invalid entity identifier"),
        ({"data": "data:text/plain;base64,aGVsbG8="}, "Unsupported image format"),
    ],
)
def test_upload_rejects_bad_payloads(client, auth_headers, overrides, message):
    response = _upload(client, auth_headers, **overrides)
    assert response.status_code == 400
    assert response.get_json()["message"] == message


def test_upload_requires_auth(client):
    assert _upload(client, {}).status_code == 401


def test_uploaded_files_cannot_escape_root(client, tmp_path):
    (tmp_path / "secret.txt").write_text("secret")
    assert client.get("/uploads/../secret.txt").status_code == 404


def test_workshop_gallery_round_trip(client, auth_headers):
    response = client.post(
        "/api/workshop/gallery",
        json={"files": [{"data": PNG_DATA, "filename": "B.png"}, {"data": PNG_DATA, "filename": "a.png"}]},
        headers=auth_headers,
    )
    assert response.status_code == 201
    saved = response.get_json()["files"]
    assert len(saved) == 2
    assert all(file["url"].startswith("/uploads/workshop/upload-") for file in saved)

    listed = client.get("/api/workshop/gallery").get_json()["files"]
    assert sorted(file["filename"] for file in listed) == sorted(file["filename"] for file in saved)
    assert [file["filename"].lower() for file in listed] == sorted(file["filename"].lower() for file in listed)


def test_workshop_gallery_validates_all_before_writing(client, auth_headers, uploads_dir):
    response = client.post(
        "/api/workshop/gallery",
        json={"files": [{"data": PNG_DATA}, {"data": "nope"}]},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.get_json()["message"] == "Invalid image payload in request"
    assert os.listdir(os.path.join(uploads_dir, "workshop")) == []


def test_workshop_gallery_requires_files(client, auth_headers):
    response = client.post("/api/workshop/gallery", json={"files": []}, headers=auth_headers)
    assert response.status_code == 400
    assert response.get_json()["message"] == "No images provided for upload"


def test_unused_media_report_and_delete(client, auth_headers, uploads_dir):
    used = _upload(client, auth_headers, entityId="1").get_json()["url"]
    orphan = _upload(client, auth_headers, entityId="1", filename="orphan.png").get_json()["url"]
    client.put("/api/projects/1", json={"coverImage": used}, headers=auth_headers)

    report = client.get("/api/media/unused", headers=auth_headers).get_json()
    assert report["count"] == 1
    assert report["files"][0]["url"] == orphan
    assert report["totalSize"] == report["files"][0]["size"]

    response = client.post(
        "/api/media/unused/delete",
        json={"files": [report["files"][0]["path"], "../escape.png"]},
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Deleted 1 file(s)"
    assert body["deleted"] == [report["files"][0]["path"]]
    assert body["failed"] == [{"path": "../escape.png", "reason": "Invalid path"}]
    assert client.get("/api/media/unused", headers=auth_headers).get_json()["count"] == 0


def test_unused_media_delete_requires_files(client, auth_headers):
    response = client.post("/api/media/unused/delete", json={"files": []}, headers=auth_headers)
    assert response.status_code == 400
    assert response.get_json()["message"] == "No files specified for deletion"
