import pytest

from portfolio.services.media_service import normalize_project_media, sanitize_project


@pytest.fixture
def uploads(tmp_path):
    root = tmp_path / "uploads"
    (root / "projects" / "demo").mkdir(parents=True)
    for name in ("cover.png", "one.jpg", "clip.mp4"):
        (root / "projects" / "demo" / name).write_bytes(b"x")
    return root


def _legacy_project():
    return {
        "id": "demo",
        "title": "Demo",
        "coverImage": "http://localhost:4000/uploads/projects/demo/cover.png",
        "images": [
            "http://old-host/uploads/projects/demo/one.jpg",
            "https://images.example.com/remote.jpg",
            7,
        ],
        "contentBlocks": [
            {"id": "b1", "type": "image", "image": "http://old-host/uploads/projects/demo/one.jpg"},
            {"id": "b2", "type": "video", "video": "/api/../uploads/projects/demo/clip.mp4"},
            {"id": "b3", "type": "text", "description": "plain"},
            "not-a-block",
        ],
    }


def test_rewrites_every_media_field(uploads):
    project, changed = normalize_project_media(_legacy_project(), str(uploads))

    assert changed is True
    assert project["coverImage"] == "/uploads/projects/demo/cover.png"
    assert project["images"] == [
        "/uploads/projects/demo/one.jpg",
        "https://images.example.com/remote.jpg",
        7,
    ]
    assert project["contentBlocks"][0]["image"] == "/uploads/projects/demo/one.jpg"
    assert project["contentBlocks"][1]["video"] == "/uploads/projects/demo/clip.mp4"
    assert project["contentBlocks"][2] == {"id": "b3", "type": "text", "description": "plain"}
    assert project["contentBlocks"][3] == "not-a-block"


def test_does_not_mutate_input(uploads):
    original = _legacy_project()
    normalize_project_media(original, str(uploads))
    assert original == _legacy_project()


def test_normalization_is_idempotent(uploads):
    once, changed_once = normalize_project_media(_legacy_project(), str(uploads))
    twice, changed_twice = normalize_project_media(once, str(uploads))

    assert changed_once is True
    assert changed_twice is False
    assert twice == once


def test_unchanged_project_is_returned_as_is(uploads):
    project = {"id": "p", "coverImage": "https://images.example.com/a.jpg", "images": []}
    result, changed = normalize_project_media(project, str(uploads))
    assert changed is False
    assert result is project


@pytest.mark.parametrize("value", [None, "project", ["a"]])
def test_non_dict_records_pass_through(uploads, value):
    assert normalize_project_media(value, str(uploads)) == (value, False)


def test_reference_to_file_uploaded_later_stays_canonical(uploads):
    project = {"id": "demo", "coverImage": "/uploads/projects/demo/later.png"}

    result, changed = normalize_project_media(project, str(uploads))
    assert changed is False
    assert result["coverImage"] == "/uploads/projects/demo/later.png"

    (uploads / "projects" / "demo" / "later.png").write_bytes(b"png")

    result, changed = normalize_project_media(result, str(uploads))
    assert changed is False
    assert result["coverImage"] == "/uploads/projects/demo/later.png"


def test_sanitize_project_defaults_view_history():
    assert sanitize_project({"id": "p", "viewHistory": None})["viewHistory"] == []
    assert sanitize_project({"id": "p"})["viewHistory"] == []
    history = [{"timestamp": 1, "ip": "1.1.1.1", "userAgent": "ua"}]
    assert sanitize_project({"id": "p", "viewHistory": history})["viewHistory"] == history
