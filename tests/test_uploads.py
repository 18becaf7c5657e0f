import os
import re

import pytest

from portfolio.utils.uploads import (
    build_uploads_relative_path,
    build_workshop_gallery_file,
    extension_for_mime,
    generate_upload_filename,
    is_within_directory,
    normalize_upload_path,
    parse_data_uri,
    resolve_entity_kind,
)


@pytest.fixture
def uploads(tmp_path):
    root = tmp_path / "uploads"
    (root / "projects" / "demo").mkdir(parents=True)
    (root / "projects" / "demo" / "cover.png").write_bytes(b"png")
    return root


@pytest.mark.parametrize(
    ("mime", "expected"),
    [
        ("image/jpeg", "jpg"),
        ("IMAGE/PNG", "png"),
        ("image/svg+xml", "svg"),
        ("video/quicktime", "mov"),
        ("image/x-icon", "x-icon"),
        ("image/vnd.custom+json", "vnd.custom.json"),
        ("garbage", "bin"),
        (None, "bin"),
    ],
)
def test_extension_for_mime(mime, expected):
    assert extension_for_mime(mime) == expected


def test_generate_upload_filename_keeps_sanitized_stem():
    name = generate_upload_filename("png", "My Holiday Photo.JPG")
    assert re.fullmatch(r"upload-\d+-[0-9a-z]{6}-my-holiday-photo\.png", name)


def test_generate_upload_filename_without_original_name():
    assert re.fullmatch(r"upload-\d+-[0-9a-z]{6}\.webp", generate_upload_filename("webp"))
    assert re.fullmatch(r"upload-\d+-[0-9a-z]{6}", generate_upload_filename(""))


def test_generate_upload_filename_is_unique():
    names = {generate_upload_filename("png", "a.png") for _ in range(50)}
    assert len(names) == 50


def test_normalize_rewrites_absolute_url_when_file_exists(uploads):
    value = "http://localhost:4000/uploads/projects/demo/cover.png"
    assert normalize_upload_path(value, str(uploads)) == "/uploads/projects/demo/cover.png"


def test_normalize_rewrites_relative_prefix(uploads):
    value = "  server/uploads/projects/demo/cover.png"
    assert normalize_upload_path(value, str(uploads)) == "/uploads/projects/demo/cover.png"


def test_normalize_keeps_reference_to_missing_file(uploads):
    value = "https://cdn.example.com/uploads/projects/demo/missing.png"
    assert normalize_upload_path(value, str(uploads)) == value


def test_normalize_leaves_canonical_paths_alone(uploads):
    assert normalize_upload_path("/uploads/projects/demo/cover.png", str(uploads)) == \
        "/uploads/projects/demo/cover.png"
    assert normalize_upload_path("/uploads/projects/demo/missing.png", str(uploads)) == \
        "/uploads/projects/demo/missing.png"


@pytest.mark.parametrize(
    "value",
    [
        "http://host/uploads/../secret.txt",
        "x/uploads/projects/../../secret.txt",
        "http://host/uploads/",
    ],
)
def test_normalize_rejects_traversal(uploads, value):
    (uploads.parent / "secret.txt").write_text("secret")
    assert normalize_upload_path(value, str(uploads)) == value


def test_normalize_rejects_symlink_escape(uploads):
    outside = uploads.parent / "outside.png"
    outside.write_bytes(b"x")
    os.symlink(outside, uploads / "projects" / "link.png")

    value = "http://host/uploads/projects/link.png"
    assert normalize_upload_path(value, str(uploads)) == value


def test_normalize_passes_through_non_strings(uploads):
    assert normalize_upload_path(None, str(uploads)) is None
    assert normalize_upload_path(42, str(uploads)) == 42


def test_normalize_never_returns_missing_target(uploads):
    candidates = [
        "http://a/uploads/projects/demo/cover.png",
        "http://a/uploads/projects/demo/other.png",
        "http://a/uploads/projects/demo",
        "uploads/projects/demo/cover.png",
        "data:image/png;base64,AAAA",
    ]
    for value in candidates:
        result = normalize_upload_path(value, str(uploads))
        if result != value:
            assert result.startswith("/uploads/")
            assert (uploads / result[len("/uploads/"):]).is_file()


def test_is_within_directory(tmp_path):
    root = tmp_path / "root"
    root.mkdir()
    assert is_within_directory(str(root), str(root / "a" / "b.png"))
    assert not is_within_directory(str(root), str(tmp_path / "rootless" / "b.png"))
    assert not is_within_directory(str(root), str(root / ".." / "b.png"))


def test_build_paths():
    assert build_uploads_relative_path("stories", "s1", "a.png") == "/uploads/stories/s1/a.png"
    assert build_workshop_gallery_file("my photo.png") == {
        "filename": "my photo.png",
        "url": "/uploads/workshop/my%20photo.png",
    }


@pytest.mark.parametrize(
    ("value", "expected"),
    [("Project", "projects"), ("stories", "stories"), ("content", "site"), ("user", None), (None, None)],
)
def test_resolve_entity_kind(value, expected):
    assert resolve_entity_kind(value) == expected


def test_parse_data_uri():
    assert parse_data_uri("data:image/png;base64,aGVsbG8=") == ("image/png", b"hello")
    assert parse_data_uri("data:text/plain;base64,aGVsbG8=") is None
    assert parse_data_uri("not a data uri") is None
    assert parse_data_uri(None) is None
