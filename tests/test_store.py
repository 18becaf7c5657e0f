import json
import logging

import pytest

from portfolio import defaults
from portfolio.store import JsonStore
from portfolio.utils.auth import verify_password

ADMIN_PASSWORD = "default-pass-123"


@pytest.fixture
def paths(tmp_path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return {
        "projects_file": str(data_dir / "projects.json"),
        "stories_file": str(data_dir / "stories.json"),
        "meta_file": str(data_dir / "db.json"),
        "uploads_dir": str(tmp_path / "uploads"),
    }


def _store(paths):
    store = JsonStore()
    store.configure(admin_password=ADMIN_PASSWORD, **paths)
    return store


def _write(path, payload):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f)


def _read(path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def test_first_start_seeds_files_and_upload_dirs(paths, tmp_path):
    store = _store(paths)
    data = store.initialize()

    assert _read(paths["projects_file"]) == defaults.PROJECTS
    assert _read(paths["stories_file"]) == defaults.STORIES
    assert data["categories"] == defaults.CATEGORIES
    assert data["messages"] == []
    for kind in ("projects", "stories", "site", "workshop"):
        assert (tmp_path / "uploads" / kind).is_dir()


def test_missing_password_hash_is_seeded_and_persisted(paths):
    _write(paths["meta_file"], {**defaults.DEFAULT_META, "adminPasswordHash": None})
    store = _store(paths)
    store.initialize()

    stored_hash = store.data["adminPasswordHash"]
    assert stored_hash
    assert verify_password(ADMIN_PASSWORD, stored_hash)
    assert _read(paths["meta_file"])["adminPasswordHash"] == stored_hash


def test_existing_password_hash_is_kept(paths):
    _write(paths["meta_file"], {**defaults.DEFAULT_META, "adminPasswordHash": "plain-secret"})
    store = _store(paths)
    store.initialize()
    assert store.data["adminPasswordHash"] == "plain-secret"


def test_corrupt_file_falls_back_to_defaults(paths, caplog):
    with open(paths["projects_file"], "w", encoding="utf-8") as f:
        f.write("{ not json")
    store = _store(paths)

    with caplog.at_level(logging.WARNING, logger="portfolio.store"):
        data = store.initialize()

    assert data["projects"] == defaults.PROJECTS
    assert "projects.json" in caplog.text


def test_wrong_top_level_type_falls_back(paths):
    _write(paths["stories_file"], {"not": "a list"})
    store = _store(paths)
    assert store.initialize()["stories"] == defaults.STORIES


def test_meta_fields_are_defaulted_by_type(paths):
    _write(paths["meta_file"], {
        "categories": "oops",
        "messages": None,
        "bannedIps": [{"ip": "1.2.3.4", "bannedAt": 1}],
        "about": [],
        "contact": {"title": "Custom"},
        "adminPasswordHash": "x",
    })
    data = _store(paths).initialize()

    assert data["categories"] == defaults.CATEGORIES
    assert data["messages"] == []
    assert data["bannedIps"] == [{"ip": "1.2.3.4", "bannedAt": 1}]
    assert data["about"] == defaults.ABOUT
    assert data["contact"] == {"title": "Custom"}


def test_stories_are_healed_on_load(paths):
    _write(paths["stories_file"], [
        {"id": "s1", "title": "Old", "featured": True, "viewHistory": "broken"},
        {"id": "s2", "title": "Fine", "viewHistory": [{"timestamp": 1}]},
    ])
    data = _store(paths).initialize()

    assert data["stories"][0] == {"id": "s1", "title": "Old", "viewHistory": []}
    assert data["stories"][1]["viewHistory"] == [{"timestamp": 1}]


def test_legacy_project_media_is_normalized_and_saved(paths, tmp_path):
    cover = tmp_path / "uploads" / "projects" / "p1" / "cover.png"
    cover.parent.mkdir(parents=True)
    cover.write_bytes(b"png")
    _write(paths["projects_file"], [
        {"id": "p1", "coverImage": "http://localhost:4000/uploads/projects/p1/cover.png"},
    ])

    data = _store(paths).initialize()

    assert data["projects"][0]["coverImage"] == "/uploads/projects/p1/cover.png"
    assert _read(paths["projects_file"])[0]["coverImage"] == "/uploads/projects/p1/cover.png"


def test_save_writes_pretty_unicode_json(paths):
    store = _store(paths)
    store.initialize()
    with store.mutation() as data:
        data["stories"][0]["title"] = "城市节奏"

    with open(paths["stories_file"], encoding="utf-8") as f:
        raw = f.read()
    assert "城市节奏" in raw
    assert raw.startswith('[\n  {')
    assert set(_read(paths["meta_file"])) == {
        "categories", "messages", "bannedIps", "about", "contact", "adminPasswordHash",
    }


def test_failed_mutation_is_not_persisted(paths):
    store = _store(paths)
    store.initialize()
    before = _read(paths["meta_file"])

    with pytest.raises(RuntimeError):
        with store.mutation() as data:
            data["messages"].append({"id": "m1"})
            raise RuntimeError("boom")

    assert _read(paths["meta_file"]) == before


def test_write_errors_propagate(paths, tmp_path):
    store = _store(paths)
    store.initialize()
    store.projects_file = str(tmp_path / "missing-dir" / "projects.json")

    with pytest.raises(OSError):
        store.save_data()


@pytest.mark.parametrize("categories", [[], None])
def test_empty_categories_are_restored_and_saved(paths, categories):
    meta = {**defaults.DEFAULT_META, "adminPasswordHash": "x"}
    meta["categories"] = categories
    _write(paths["meta_file"], meta)

    data = _store(paths).initialize()

    assert data["categories"] == defaults.CATEGORIES
    assert _read(paths["meta_file"])["categories"] == defaults.CATEGORIES
