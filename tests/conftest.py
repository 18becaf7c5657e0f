import json

import pytest

from portfolio import create_app
from portfolio.utils.auth import create_admin_token
from portfolio.utils.security import reset_rate_limits


@pytest.fixture
def app(tmp_path):
    """Application bound to a throwaway data / uploads tree."""
    data_dir = tmp_path / "data"
    uploads_dir = tmp_path / "uploads"
    app = create_app(
        "testing",
        test_config={
            "DATA_DIR": str(data_dir),
            "PROJECTS_FILE": str(data_dir / "projects.json"),
            "STORIES_FILE": str(data_dir / "stories.json"),
            "META_FILE": str(data_dir / "db.json"),
            "UPLOADS_DIR": str(uploads_dir),
        },
    )
    reset_rate_limits()
    yield app
    reset_rate_limits()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    with app.app_context():
        token = create_admin_token()
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def uploads_dir(app):
    return app.config["UPLOADS_DIR"]


@pytest.fixture
def read_meta(app):
    """Read db.json straight from disk."""

    def _read():
        with open(app.config["META_FILE"], encoding="utf-8") as f:
            return json.load(f)

    return _read
