from __future__ import annotations

import os
import sys

import pytest

from dashboard import create_app, create_admin_user, db
from dashboard.models import Customer

# Ensure the dashboard package is importable when tests change directories
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, BASE_DIR)


@pytest.fixture
def app(tmp_path, monkeypatch):
    os.environ.setdefault("SECRET_KEY", "testsecret")
    os.environ.setdefault("ADMIN_EMAIL", "admin@example.com")
    os.environ.setdefault("ADMIN_PASS", "adminpass")
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("DATABASE_PATH", raising=False)

    # Ensure a clean database for each test within the temp directory
    cwd = os.getcwd()
    os.chdir(tmp_path)
    app = create_app(["--demo", "--testing"])
    os.chdir(cwd)

    app.config.update({"TESTING": True, "WTF_CSRF_ENABLED": False})

    with app.app_context():
        db.create_all()
        create_admin_user()

        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def customers(app):
    """Two customers keyed by a short handle."""
    with app.app_context():
        records = {
            "evil": Customer(id="c-1", name="Evil Rabbit", email="evil@rabbit.com"),
            "lee": Customer(id="c-2", name="Lee Robinson", email="lee@robinson.com"),
        }
        db.session.add_all(records.values())
        db.session.commit()
        return {key: customer.id for key, customer in records.items()}
