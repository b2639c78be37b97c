"""
Pytest configuration and shared fixtures for the calculator tests.
"""

import os
from unittest.mock import patch

import pytest

from calcsite import create_app
from calcsite.config import reset_global_settings
from calcsite.database import create_tables, reset_engine
from calcsite.models.rate_tables import reset_rate_tables

ADMIN_TOKEN = "test-admin-token"


def _reset_globals():
    reset_global_settings()
    reset_engine()
    reset_rate_tables()


@pytest.fixture(scope="function")
def app_env(tmp_path):
    """Isolated environment backed by a throwaway SQLite content store."""
    env = {
        "SECRET_KEY": "test-secret-key-123",
        "APP_ENV": "testing",
        "DB_URL": f"sqlite:///{tmp_path / 'calcsite_test.db'}",
        "ADMIN_TOKEN": ADMIN_TOKEN,
    }
    _reset_globals()
    with patch.dict(os.environ, env, clear=True):
        yield env
    _reset_globals()


@pytest.fixture(scope="function")
def app(app_env):
    """Create the application with its content store tables."""
    app = create_app()
    create_tables()
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers():
    return {"X-Admin-Token": ADMIN_TOKEN}
