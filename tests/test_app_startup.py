"""Tests for Flask application startup with configuration."""

import json
import os
from unittest.mock import patch

import pytest

from calcsite import create_app
from calcsite.config import reset_global_settings
from calcsite.models.rate_tables import DEFAULT_RATE_TABLES, get_rate_tables, reset_rate_tables


@pytest.fixture(autouse=True)
def reset_state():
    reset_global_settings()
    reset_rate_tables()
    yield
    reset_global_settings()
    reset_rate_tables()


class TestAppStartup:
    """Test cases for Flask application startup."""

    def test_app_creation_with_valid_config(self):
        """Test that app creates successfully with valid configuration."""
        with patch.dict(os.environ, {"SECRET_KEY": "valid-secret-key-123"}, clear=True):
            app = create_app()

            assert app.config["SECRET_KEY"] == "valid-secret-key-123"
            assert app.config["DATABASE_URL"].startswith("postgresql://")
            assert app.config["ADMIN_TOKEN"] is None
            assert app.config["GENERATION_GAP_YEARS"] == 25
            assert get_rate_tables() is DEFAULT_RATE_TABLES

    def test_json_responses_keep_key_order(self):
        with patch.dict(os.environ, {"SECRET_KEY": "valid-secret-key-123"}, clear=True):
            app = create_app()

            assert app.json.sort_keys is False
            with app.app_context():
                body = app.json.dumps({"b": 1, "a": 2})
            assert body.index('"b"') < body.index('"a"')

    def test_app_creation_fails_with_placeholder_secret_key(self):
        """Test that app creation fails with placeholder SECRET_KEY."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "your-secret-key-here-change-in-production"},
            clear=True,
        ):
            with pytest.raises(Exception) as exc_info:
                create_app()

            assert "SECRET_KEY must be set to a secure value" in str(exc_info.value)

    def test_app_debug_mode_based_on_environment(self):
        """Test that debug mode is set based on APP_ENV."""
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "APP_ENV": "development"},
            clear=True,
        ):
            assert create_app().config["DEBUG"] is True

        reset_global_settings()
        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "APP_ENV": "production"},
            clear=True,
        ):
            app = create_app()
            assert app.config["DEBUG"] is False
            assert app.config["ENV"] == "production"

    def test_rate_tables_loaded_from_file(self, tmp_path):
        """Test that startup installs rate tables from RATE_TABLES_PATH."""
        path = tmp_path / "rates.json"
        path.write_text(json.dumps({"treasury_rates": {"bills_3m": 7.0}}))

        with patch.dict(
            os.environ,
            {"SECRET_KEY": "valid-secret-key-123", "RATE_TABLES_PATH": str(path)},
            clear=True,
        ):
            app = create_app()
            response = app.test_client().get("/api/rate-tables")

            assert response.get_json()["treasury_rates"] == {"bills_3m": 7.0}

    def test_tunables_in_app_config(self):
        with patch.dict(
            os.environ,
            {
                "SECRET_KEY": "valid-secret-key-123",
                "CAR_PRICE_INFLATION_PERCENT": "5.5",
                "HEALTHCARE_INFLATION_MULTIPLIER": "2.0",
            },
            clear=True,
        ):
            app = create_app()

            assert app.config["CAR_PRICE_INFLATION_PERCENT"] == 5.5
            assert app.config["HEALTHCARE_INFLATION_MULTIPLIER"] == 2.0
