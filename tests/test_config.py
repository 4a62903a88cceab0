"""Tests for settings, database URL assembly and logging setup."""

import json
import logging

import pytest
from pydantic import ValidationError

from accounts_api.config import INSECURE_JWT_SECRET, Settings
from accounts_api.database import build_database_url
from accounts_api.logging_config import JSONFormatter, setup_logging

PRODUCTION_DB = "postgresql://accounts:pw@db.internal:5432/accounts"


def test_defaults():
    """Test documented defaults."""
    settings = Settings(database_url=None)
    assert settings.jwt_algorithm == "HS256"
    assert settings.jwt_expiration_minutes == 60
    assert settings.bcrypt_rounds == 10


def test_production_rejects_default_secret():
    """Test production refuses the insecure JWT secret."""
    with pytest.raises(ValidationError, match="JWT_SECRET must be changed"):
        Settings(environment="production", jwt_secret=INSECURE_JWT_SECRET, database_url=PRODUCTION_DB)


def test_production_rejects_localhost_database():
    """Test production refuses a localhost database."""
    with pytest.raises(ValidationError, match="localhost"):
        Settings(
            environment="production",
            jwt_secret="x" * 32,
            database_url="postgresql://u:p@localhost/accounts",
        )


def test_production_with_real_secret():
    """Test a hardened production configuration loads."""
    settings = Settings(environment="production", jwt_secret="x" * 32, database_url=PRODUCTION_DB)
    assert settings.is_production
    assert not settings.uses_insecure_jwt_secret


def test_empty_secret_rejected():
    """Test an empty JWT secret is never accepted."""
    with pytest.raises(ValidationError):
        Settings(jwt_secret="")


def test_development_allows_default_secret():
    """Test the development default is allowed but flagged."""
    settings = Settings(environment="development", jwt_secret=INSECURE_JWT_SECRET)
    assert settings.is_development
    assert settings.uses_insecure_jwt_secret


def test_database_url_from_parts():
    """Test DB_* parts assemble into a PostgreSQL URL."""
    settings = Settings(
        database_url=None,
        db_host="db",
        db_port=5433,
        db_user="u",
        db_password="p",
        db_name="accounts",
    )
    url = build_database_url(settings)
    assert url.render_as_string(hide_password=False) == "postgresql+psycopg2://u:p@db:5433/accounts"


def test_database_url_override():
    """Test DATABASE_URL wins over the parts."""
    settings = Settings(database_url="sqlite:///./other.db", db_host="db")
    assert build_database_url(settings) == "sqlite:///./other.db"


def test_json_formatter_includes_extra_fields():
    """Test structured log lines carry extra fields."""
    record = logging.LogRecord("accounts", logging.INFO, __file__, 1, "User created", None, None)
    record.user_id = "abc"
    data = json.loads(JSONFormatter().format(record))
    assert data["message"] == "User created"
    assert data["level"] == "INFO"
    assert data["user_id"] == "abc"


def test_setup_logging_sets_level():
    """Test the root logger picks up the configured level."""
    root = logging.getLogger()
    previous_level, previous_handlers = root.level, root.handlers
    try:
        setup_logging("debug", "json")
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
    finally:
        root.setLevel(previous_level)
        root.handlers = previous_handlers
