"""Tests for settings used by the app and by Alembic."""

from realty_api.core.config import Settings


def make_settings(**overrides) -> Settings:
    values = {"DATABASE_URL": None, "_env_file": None}
    values.update(overrides)
    return Settings(**values)


def test_database_uri_is_async_postgres():
    settings = make_settings(POSTGRES_USER="app", POSTGRES_PASSWORD="pw", POSTGRES_HOST="db", POSTGRES_DB="realty")

    assert settings.SQLALCHEMY_DATABASE_URI == "postgresql+asyncpg://app:pw@db:5432/realty"


def test_database_url_overrides_postgres_values():
    settings = make_settings(DATABASE_URL="sqlite+aiosqlite:///local.db")

    assert settings.SQLALCHEMY_DATABASE_URI == "sqlite+aiosqlite:///local.db"


def test_only_the_async_uri_is_exported():
    exported = make_settings().model_dump()

    assert exported["SQLALCHEMY_DATABASE_URI"].startswith("postgresql+asyncpg://")
    assert not any(name.startswith("SYNC_") for name in exported)
