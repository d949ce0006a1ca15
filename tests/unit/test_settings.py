"""
Unit tests for settings.
"""

import pytest

from app.core.config import Settings


def test_database_url_assembled_from_parts() -> None:
    settings = Settings(
        _env_file=None,
        DATABASE_URL=None,
        DB_HOST="db",
        DB_PORT=6543,
        DB_USER="svc",
        DB_PASSWORD="secret",
        DB_NAME="subs",
        DB_SSLMODE="require",
    )

    assert settings.sqlalchemy_url == "postgresql+psycopg://svc:secret@db:6543/subs?sslmode=require"


def test_explicit_database_url_wins() -> None:
    settings = Settings(_env_file=None, DATABASE_URL="sqlite:///local.db", DB_HOST="ignored")

    assert settings.sqlalchemy_url == "sqlite:///local.db"


def test_values_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SERVER_PORT", "9090")
    monkeypatch.setenv("DEFAULT_PAGE_LIMIT", "25")
    monkeypatch.setenv("RUN_MIGRATIONS", "false")

    settings = Settings(_env_file=None)

    assert settings.server_port == 9090
    assert settings.default_page_limit == 25
    assert settings.run_migrations is False


def test_values_read_from_config_yaml(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "config.yaml").write_text(
        "SERVER_PORT: 9100\nDB_HOST: yaml-db\nLOG_LEVEL: DEBUG\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SERVER_PORT", raising=False)
    monkeypatch.delenv("DB_HOST", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    settings = Settings(_env_file=None)

    assert settings.server_port == 9100
    assert settings.db_host == "yaml-db"
    assert settings.log_level == "WARNING"


def test_missing_config_yaml_is_ignored(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SERVER_PORT", raising=False)

    assert Settings(_env_file=None).server_port == 8080
