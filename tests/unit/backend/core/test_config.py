"""
Unit Tests for Configuration Management.

Tests run against the real YAML files under config/settings/.
Failure scenarios use tmp_path to create controlled filesystems.
"""

import pytest

from notekeeper.backend.core.config import (
    AppConfig,
    find_project_root,
    get_app_config,
    get_database_url,
    get_server_base_url,
    get_settings,
    load_yaml_config,
)
from notekeeper.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    LoggingSchema,
)


@pytest.fixture(autouse=True)
def _clear_config_cache():
    """Clear lru_cache between tests so each test gets a fresh load."""
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


def _write_project(tmp_path, application: str, database: str, logging: str) -> None:
    (tmp_path / ".project_root").touch()
    settings_dir = tmp_path / "config" / "settings"
    settings_dir.mkdir(parents=True)
    (settings_dir / "application.yaml").write_text(application)
    (settings_dir / "database.yaml").write_text(database)
    (settings_dir / "logging.yaml").write_text(logging)


VALID_APPLICATION = """
name: Test
version: "1.0"
description: test
environment: test
debug: false
api_prefix: /api
server: {host: 0.0.0.0, port: 8080}
cors: {origins: []}
timeouts: {database: 5, external_api: 12}
"""

VALID_DATABASE = """
url: sqlite+aiosqlite:///./test.db
echo: false
create_tables_on_startup: false
"""

VALID_LOGGING = """
level: WARNING
format: json
handlers:
  console: {enabled: true}
  file: {enabled: false, path: logs/x.jsonl, max_bytes: 100, backup_count: 1}
"""


class TestFindProjectRoot:
    """Tests for .project_root marker discovery."""

    def test_finds_root_from_project_directory(self):
        root = find_project_root()
        assert (root / ".project_root").exists()
        assert (root / "config" / "settings").is_dir()

    def test_finds_root_from_subdirectory(self, tmp_path, monkeypatch):
        (tmp_path / ".project_root").touch()
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        assert find_project_root() == tmp_path

    def test_raises_when_no_marker_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(RuntimeError, match="Project root not found"):
            find_project_root()


class TestLoadYamlConfig:
    """Tests for raw YAML loading."""

    def test_loads_application_yaml(self):
        data = load_yaml_config("application.yaml")
        assert data["name"] == "Notekeeper"

    def test_missing_file_raises(self):
        with pytest.raises(FileNotFoundError):
            load_yaml_config("does-not-exist.yaml")


class TestAppConfig:
    """Tests for validated YAML configuration."""

    def test_project_config_is_valid(self):
        config = get_app_config()

        assert isinstance(config.application, ApplicationSchema)
        assert isinstance(config.database, DatabaseSchema)
        assert isinstance(config.logging, LoggingSchema)

    def test_default_routes_have_no_prefix(self):
        assert get_app_config().application.api_prefix == ""

    def test_default_database_is_sqlite(self):
        assert get_app_config().database.url.startswith("sqlite+aiosqlite://")

    def test_unknown_key_is_rejected(self, tmp_path, monkeypatch):
        _write_project(tmp_path, VALID_APPLICATION + "surprise: 1\n", VALID_DATABASE, VALID_LOGGING)
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ValueError, match="application.yaml"):
            AppConfig()

    def test_missing_key_is_rejected(self, tmp_path, monkeypatch):
        _write_project(tmp_path, VALID_APPLICATION, "url: sqlite+aiosqlite://\n", VALID_LOGGING)
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ValueError, match="database.yaml"):
            AppConfig()


class TestDatabaseUrl:
    """Tests for DATABASE_URL resolution."""

    def test_uses_yaml_when_no_override(self, tmp_path, monkeypatch):
        _write_project(tmp_path, VALID_APPLICATION, VALID_DATABASE, VALID_LOGGING)
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("DATABASE_URL", raising=False)

        assert get_database_url() == "sqlite+aiosqlite:///./test.db"

    def test_environment_overrides_yaml(self, tmp_path, monkeypatch):
        _write_project(tmp_path, VALID_APPLICATION, VALID_DATABASE, VALID_LOGGING)
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db/notes")

        assert get_database_url() == "postgresql+asyncpg://u:p@db/notes"

    def test_env_file_overrides_yaml(self, tmp_path, monkeypatch):
        _write_project(tmp_path, VALID_APPLICATION, VALID_DATABASE, VALID_LOGGING)
        (tmp_path / "config" / ".env").write_text("DATABASE_URL=sqlite+aiosqlite:///./other.db\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("DATABASE_URL", raising=False)

        assert get_database_url() == "sqlite+aiosqlite:///./other.db"


class TestServerBaseUrl:
    """Tests for the CLI's view of the server address."""

    def test_builds_url_and_timeout(self, tmp_path, monkeypatch):
        _write_project(tmp_path, VALID_APPLICATION, VALID_DATABASE, VALID_LOGGING)
        monkeypatch.chdir(tmp_path)

        assert get_server_base_url() == ("http://0.0.0.0:8080", 12.0)
