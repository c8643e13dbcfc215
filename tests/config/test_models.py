"""Tests for configuration models."""

from pathlib import Path

import pytest
from sqlalchemy.engine import make_url

from tiqdb.config.models import DatabaseConfig, default_data_file


def _render(config: DatabaseConfig) -> str:
    return config.url().render_as_string(hide_password=False)


class TestDefaultDataFile:
    def test_uses_xdg_data_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        assert default_data_file() == tmp_path / "tiq" / "store.db"

    def test_falls_back_to_local_share(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert default_data_file() == tmp_path / ".local" / "share" / "tiq" / "store.db"


class TestDatabaseConfig:
    def test_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        config = DatabaseConfig()
        assert config.client == "sqlite"
        assert config.database == "tiq"
        assert config.filename == str(tmp_path / "tiq" / "store.db")

    def test_sqlite_url(self) -> None:
        assert _render(DatabaseConfig(filename="/tmp/x.db")) == "sqlite+aiosqlite:////tmp/x.db"

    def test_memory_url(self) -> None:
        config = DatabaseConfig(filename=":memory:")
        assert config.is_memory
        assert _render(config) == "sqlite+aiosqlite:///:memory:"

    def test_postgres_url(self) -> None:
        config = DatabaseConfig(
            client="postgresql", host="db", port=5432, user="u", password="p", database="tags"
        )
        assert _render(config) == "postgresql+asyncpg://u:p@db:5432/tags"
        assert not config.is_sqlite

    def test_mysql_url_without_credentials(self) -> None:
        config = DatabaseConfig(client="mysql")
        assert _render(config) == "mysql+aiomysql://localhost/tiq"

    def test_rejects_unknown_client(self) -> None:
        with pytest.raises(ValueError):
            DatabaseConfig(client="oracle")  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        config = DatabaseConfig(filename=":memory:")
        with pytest.raises(Exception):
            config.host = "x"  # type: ignore[misc]

    def test_credentials_are_escaped(self) -> None:
        config = DatabaseConfig(client="postgresql", user="u", password="p@ss/w:1", host="db")
        parsed = make_url(_render(config))
        assert parsed.host == "db"
        assert parsed.username == "u"
        assert parsed.password == "p@ss/w:1"
        assert parsed.database == "tiq"

    def test_rendered_url_hides_password(self) -> None:
        config = DatabaseConfig(client="mysql", user="u", password="secret")
        assert "secret" not in config.url().render_as_string()

    def test_filename_expands_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        config = DatabaseConfig(filename="~/tiq/store.db")
        assert config.filename == str(tmp_path / "tiq" / "store.db")
        assert config.url().database == str(tmp_path / "tiq" / "store.db")

    def test_memory_filename_untouched(self) -> None:
        assert DatabaseConfig(filename=":memory:").filename == ":memory:"
