"""Tests for lampreas.database.config — properties file loading."""

from pathlib import Path

import pytest

from lampreas.database.config import DatabaseConfig, load_database_config
from lampreas.database.errors import ConfigurationError, DataAccessError


def _write(tmp_path, text: str) -> Path:
    path = tmp_path / "db.properties"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadDatabaseConfig:

    def test_reads_all_keys(self, tmp_path):
        path = _write(tmp_path, (
            "# comment\n"
            "db.url=sqlite:///data/lampreas.db\n"
            "db.user=admin\n"
            "db.password=s3cr%t\n"
        ))
        config = load_database_config(path)
        assert config == DatabaseConfig("sqlite:///data/lampreas.db", "admin", "s3cr%t")

    def test_colon_delimiter(self, tmp_path):
        path = _write(tmp_path, "db.url: app.db\ndb.user: u\ndb.password: p\n")
        assert load_database_config(path).url == "app.db"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_database_config(tmp_path / "absent.properties")

    def test_missing_keys_named(self, tmp_path):
        path = _write(tmp_path, "db.url=app.db\n")
        with pytest.raises(ConfigurationError, match="db.user, db.password"):
            load_database_config(path)

    def test_blank_key_is_missing(self, tmp_path):
        path = _write(tmp_path, "db.url=\ndb.user=u\ndb.password=p\n")
        with pytest.raises(ConfigurationError, match="db.url"):
            load_database_config(path)

    def test_blank_user_is_missing(self, tmp_path):
        path = _write(tmp_path, "db.url=app.db\ndb.user=  \ndb.password=p\n")
        with pytest.raises(ConfigurationError, match="db.user"):
            load_database_config(path)

    def test_empty_password_is_allowed(self, tmp_path):
        path = _write(tmp_path, "db.url=app.db\ndb.user=sa\ndb.password=\n")
        config = load_database_config(path)
        assert config == DatabaseConfig("app.db", "sa", "")

    def test_is_data_access_error(self, tmp_path):
        with pytest.raises(DataAccessError):
            load_database_config(tmp_path / "absent.properties")


class TestDatabasePath:

    def test_sqlite_relative(self):
        config = DatabaseConfig("sqlite:///data/app.db", "u", "p")
        assert config.database_path == Path("data/app.db")

    def test_sqlite_absolute(self):
        config = DatabaseConfig("sqlite:////var/lib/app.db", "u", "p")
        assert config.database_path == Path("/var/lib/app.db")

    def test_bare_path(self):
        assert DatabaseConfig("app.db", "u", "p").database_path == Path("app.db")

    @pytest.mark.parametrize("url", [
        "jdbc:postgresql://localhost:5432/LampreaDB",
        "postgresql://localhost/db",
        "sqlite:///",
    ])
    def test_unsupported_url(self, url):
        with pytest.raises(ConfigurationError):
            DatabaseConfig(url, "u", "p").database_path

    def test_repr_hides_password(self):
        assert "secret" not in repr(DatabaseConfig("app.db", "u", "secret"))
