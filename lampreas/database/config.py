"""Database connection configuration.

Read once at startup from a key-value properties file and passed into
:class:`~lampreas.database.db_manager.DatabaseManager`::

    db.url=sqlite:///lampreas.db
    db.user=admin
    db.password=secret
"""

from __future__ import annotations

import configparser
from dataclasses import dataclass
from pathlib import Path

from lampreas.constants import (
    DB_CONFIG_PATH,
    DB_PASSWORD_KEY,
    DB_URL_KEY,
    DB_USER_KEY,
    REQUIRED_DB_KEYS,
    SQLITE_URL_PREFIX,
)
from lampreas.database.errors import ConfigurationError

_SECTION = "properties"


@dataclass(frozen=True)
class DatabaseConfig:
    """Store URL and credentials."""
    url: str
    user: str
    password: str

    def __repr__(self) -> str:
        return f"DatabaseConfig(url={self.url!r}, user={self.user!r}, password='***')"

    @property
    def database_path(self) -> Path:
        """SQLite file path named by ``url``.

        Accepts ``sqlite:///relative.db``, ``sqlite:////abs/file.db`` or a
        bare path. Other URL schemes are rejected.
        """
        url = self.url.strip()
        if url.startswith(SQLITE_URL_PREFIX):
            path = url[len(SQLITE_URL_PREFIX):]
        elif "://" in url or url.startswith("jdbc:"):
            raise ConfigurationError(f"Unsupported database URL: {url}")
        else:
            path = url
        if not path:
            raise ConfigurationError(f"Database URL has no file path: {url}")
        return Path(path)

    @classmethod
    def from_mapping(cls, values: dict[str, str]) -> DatabaseConfig:
        """Build from ``db.*`` keys; missing keys fail fast.

        A blank url or user counts as missing. The password may be empty.
        """
        missing = [
            k for k in REQUIRED_DB_KEYS
            if values.get(k) is None
            or (k != DB_PASSWORD_KEY and not values[k].strip())
        ]
        if missing:
            raise ConfigurationError(
                "Missing database configuration keys: " + ", ".join(missing)
            )
        return cls(
            url=values[DB_URL_KEY].strip(),
            user=values[DB_USER_KEY].strip(),
            password=values[DB_PASSWORD_KEY],
        )


def load_database_config(path: Path | str | None = None) -> DatabaseConfig:
    """Parse a properties file into a :class:`DatabaseConfig`.

    Args:
        path: Properties file. Defaults to ``config/db.properties``
            relative to the working directory.

    Raises:
        ConfigurationError: File unreadable or required keys missing.
    """
    if path is None:
        path = Path.cwd() / DB_CONFIG_PATH
    path = Path(path)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read {path}: {exc}") from exc

    # Properties files have no section headers; configparser needs one.
    parser = configparser.ConfigParser(interpolation=None, delimiters=("=", ":"))
    try:
        parser.read_string(f"[{_SECTION}]\n{text}", source=str(path))
    except configparser.Error as exc:
        raise ConfigurationError(f"Malformed configuration in {path}: {exc}") from exc

    return DatabaseConfig.from_mapping(dict(parser[_SECTION]))
