"""Database layer — SQLite connections, schema, and table repositories."""

from lampreas.database.config import DatabaseConfig, load_database_config
from lampreas.database.db_manager import DatabaseManager
from lampreas.database.errors import (
    ConfigurationError,
    ConstraintViolationError,
    DataAccessError,
    ExportError,
    StoreConnectionError,
)
from lampreas.database.repositories import (
    AgentRepository,
    ClientDetailRepository,
    ClientRepository,
    DriverRepository,
)
from lampreas.database.repository import TableRepository, TableSpec

__all__ = [
    "AgentRepository",
    "ClientDetailRepository",
    "ClientRepository",
    "ConfigurationError",
    "ConstraintViolationError",
    "DataAccessError",
    "DatabaseConfig",
    "DatabaseManager",
    "DriverRepository",
    "ExportError",
    "StoreConnectionError",
    "TableRepository",
    "TableSpec",
    "load_database_config",
]
