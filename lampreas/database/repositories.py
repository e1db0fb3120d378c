"""Entity repositories — one :class:`TableRepository` per table."""

from __future__ import annotations

from lampreas.database.db_manager import DatabaseManager
from lampreas.database.repository import TableRepository, TableSpec
from lampreas.models.entities import Agent, Client, ClientDetail, Driver

CLIENTS = TableSpec.for_dataclass("clients", Client, ["name", "email"])
CLIENT_DETAILS = TableSpec.for_dataclass(
    "client_details", ClientDetail, ["address", "phone", "notes"],
)
AGENTS = TableSpec.for_dataclass("agents", Agent, ["name", "email", "phone"])
DRIVERS = TableSpec.for_dataclass("drivers", Driver, ["name", "phone", "plate"])


class ClientRepository(TableRepository[Client]):
    def __init__(self, db: DatabaseManager):
        super().__init__(db, CLIENTS)


class ClientDetailRepository(TableRepository[ClientDetail]):
    def __init__(self, db: DatabaseManager):
        super().__init__(db, CLIENT_DETAILS)


class AgentRepository(TableRepository[Agent]):
    def __init__(self, db: DatabaseManager):
        super().__init__(db, AGENTS)


class DriverRepository(TableRepository[Driver]):
    def __init__(self, db: DatabaseManager):
        super().__init__(db, DRIVERS)
