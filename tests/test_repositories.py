"""Tests for lampreas.database.repository — CRUD and search contract.

Every entity repository is checked against the same contract. Uses a
file-backed SQLite database per test.
"""

import dataclasses

import pytest

from lampreas.database.db_manager import DatabaseManager
from lampreas.database.errors import ConstraintViolationError
from lampreas.database.repositories import (
    AgentRepository,
    ClientDetailRepository,
    ClientRepository,
    DriverRepository,
)
from lampreas.database.repository import TableSpec, like_pattern
from lampreas.models.entities import Agent, Client, ClientDetail, Driver


# ── Fixtures ─────────────────────────────────────────────────────────

@pytest.fixture
def db(tmp_path):
    """Fresh database with schema for each test."""
    manager = DatabaseManager.for_path(tmp_path / "test.db")
    manager.initialize_database()
    return manager


def _client(i: int, name: str = "Ana", email: str = "ana@x.com") -> Client:
    return Client(id=i, name=name, email=email)


def _agent(i: int, name: str = "Luis", email: str = "luis@x.com", phone: str = "600") -> Agent:
    return Agent(id=i, name=name, email=email, phone=phone)


def _driver(i: int, name: str = "Marta", phone: str = "611", plate: str = "1234ABC") -> Driver:
    return Driver(id=i, name=name, phone=phone, plate=plate)


CASES = [
    pytest.param(ClientRepository, _client, "name", id="clients"),
    pytest.param(AgentRepository, _agent, "name", id="agents"),
    pytest.param(DriverRepository, _driver, "name", id="drivers"),
]


# ── CRUD contract ────────────────────────────────────────────────────

@pytest.mark.parametrize("repo_cls, make, text_field", CASES)
class TestCrudContract:
    """Insert / find / update / delete for every entity table."""

    def test_insert_and_find(self, db, repo_cls, make, text_field):
        repo = repo_cls(db)
        entity = make(1)
        repo.insert(entity)
        assert repo.find_by_id(1) == entity

    def test_find_missing_returns_none(self, db, repo_cls, make, text_field):
        repo = repo_cls(db)
        assert repo.find_by_id(42) is None

    def test_exists(self, db, repo_cls, make, text_field):
        repo = repo_cls(db)
        repo.insert(make(3))
        assert repo.exists(3) is True
        assert repo.exists(4) is False

    def test_duplicate_id_raises(self, db, repo_cls, make, text_field):
        repo = repo_cls(db)
        repo.insert(make(1))
        with pytest.raises(ConstraintViolationError):
            repo.insert(make(1))

    def test_find_all_empty(self, db, repo_cls, make, text_field):
        assert repo_cls(db).find_all() == []

    def test_find_all_ordered_by_id(self, db, repo_cls, make, text_field):
        repo = repo_cls(db)
        for i in (3, 1, 2):
            repo.insert(make(i))
        assert [e.id for e in repo.find_all()] == [1, 2, 3]

    def test_update_changes_non_key_fields(self, db, repo_cls, make, text_field):
        repo = repo_cls(db)
        repo.insert(make(1))
        changed = dataclasses.replace(make(1), **{text_field: "Renamed"})

        assert repo.update(changed) == 1
        assert repo.find_by_id(1) == changed

    def test_update_only_touches_its_row(self, db, repo_cls, make, text_field):
        repo = repo_cls(db)
        repo.insert(make(1))
        repo.insert(make(2))
        repo.update(dataclasses.replace(make(1), **{text_field: "Renamed"}))

        assert repo.find_by_id(2) == make(2)

    def test_update_missing_returns_zero(self, db, repo_cls, make, text_field):
        repo = repo_cls(db)
        assert repo.update(make(9)) == 0
        assert repo.find_by_id(9) is None

    def test_delete_count(self, db, repo_cls, make, text_field):
        repo = repo_cls(db)
        repo.insert(make(1))
        assert repo.delete_by_id(1) == 1
        assert repo.delete_by_id(1) == 0
        assert repo.find_by_id(1) is None


# ── Search ───────────────────────────────────────────────────────────

class TestSearch:

    @pytest.fixture
    def clients(self, db):
        repo = ClientRepository(db)
        repo.insert(Client(1, "Ana López", "ana@lampreas.es"))
        repo.insert(Client(2, "Bruno Díaz", "bruno@correo.com"))
        repo.insert(Client(12, "Carla Ruiz", "carla@lampreas.es"))
        repo.insert(Client(30, "ÁNGEL Pérez", "angel@x.com"))
        return repo

    def test_matches_name_case_insensitive(self, clients):
        assert [c.id for c in clients.search("ana")] == [1]
        assert [c.id for c in clients.search("ANA L")] == [1]

    def test_matches_email(self, clients):
        assert [c.id for c in clients.search("lampreas")] == [1, 12]

    def test_matches_id_as_text(self, clients):
        assert [c.id for c in clients.search("2")] == [2, 12]

    def test_non_ascii_case_insensitive(self, clients):
        assert [c.id for c in clients.search("ángel")] == [30]

    def test_no_match(self, clients):
        assert clients.search("zzz") == []

    def test_empty_text_matches_all(self, clients):
        assert [c.id for c in clients.search("")] == [1, 2, 12, 30]

    def test_wildcards_are_literal(self, clients):
        assert clients.search("%") == []
        assert clients.search("_") == []

    def test_agent_search_phone(self, db):
        repo = AgentRepository(db)
        repo.insert(Agent(1, "Luis", "luis@x.com", "600111222"))
        repo.insert(Agent(2, "Eva", "eva@x.com", "699000000"))
        assert [a.id for a in repo.search("111")] == [1]

    def test_driver_search_plate(self, db):
        repo = DriverRepository(db)
        repo.insert(Driver(1, "Marta", "611", "1234ABC"))
        repo.insert(Driver(2, "Pablo", "622", "9876XYZ"))
        assert [d.id for d in repo.search("xyz")] == [2]

    def test_detail_search_skips_null_columns(self, db):
        ClientRepository(db).insert(Client(1, "Ana", "ana@x.com"))
        details = ClientDetailRepository(db)
        details.insert(ClientDetail(1, address="Calle Mayor 1"))
        assert [d.id for d in details.search("mayor")] == [1]
        assert details.search("555") == []


class TestLikePattern:

    def test_wraps_and_folds(self):
        assert like_pattern("Ana") == "%ana%"

    def test_escapes_wildcards(self):
        assert like_pattern("50%_off") == "%50\\%\\_off%"

    def test_escapes_backslash(self):
        assert like_pattern("a\\b") == "%a\\\\b%"


# ── Table metadata ───────────────────────────────────────────────────

class TestTableSpec:

    def test_columns_follow_dataclass(self):
        spec = TableSpec.for_dataclass("drivers", Driver, ["name"])
        assert spec.columns == ("id", "name", "phone", "plate")
        assert spec.key == "id"
        assert spec.value_columns == ("name", "phone", "plate")

    def test_unknown_search_column_rejected(self):
        with pytest.raises(ValueError):
            TableSpec.for_dataclass("drivers", Driver, ["license"])
