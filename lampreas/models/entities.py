"""Entity records for clients, agents and drivers.

Field order matches the column order of each table and the key order of
the JSON export. Records are frozen; edits produce a new record via
``dataclasses.replace``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Client:
    """Client with a caller-assigned integer id."""
    id: int
    name: str
    email: str


@dataclass(frozen=True)
class ClientDetail:
    """One-to-one detail of a client; ``id`` is the owning client's id."""
    id: int
    address: str | None = None
    phone: str | None = None
    notes: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.address is None and self.phone is None and self.notes is None


@dataclass(frozen=True)
class Agent:
    """Commercial agent (comercial)."""
    id: int
    name: str
    email: str
    phone: str


@dataclass(frozen=True)
class Driver:
    """Delivery driver (repartidor)."""
    id: int
    name: str
    phone: str
    plate: str


@dataclass(frozen=True)
class ClientRecord:
    """Client flattened with its optional detail, for tables and exports."""
    id: int
    name: str
    email: str
    address: str | None = None
    phone: str | None = None
    notes: str | None = None

    @classmethod
    def merge(cls, client: Client, detail: ClientDetail | None) -> ClientRecord:
        """Combine a client with its detail; a missing detail leaves None."""
        if detail is None:
            return cls(id=client.id, name=client.name, email=client.email)
        return cls(
            id=client.id,
            name=client.name,
            email=client.email,
            address=detail.address,
            phone=detail.phone,
            notes=detail.notes,
        )

    def client(self) -> Client:
        return Client(id=self.id, name=self.name, email=self.email)

    def detail(self) -> ClientDetail:
        return ClientDetail(
            id=self.id, address=self.address, phone=self.phone, notes=self.notes,
        )
