"""Client service — atomic client + detail writes and merged client records.

A client and its detail live in two tables. Writes that touch both run on
a single connection inside one transaction: either both rows are stored or
neither is.

Deleting a client removes its detail through the ``ON DELETE CASCADE``
foreign key of ``client_details``.
"""

from __future__ import annotations

import logging

from lampreas.database.db_manager import DatabaseManager
from lampreas.database.repositories import ClientDetailRepository, ClientRepository
from lampreas.models.entities import Client, ClientDetail, ClientRecord

logger = logging.getLogger(__name__)


def _check_detail_owner(client: Client, detail: ClientDetail | None) -> None:
    if detail is not None and detail.id != client.id:
        raise ValueError(
            f"Detail id {detail.id} does not match client id {client.id}"
        )


class ClientService:
    """Client aggregate operations over the client and detail repositories."""

    def __init__(
        self,
        db: DatabaseManager,
        clients: ClientRepository | None = None,
        details: ClientDetailRepository | None = None,
    ):
        self._db = db
        self._clients = clients or ClientRepository(db)
        self._details = details or ClientDetailRepository(db)

    @property
    def clients(self) -> ClientRepository:
        return self._clients

    @property
    def details(self) -> ClientDetailRepository:
        return self._details

    # ------------------------------------------------------------------
    # Transactional writes
    # ------------------------------------------------------------------

    def save_client_with_detail(
        self, client: Client, detail: ClientDetail | None = None,
    ) -> None:
        """Insert a client and its detail as one unit.

        The client row is written first; the detail references it.

        Raises:
            ValueError: The detail belongs to another client id.
            ConstraintViolationError: Duplicate id. Nothing is left stored.
            DataAccessError: Any other store failure, after rollback.
        """
        _check_detail_owner(client, detail)
        with self._db.transaction() as conn:
            self._clients.insert(client, conn)
            if detail is not None:
                self._details.insert(detail, conn)
        logger.info(
            "Saved client %s%s", client.id, " with detail" if detail else "",
        )

    def update_client_with_detail(
        self, client: Client, detail: ClientDetail | None = None,
    ) -> int:
        """Update a client and update-or-insert its detail as one unit.

        An existing detail row is overwritten, so an empty detail clears
        it. An empty detail never creates a row.

        Returns:
            Client rows updated. 0 means the client does not exist and
            nothing was written.

        Raises:
            ValueError: The detail belongs to another client id.
        """
        _check_detail_owner(client, detail)
        with self._db.transaction() as conn:
            count = self._clients.update(client, conn)
            if count and detail is not None:
                updated = self._details.update(detail, conn)
                if not updated and not detail.is_empty:
                    self._details.insert(detail, conn)
        logger.info("Updated client %s (%d row)", client.id, count)
        return count

    def delete_client(self, client_id: int) -> int:
        """Delete a client; its detail goes with it. Returns rows deleted."""
        count = self._clients.delete_by_id(client_id)
        logger.info("Deleted client %s (%d row)", client_id, count)
        return count

    # ------------------------------------------------------------------
    # Merged reads
    # ------------------------------------------------------------------

    def find_record(self, client_id: int) -> ClientRecord | None:
        client = self._clients.find_by_id(client_id)
        if client is None:
            return None
        return ClientRecord.merge(client, self._details.find_by_id(client_id))

    def list_records(self, text: str | None = None) -> list[ClientRecord]:
        """All clients, or those matching *text*, merged with their details."""
        if text is None:
            clients = self._clients.find_all()
        else:
            clients = self._clients.search(text)
        return [
            ClientRecord.merge(c, self._details.find_by_id(c.id))
            for c in clients
        ]
