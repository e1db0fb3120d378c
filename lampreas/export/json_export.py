"""JSON export of entity lists.

Writes one entity table as a formatted JSON array under ``exports/``.
Clients are exported merged with their detail (six fields per object).
"""

from __future__ import annotations

import dataclasses
import json
import logging
from enum import Enum
from pathlib import Path

from lampreas.constants import (
    AGENTS_EXPORT_FILENAME,
    CLIENTS_EXPORT_FILENAME,
    DRIVERS_EXPORT_FILENAME,
    EXPORT_DIR,
    EXPORT_INDENT,
)
from lampreas.database.errors import ExportError
from lampreas.database.repositories import AgentRepository, DriverRepository
from lampreas.services.client_service import ClientService

logger = logging.getLogger(__name__)


class EntityKind(Enum):
    CLIENTS = "clients"
    AGENTS = "agents"
    DRIVERS = "drivers"

    @property
    def default_filename(self) -> str:
        return {
            EntityKind.CLIENTS: CLIENTS_EXPORT_FILENAME,
            EntityKind.AGENTS: AGENTS_EXPORT_FILENAME,
            EntityKind.DRIVERS: DRIVERS_EXPORT_FILENAME,
        }[self]


class JsonExporter:
    """Entity list JSON file export."""

    def __init__(
        self,
        clients: ClientService,
        agents: AgentRepository,
        drivers: DriverRepository,
        export_dir: Path | str | None = None,
    ):
        self._clients = clients
        self._agents = agents
        self._drivers = drivers
        self._export_dir = Path(export_dir) if export_dir is not None else Path(EXPORT_DIR)

    @property
    def export_dir(self) -> Path:
        return self._export_dir

    def _rows(self, kind: EntityKind) -> list[dict]:
        if kind is EntityKind.CLIENTS:
            records = self._clients.list_records()
        elif kind is EntityKind.AGENTS:
            records = self._agents.find_all()
        else:
            records = self._drivers.find_all()
        return [dataclasses.asdict(r) for r in records]

    def export_to_json(self, kind: EntityKind, filename: str | None = None) -> Path:
        """Write the full contents of one entity table as a JSON array.

        Args:
            kind: Which entity list to export.
            filename: File name inside the export directory. Defaults to
                the kind's default name. An existing file is overwritten.

        Returns:
            Absolute path of the written file.

        Raises:
            DataAccessError: Reading the store failed.
            ValueError: *filename* is a path rather than a plain name.
            ExportError: Directory or file could not be written.
        """
        name = filename or kind.default_filename
        if Path(name).name != name or name in (".", ".."):
            raise ValueError(f"Export filename must be a plain file name: {name!r}")
        rows = self._rows(kind)
        destination = (self._export_dir / name).absolute()
        content = json.dumps(rows, indent=EXPORT_INDENT, ensure_ascii=False) + "\n"

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise ExportError(f"Cannot write {destination}: {exc}") from exc

        logger.info("Exported %d %s to %s", len(rows), kind.value, destination)
        return destination
