"""Client panel — clients with their address / phone / notes detail.

Rows are merged client + detail records. Save writes both tables in one
transaction through :class:`ClientService`.
"""

from __future__ import annotations

from lampreas.core.i18n import t
from lampreas.export.json_export import EntityKind, JsonExporter
from lampreas.models.entities import ClientRecord
from lampreas.services.client_service import ClientService
from lampreas.ui.panels.entity_panel import ID_FIELD, EntityPanel, FormField

CLIENT_FIELDS = [
    ID_FIELD,
    FormField("name", "fields.name", "Name"),
    FormField("email", "fields.email", "Email"),
    FormField("address", "fields.address", "Address", required=False),
    FormField("phone", "fields.phone", "Phone", required=False),
    FormField("notes", "fields.notes", "Notes", required=False),
]


class ClientPanel(EntityPanel):
    """Clients screen."""

    def __init__(self, service: ClientService, exporter: JsonExporter, parent=None):
        super().__init__(
            t("sidebar.clients", "Clients"),
            CLIENT_FIELDS,
            service.clients,
            exporter,
            EntityKind.CLIENTS,
            parent,
        )
        self._service = service

    def _load_records(self, text: str | None) -> list:
        return self._service.list_records(text)

    def _insert(self, values: dict) -> None:
        record = ClientRecord(**values)
        detail = record.detail()
        self._service.save_client_with_detail(
            record.client(), None if detail.is_empty else detail,
        )

    def _update(self, values: dict) -> int:
        record = ClientRecord(**values)
        return self._service.update_client_with_detail(record.client(), record.detail())

    def _delete(self, record_id: int) -> int:
        return self._service.delete_client(record_id)
