"""Driver panel — delivery drivers (repartidores)."""

from lampreas.core.i18n import t
from lampreas.database.repositories import DriverRepository
from lampreas.export.json_export import EntityKind, JsonExporter
from lampreas.ui.panels.entity_panel import ID_FIELD, EntityPanel, FormField

DRIVER_FIELDS = [
    ID_FIELD,
    FormField("name", "fields.name", "Name"),
    FormField("phone", "fields.phone", "Phone"),
    FormField("plate", "fields.plate", "Licence plate"),
]


class DriverPanel(EntityPanel):
    """Delivery drivers screen."""

    def __init__(self, repo: DriverRepository, exporter: JsonExporter, parent=None):
        super().__init__(
            t("sidebar.drivers", "Drivers"),
            DRIVER_FIELDS,
            repo,
            exporter,
            EntityKind.DRIVERS,
            parent,
        )
