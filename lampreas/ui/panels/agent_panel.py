"""Agent panel — commercial agents (comerciales)."""

from lampreas.core.i18n import t
from lampreas.database.repositories import AgentRepository
from lampreas.export.json_export import EntityKind, JsonExporter
from lampreas.ui.panels.entity_panel import ID_FIELD, EntityPanel, FormField

AGENT_FIELDS = [
    ID_FIELD,
    FormField("name", "fields.name", "Name"),
    FormField("email", "fields.email", "Email"),
    FormField("phone", "fields.phone", "Phone"),
]


class AgentPanel(EntityPanel):
    """Commercial agents screen."""

    def __init__(self, repo: AgentRepository, exporter: JsonExporter, parent=None):
        super().__init__(
            t("sidebar.agents", "Agents"),
            AGENT_FIELDS,
            repo,
            exporter,
            EntityKind.AGENTS,
            parent,
        )
