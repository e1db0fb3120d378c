"""Main window — sidebar navigation and one screen per entity.

Layout:
  Left:   Sidebar (title + Clients / Agents / Drivers buttons)
  Center: QStackedWidget with ClientPanel, AgentPanel, DriverPanel
  Footer: QStatusBar

Panels are built once and kept, so each screen keeps its selection and
form text while the user moves between them.
"""

from __future__ import annotations

from pathlib import Path

from PyQt6.QtWidgets import (
    QButtonGroup, QFrame, QHBoxLayout, QLabel, QMainWindow, QPushButton,
    QStackedWidget, QVBoxLayout, QWidget,
)

from lampreas.constants import (
    APP_NAME, APP_VERSION, MIN_WINDOW_HEIGHT, MIN_WINDOW_WIDTH, SIDEBAR_WIDTH,
)
from lampreas.core.i18n import t
from lampreas.database.db_manager import DatabaseManager
from lampreas.database.repositories import AgentRepository, DriverRepository
from lampreas.export.json_export import JsonExporter
from lampreas.services.client_service import ClientService
from lampreas.ui.panels.agent_panel import AgentPanel
from lampreas.ui.panels.client_panel import ClientPanel
from lampreas.ui.panels.driver_panel import DriverPanel
from lampreas.ui.panels.entity_panel import EntityPanel


class MainWindow(QMainWindow):
    """Application main window with sidebar and entity screens."""

    def __init__(self, db: DatabaseManager, export_dir: Path | str | None = None):
        super().__init__()
        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(MIN_WINDOW_WIDTH, MIN_WINDOW_HEIGHT)

        # Core services
        self._client_service = ClientService(db)
        self._agent_repo = AgentRepository(db)
        self._driver_repo = DriverRepository(db)
        self._exporter = JsonExporter(
            self._client_service, self._agent_repo, self._driver_repo, export_dir,
        )

        # Screens
        self._panels: list[EntityPanel] = [
            ClientPanel(self._client_service, self._exporter),
            AgentPanel(self._agent_repo, self._exporter),
            DriverPanel(self._driver_repo, self._exporter),
        ]
        self._stack = QStackedWidget()
        for panel in self._panels:
            panel.status_message.connect(self.statusBar().showMessage)
            self._stack.addWidget(panel)

        central = QWidget()
        layout = QHBoxLayout(central)
        layout.addWidget(self._build_sidebar())
        layout.addWidget(self._stack, 1)
        self.setCentralWidget(central)

        self.show_panel(0)
        self.statusBar().showMessage(t("status.ready", "Ready"))

    def _build_sidebar(self) -> QFrame:
        sidebar = QFrame()
        sidebar.setObjectName("sidebar")
        sidebar.setFixedWidth(SIDEBAR_WIDTH)
        layout = QVBoxLayout(sidebar)

        title = QLabel(APP_NAME)
        title.setObjectName("sidebarTitle")
        layout.addWidget(title)
        layout.addStretch()

        self._nav_group = QButtonGroup(self)
        self._nav_group.setExclusive(True)
        labels = [
            t("sidebar.clients", "Clients"),
            t("sidebar.agents", "Agents"),
            t("sidebar.drivers", "Drivers"),
        ]
        for index, label in enumerate(labels):
            btn = QPushButton(label)
            btn.setCheckable(True)
            btn.setObjectName("sidebarButton")
            self._nav_group.addButton(btn, index)
            layout.addWidget(btn)
        self._nav_group.idClicked.connect(self.show_panel)

        layout.addStretch()
        return sidebar

    @property
    def panels(self) -> list[EntityPanel]:
        return list(self._panels)

    @property
    def current_panel(self) -> EntityPanel:
        return self._panels[self._stack.currentIndex()]

    def show_panel(self, index: int) -> None:
        """Switch to a screen and refresh its table from the store."""
        self._stack.setCurrentIndex(index)
        self._nav_group.button(index).setChecked(True)
        self._panels[index].reload()
