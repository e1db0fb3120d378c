"""Entity panel — table, search bar, form and CRUD buttons for one entity.

Layout:
  Top:    Search bar (text, Search, Clear)
  Center: QTableWidget with one row per record
  Bottom: Form (one QLineEdit per field) and action buttons
          New / Save / Delete / Reload / Export JSON

Selecting a row loads it into the form and locks the id field; Save then
updates that record. With the id unlocked (New), Save inserts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QFormLayout, QHBoxLayout, QHeaderView, QLabel, QLineEdit, QMessageBox,
    QPushButton, QTableWidget, QTableWidgetItem, QVBoxLayout, QWidget,
)

from lampreas.core.i18n import t
from lampreas.database.errors import DataAccessError, ExportError
from lampreas.database.repository import TableRepository
from lampreas.export.json_export import EntityKind, JsonExporter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormField:
    """One form input / table column. The first field is the integer id."""
    name: str
    label_key: str
    label: str
    required: bool = True

    @property
    def text(self) -> str:
        return t(self.label_key, self.label)


ID_FIELD = FormField("id", "fields.id", "ID")


class EntityPanel(QWidget):
    """CRUD screen for one entity repository."""

    status_message = pyqtSignal(str)

    def __init__(
        self,
        title: str,
        fields: list[FormField],
        repo: TableRepository,
        exporter: JsonExporter,
        kind: EntityKind,
        parent=None,
    ):
        super().__init__(parent)
        self._title = title
        self._fields = fields
        self._repo = repo
        self._exporter = exporter
        self._kind = kind
        self._records: list = []

        layout = QVBoxLayout(self)

        heading = QLabel(title)
        heading.setObjectName("panelTitle")
        layout.addWidget(heading)

        # Search bar
        search_layout = QHBoxLayout()
        search_layout.addWidget(QLabel(t("panel.search_label", "Search:")))
        self._search_edit = QLineEdit()
        self._search_edit.setPlaceholderText(t("panel.search_placeholder", "Search..."))
        self._search_edit.returnPressed.connect(self._on_search)
        search_layout.addWidget(self._search_edit)

        self._btn_search = QPushButton(t("panel.search", "Search"))
        self._btn_search.clicked.connect(self._on_search)
        search_layout.addWidget(self._btn_search)

        self._btn_clear_search = QPushButton(t("panel.clear", "Clear"))
        self._btn_clear_search.clicked.connect(self._on_clear_search)
        search_layout.addWidget(self._btn_clear_search)
        layout.addLayout(search_layout)

        # Table
        self._table = QTableWidget()
        self._table.setColumnCount(len(fields))
        self._table.setHorizontalHeaderLabels([f.text for f in fields])
        self._table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self._table.setSelectionMode(QTableWidget.SelectionMode.SingleSelection)
        self._table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self._table.horizontalHeader().setSectionResizeMode(
            QHeaderView.ResizeMode.Stretch
        )
        self._table.itemSelectionChanged.connect(self._on_selection_changed)
        layout.addWidget(self._table)

        # Form
        form = QFormLayout()
        self._edits: dict[str, QLineEdit] = {}
        for f in fields:
            edit = QLineEdit()
            edit.setPlaceholderText(f.text)
            form.addRow(f"{f.text}:", edit)
            self._edits[f.name] = edit
        layout.addLayout(form)

        # Buttons
        btn_layout = QHBoxLayout()

        self._btn_new = QPushButton(t("panel.new", "New"))
        self._btn_new.clicked.connect(self._on_new)
        btn_layout.addWidget(self._btn_new)

        self._btn_save = QPushButton(t("panel.save", "Save"))
        self._btn_save.setDefault(True)
        self._btn_save.clicked.connect(self._on_save)
        btn_layout.addWidget(self._btn_save)

        self._btn_delete = QPushButton(t("panel.delete", "Delete"))
        self._btn_delete.clicked.connect(self._on_delete)
        btn_layout.addWidget(self._btn_delete)

        self._btn_reload = QPushButton(t("panel.reload", "Reload"))
        self._btn_reload.clicked.connect(self._on_reload)
        btn_layout.addWidget(self._btn_reload)

        btn_layout.addStretch()

        self._btn_export = QPushButton(t("panel.export_json", "Export JSON"))
        self._btn_export.clicked.connect(self._on_export)
        btn_layout.addWidget(self._btn_export)

        layout.addLayout(btn_layout)

    # ------------------------------------------------------------------
    # Data hooks (overridden by panels with extra tables)
    # ------------------------------------------------------------------

    def _load_records(self, text: str | None) -> list:
        if text is None:
            return self._repo.find_all()
        return self._repo.search(text)

    def _entity(self, values: dict):
        spec = self._repo.spec
        return spec.from_row(*(values[c] for c in spec.columns))

    def _insert(self, values: dict) -> None:
        self._repo.insert(self._entity(values))

    def _update(self, values: dict) -> int:
        return self._repo.update(self._entity(values))

    def _delete(self, record_id: int) -> int:
        return self._repo.delete_by_id(record_id)

    def _exists(self, record_id: int) -> bool:
        return self._repo.exists(record_id)

    # ------------------------------------------------------------------
    # Table
    # ------------------------------------------------------------------

    @property
    def records(self) -> list:
        return list(self._records)

    def reload(self, text: str | None = None) -> bool:
        """Refill the table with all records, or those matching *text*."""
        try:
            self._records = self._load_records(text)
        except DataAccessError as e:
            self._show_error(t("messages.load_error", "Could not load records"), e)
            return False

        self._table.blockSignals(True)
        self._table.clearSelection()
        self._table.setRowCount(len(self._records))
        for row, record in enumerate(self._records):
            for col, f in enumerate(self._fields):
                value = getattr(record, f.name)
                self._table.setItem(
                    row, col, QTableWidgetItem("" if value is None else str(value))
                )
        self._table.blockSignals(False)
        return True

    def _selected_record(self):
        rows = self._table.selectionModel().selectedRows()
        return self._records[rows[0].row()] if rows else None

    def select_row(self, row: int) -> None:
        self._table.selectRow(row)

    def _on_selection_changed(self) -> None:
        record = self._selected_record()
        if record is None:
            return
        for f in self._fields:
            value = getattr(record, f.name)
            self._edits[f.name].setText("" if value is None else str(value))
        self._edits[ID_FIELD.name].setEnabled(False)

    # ------------------------------------------------------------------
    # Form
    # ------------------------------------------------------------------

    def set_field(self, name: str, text: str) -> None:
        self._edits[name].setText(text)

    def field_text(self, name: str) -> str:
        return self._edits[name].text()

    @property
    def is_editing(self) -> bool:
        """True when the form holds an existing record (id locked)."""
        return not self._edits[ID_FIELD.name].isEnabled()

    def clear_form(self) -> None:
        for edit in self._edits.values():
            edit.clear()
        self._edits[ID_FIELD.name].setEnabled(True)
        self._table.clearSelection()

    def _form_values(self) -> dict | None:
        """Validated form values keyed by field name, or None after a warning."""
        texts = {f.name: self._edits[f.name].text().strip() for f in self._fields}
        missing = [f.text for f in self._fields if f.required and not texts[f.name]]
        if missing:
            self._show_warning(
                t("messages.required_title", "Required fields"),
                t("messages.required_text", "Please fill in: {fields}").format(
                    fields=", ".join(missing)
                ),
            )
            return None
        try:
            record_id = int(texts[ID_FIELD.name])
        except ValueError:
            self._show_warning(
                t("messages.invalid_id_title", "Invalid ID"),
                t("messages.invalid_id_text", "The ID must be an integer."),
            )
            return None

        values: dict = {}
        for f in self._fields:
            if f.name == ID_FIELD.name:
                values[f.name] = record_id
            else:
                values[f.name] = texts[f.name] if (texts[f.name] or f.required) else None
        return values

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _on_new(self) -> None:
        self.clear_form()

    def _on_reload(self) -> None:
        self._search_edit.clear()
        self.reload()

    def _on_search(self) -> None:
        text = self._search_edit.text().strip()
        if not text:
            self.reload()
            return
        if self.reload(text):
            self.status_message.emit(
                t("status.search_results", "{count} result(s)").format(count=len(self._records))
            )

    def _on_clear_search(self) -> None:
        self._search_edit.clear()
        self.reload()

    def _on_save(self) -> None:
        values = self._form_values()
        if values is None:
            return
        record_id = values[ID_FIELD.name]

        try:
            if self.is_editing:
                if not self._update(values):
                    self._show_warning(
                        t("messages.not_found_title", "Not found"),
                        t("messages.not_found_text", "No record with ID {id}.").format(id=record_id),
                    )
                    return
                message = t("status.updated", "Record {id} updated").format(id=record_id)
            else:
                if self._exists(record_id):
                    self._show_warning(
                        t("messages.duplicate_title", "Duplicate ID"),
                        t("messages.duplicate_text", "A record with ID {id} already exists.").format(
                            id=record_id
                        ),
                    )
                    return
                self._insert(values)
                message = t("status.inserted", "Record {id} created").format(id=record_id)
        except DataAccessError as e:
            self._show_error(t("messages.save_error", "Could not save record"), e)
            return

        self.status_message.emit(message)
        self._search_edit.clear()
        self.reload()
        self.clear_form()

    def _on_delete(self) -> None:
        record = self._selected_record()
        if record is None:
            self._show_warning(
                t("messages.no_selection_title", "No selection"),
                t("messages.no_selection_text", "Select a row in the table."),
            )
            return

        answer = QMessageBox.question(
            self,
            t("messages.confirm_delete_title", "Confirm delete"),
            t("messages.confirm_delete_text", "Delete record with ID {id}?").format(id=record.id),
        )
        if answer != QMessageBox.StandardButton.Yes:
            return

        try:
            count = self._delete(record.id)
        except DataAccessError as e:
            self._show_error(t("messages.delete_error", "Could not delete record"), e)
            return

        if count:
            self.status_message.emit(
                t("status.deleted", "Record {id} deleted").format(id=record.id)
            )
        else:
            self._show_warning(
                t("messages.not_found_title", "Not found"),
                t("messages.not_found_text", "No record with ID {id}.").format(id=record.id),
            )
        self.reload()
        self.clear_form()

    def _on_export(self) -> None:
        try:
            path = self._exporter.export_to_json(self._kind)
        except (DataAccessError, ExportError) as e:
            self._show_error(t("messages.export_error", "Export failed"), e)
            return
        QMessageBox.information(
            self,
            t("messages.export_done_title", "Export complete"),
            t("messages.export_done_text", "File written to {path}").format(path=path),
        )
        self.status_message.emit(t("status.exported", "Exported: {path}").format(path=path))

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def _show_warning(self, title: str, text: str) -> None:
        QMessageBox.warning(self, title, text)

    def _show_error(self, title: str, error: Exception) -> None:
        logger.warning("%s: %s", title, error)
        QMessageBox.critical(self, title, str(error))
