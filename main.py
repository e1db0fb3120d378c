"""Lampreas Violeta — Entry Point."""
import logging
import sys

from PyQt6.QtWidgets import QMessageBox

from lampreas.application import create_application
from lampreas.core.i18n import TranslationManager, t
from lampreas.database.config import load_database_config
from lampreas.database.db_manager import DatabaseManager
from lampreas.database.errors import DataAccessError
from lampreas.main_window import MainWindow


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_application(sys.argv)
    TranslationManager.init()

    try:
        db = DatabaseManager(load_database_config())
        db.initialize_database()
    except DataAccessError as e:
        logging.getLogger(__name__).exception("Database unavailable")
        QMessageBox.critical(
            None, t("messages.startup_error", "Cannot open the database"), str(e)
        )
        sys.exit(1)

    window = MainWindow(db)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
