"""Application entry point and setup for the Drillwort vocabulary drill."""

import logging
import os
import sys
from pathlib import Path

from PySide6.QtGui import QFont, QGuiApplication
from PySide6.QtWidgets import QApplication

from drillwort.core.progress import ProgressStore
from drillwort.core.settings import SettingsStore
from drillwort.core.vocabulary import VocabularyRepository
from drillwort.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def data_home() -> Path:
    """Directory holding progress and settings; ``DRILLWORT_HOME`` overrides ~/.drillwort."""
    override = os.environ.get("DRILLWORT_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".drillwort"


def run() -> None:
    """Initialize the application, load vocabulary and stores, and show the drill window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Drillwort")
    app.setApplicationDisplayName("Drillwort")

    app_font = QFont(app.font().family())
    app_font.setPointSize(12)
    app.setFont(app_font)
    QGuiApplication.setFont(app_font)

    home = data_home()
    logging.info("Using data directory %s", home)
    vocabulary = VocabularyRepository()
    progress_store = ProgressStore(home / "progress.json")
    settings_store = SettingsStore(home / "settings.json")

    window = MainWindow(vocabulary=vocabulary, progress_store=progress_store, settings_store=settings_store)
    window.resize(1100, 720)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
