"""Application entry point and setup for Rocket Launch."""

import logging
import sys
from pathlib import Path

from PySide6.QtGui import QGuiApplication, QIcon
from PySide6.QtWidgets import QApplication

from rocketlaunch.core.session import LaunchSession
from rocketlaunch.core.tuning import load_tuning
from rocketlaunch.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Load the launch rules, build the main window and start the event loop."""
    configure_logging()

    try:
        tuning = load_tuning()
    except (FileNotFoundError, ValueError) as e:
        logging.error("Could not load tuning: %s", e)
        sys.exit(1)

    app = QApplication(sys.argv)
    app.setApplicationName("Rocket Launch")
    app.setApplicationDisplayName("Rocket Launch")

    icon_path = Path(__file__).parent / "assets" / "rocket.png"
    if icon_path.exists():
        app.setWindowIcon(QIcon(str(icon_path)))

    window = MainWindow(LaunchSession(tuning))
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.resize(min(900, geometry.width()), min(900, geometry.height()))
    window.show()

    sys.exit(app.exec())
