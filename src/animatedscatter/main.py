"""
Application Initialization
==========================
This module constructs the store and the window and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the State Store (AppStore).
2. Instantiates the Main Window (View), passing the store in.
3. Starts the dataset load; the window takes over once the data arrives.
"""
import logging
import sys

from PySide6.QtWidgets import QApplication

import pyqtgraph as pg

from animatedscatter.config import DATA_PATH
from animatedscatter.logging_config import setup_logging
from animatedscatter.model.state import AppStore
from animatedscatter.view.main_window import MainWindow, VISIBLE_APP_NAME

pg.setConfigOption("background", "w")
pg.setConfigOption("foreground", "k")


def main() -> None:
    # Use logging.DEBUG to see every reconciliation pass
    setup_logging(level=logging.INFO)

    app = QApplication(sys.argv)
    app.setApplicationName(VISIBLE_APP_NAME)

    # Optional first argument: path to another dataset with the same columns
    data_path = sys.argv[1] if len(sys.argv) > 1 else DATA_PATH

    store = AppStore()

    window = MainWindow(store)
    window.show()
    window.start_loading(data_path)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
