"""
Main Application Window
=======================
The primary GUI container: a loading page shown while the dataset is read,
then the chart page with the scatterplot and its controls.

Why is this file needed?
------------------------
1. Layout: It builds the fixed-size chart page once.
2. Wiring: It hands the loaded dataset to the store, registers the views in
   broadcast order and installs the keyboard shortcut.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QPropertyAnimation, Qt
from PySide6.QtWidgets import (
    QApplication, QGraphicsOpacityEffect, QLabel, QMainWindow, QStackedWidget, QVBoxLayout, QWidget
)

from animatedscatter.config import ChartSettings, DEFAULT_CHART
from animatedscatter.controller.keyboard import KeyboardController
from animatedscatter.model.errors import ScatterplotError
from animatedscatter.model.io import DatasetLoadWorker
from animatedscatter.model.records import Record
from animatedscatter.model.state import AppStore
from animatedscatter.view.controls import ControlsWidget
from animatedscatter.view.scatterplot import ScatterplotView

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Animated Scatterplot"
FADE_DURATION = 250


class MainWindow(QMainWindow):
    def __init__(self, store: AppStore, settings: ChartSettings = DEFAULT_CHART, autoplay: bool = True) -> None:
        super().__init__()
        self.store = store
        self.settings = settings
        self.autoplay = autoplay
        self.load_worker: Optional[DatasetLoadWorker] = None
        self.scatterplot: Optional[ScatterplotView] = None
        self.controls: Optional[ControlsWidget] = None
        self.keyboard: Optional[KeyboardController] = None
        self._fade: Optional[QPropertyAnimation] = None

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.setProperty("animating", False)

        self.stack = QStackedWidget()
        self.setCentralWidget(self.stack)

        # --- 1. LOADING PAGE ---
        self.lbl_loading = QLabel("Loading data...")
        self.lbl_loading.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.lbl_loading.setWordWrap(True)
        self.stack.addWidget(self.lbl_loading)

        # --- 2. CHART PAGE (filled once the data is in) ---
        self.chart_page = QWidget()
        self.chart_layout = QVBoxLayout(self.chart_page)
        self.stack.addWidget(self.chart_page)

        self.stack.setCurrentWidget(self.lbl_loading)
        self.store.animation_toggled.connect(self._on_animation_toggled)

    # ------------------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------------------

    def start_loading(self, filepath: str) -> None:
        if self.store.is_initialized:
            logger.warning(f"Dataset already loaded, ignoring load of {filepath}.")
            return

        logger.info(f"Starting dataset load: {filepath}")
        self.lbl_loading.setText("Loading data...")
        self.load_worker = DatasetLoadWorker(filepath)
        self.load_worker.records_loaded.connect(self.on_records_loaded)
        self.load_worker.error_occurred.connect(self.on_load_error)
        self.load_worker.start()

    def on_records_loaded(self, records: list[Record]) -> None:
        try:
            self.store.initialize(records)
        except ScatterplotError as e:
            logger.exception("Store initialization failed")
            self.on_load_error(str(e))
            return

        self.build_chart()
        self.reveal_chart()

        if self.autoplay:
            self.store.toggle_animation()

    def on_load_error(self, msg: str) -> None:
        logger.error(f"Cannot show chart: {msg}")
        self.lbl_loading.setText(f"Failed to load data:\n{msg}")
        if self.store.is_initialized:
            # The chart already shows valid data
            return
        self.stack.setCurrentWidget(self.lbl_loading)

    # ------------------------------------------------------------------------------
    # Chart
    # ------------------------------------------------------------------------------

    def build_chart(self) -> None:
        """Create the views and register them with the store, scatterplot first."""
        self.scatterplot = ScatterplotView(self.store, self.settings)
        self.scatterplot.setup()
        self.store.register_component(self.scatterplot)

        self.controls = ControlsWidget(self.store, interval=self.store.scheduler.interval)
        self.store.register_component(self.controls)

        self.chart_layout.addWidget(self.scatterplot, alignment=Qt.AlignmentFlag.AlignCenter)
        self.chart_layout.addWidget(self.controls)

        self.keyboard = KeyboardController(self.store, parent=self)
        app = QApplication.instance()
        if app is not None:
            app.installEventFilter(self.keyboard)

    def reveal_chart(self) -> None:
        """Swap the loading page for the chart and fade it in."""
        effect = QGraphicsOpacityEffect(self.chart_page)
        effect.setOpacity(0.0)
        self.chart_page.setGraphicsEffect(effect)
        self.stack.setCurrentWidget(self.chart_page)

        self._fade = QPropertyAnimation(effect, b"opacity", self)
        self._fade.setDuration(FADE_DURATION)
        self._fade.setStartValue(0.0)
        self._fade.setEndValue(1.0)
        # Drop the effect once fully opaque
        self._fade.finished.connect(lambda: self.chart_page.setGraphicsEffect(None))
        self._fade.start()

    def _on_animation_toggled(self, animating: bool) -> None:
        self.setProperty("animating", animating)

    def closeEvent(self, event) -> None:
        if self.store.is_initialized and self.store.animating:
            self.store.toggle_animation()
        if self.keyboard is not None and QApplication.instance() is not None:
            QApplication.instance().removeEventFilter(self.keyboard)
        if self.load_worker is not None:
            self.load_worker.wait()
        super().closeEvent(event)
