"""
Controls: the year label and the play/pause button.
"""
from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QStyle, QWidget

from animatedscatter.config import ANIMATION_INTERVAL

if TYPE_CHECKING:
    from animatedscatter.model.state import AppStore

logger = logging.getLogger(__name__)


class ControlsWidget(QWidget):
    def __init__(self, store: AppStore, interval: int = ANIMATION_INTERVAL, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.store = store

        # Label changes at the midpoint of the position transition
        self._label_timer = QTimer(self)
        self._label_timer.setSingleShot(True)
        self._label_timer.setInterval(interval // 2)
        self._label_timer.timeout.connect(self._apply_year_label)
        self._pending_year: Optional[int] = None

        layout = QHBoxLayout(self)

        self.btn_play = QPushButton()
        # Space is handled by the window; a focused button would also click on it
        self.btn_play.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.btn_play.clicked.connect(self.store.toggle_animation)
        layout.addWidget(self.btn_play)

        self.lbl_year = QLabel(str(self.store.selected_year))
        self.lbl_year.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.lbl_year.setStyleSheet("QLabel { font-size: 28pt; font-weight: bold; }")
        layout.addWidget(self.lbl_year)
        layout.addStretch()

        self.update_view()

    @property
    def label_delay(self) -> int:
        return self._label_timer.interval()

    def update_view(self) -> None:
        self._pending_year = self.store.selected_year
        self._label_timer.start()
        self.update_play_icon()

    def update_play_icon(self) -> None:
        playing = self.store.animating
        if playing:
            self.btn_play.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPause))
            self.btn_play.setToolTip("Pause (Space)")
        else:
            self.btn_play.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPlay))
            self.btn_play.setToolTip("Play (Space)")

        self.btn_play.setProperty("state", "playing" if playing else "paused")
        # Re-polish so stylesheets keyed on the property pick up the change
        self.btn_play.style().unpolish(self.btn_play)
        self.btn_play.style().polish(self.btn_play)

    def _apply_year_label(self) -> None:
        if self._pending_year is not None:
            self.lbl_year.setText(str(self._pending_year))
