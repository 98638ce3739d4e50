"""
Keyboard shortcut: the space bar toggles the animation.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from PySide6.QtCore import QEvent, QObject, Qt

if TYPE_CHECKING:
    from animatedscatter.model.state import AppStore


class KeyboardController(QObject):
    """Application-wide event filter. Consumes Space, lets everything else through."""

    def __init__(self, store: AppStore, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.store = store

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if event.type() == QEvent.Type.KeyPress and event.key() == Qt.Key.Key_Space:
            # Auto-repeat would flip the state on every repeat while held
            if not event.isAutoRepeat():
                self.store.toggle_animation()
            return True
        return super().eventFilter(watched, event)
