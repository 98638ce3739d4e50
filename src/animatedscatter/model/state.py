"""
Application State (Store)
=========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the dataset, the selectable years, the selected
   year and the animating flag in one place.
2. Single Writer: `set_year` and `toggle_animation` are the only mutation
   paths. Both broadcast synchronously to the registered components before
   returning, so views never lag behind the state.
3. Decoupling: Views read from this object and register themselves; nothing
   looks the store up globally.

Classes:
    SelectionState: The selected year and the animating flag.
    ViewComponent: Contract every registered view satisfies.
    AppStore: The store itself.
"""
from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, runtime_checkable

from PySide6.QtCore import QObject, Signal

from animatedscatter.config import MIN_YEAR, MAX_YEAR, ANIMATION_INTERVAL
from animatedscatter.controller.scheduler import AnimationScheduler
from animatedscatter.model.errors import (
    DataIntegrityError, DoubleInitError, InvalidYearError, NotInitializedError
)
from animatedscatter.model.records import Record, find_duplicates, next_year, records_for_year, year_range

logger = logging.getLogger(__name__)


@dataclass
class SelectionState:
    selected_year: int
    animating: bool = False


@runtime_checkable
class ViewComponent(Protocol):
    def update_view(self) -> None: ...


@runtime_checkable
class ResizableComponent(Protocol):
    def resize_view(self) -> None: ...


class AppStore(QObject):
    """Central state store; broadcasts every mutation to its components."""
    year_changed = Signal(int)
    animation_toggled = Signal(bool)

    def __init__(
        self,
        min_year: int = MIN_YEAR,
        max_year: int = MAX_YEAR,
        interval: int = ANIMATION_INTERVAL,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._years: list[int] = year_range(min_year, max_year)
        self._records: tuple[Record, ...] = ()
        self._selection = SelectionState(selected_year=min_year)
        self._components: list[ViewComponent] = []
        self._initialized = False

        self.scheduler = AnimationScheduler(interval, parent=self)
        self.scheduler.tick.connect(self.increment_year)

    # ------------------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------------------

    @property
    def records(self) -> tuple[Record, ...]:
        return self._records

    @property
    def years(self) -> list[int]:
        return list(self._years)

    @property
    def selected_year(self) -> int:
        return self._selection.selected_year

    @property
    def animating(self) -> bool:
        return self._selection.animating

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def current_records(self) -> list[Record]:
        """Records of the selected year, the frame the views display."""
        return records_for_year(self._records, self._selection.selected_year)

    @property
    def components(self) -> list[ViewComponent]:
        return list(self._components)

    # ------------------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------------------

    def initialize(self, records: Sequence[Record]) -> None:
        """Store the dataset. Must be called exactly once, after the load completes."""
        if self._initialized:
            logger.error("Store initialized twice, refusing to re-seed state.")
            raise DoubleInitError("The store has already been initialized.")
        if not records:
            raise NotInitializedError("Cannot initialize the store without data.")

        self._records = tuple(records)
        self._selection = SelectionState(selected_year=self._years[0], animating=False)
        self._initialized = True

        duplicates = find_duplicates(self._records)
        if duplicates:
            shown = ", ".join(f"{e} ({y})" for e, y in duplicates[:5])
            logger.warning(str(DataIntegrityError(
                f"{len(duplicates)} duplicate (entity, year) keys in dataset: {shown}"
            )))

        logger.info(
            f"Store initialized with {len(self._records)} records, "
            f"years {self._years[0]}-{self._years[-1]}."
        )

    def set_year(self, year: int) -> None:
        self._require_initialized()
        # bool is an Integral, and 1951.0 == 1951 would pass the membership test
        if isinstance(year, bool) or not isinstance(year, numbers.Integral) or year not in self._years:
            logger.warning(f"Rejected year {year}: outside {self._years[0]}-{self._years[-1]}.")
            raise InvalidYearError(year, self._years[0], self._years[-1])

        year = int(year)
        self._selection.selected_year = year
        self.update()
        self.year_changed.emit(year)

    def increment_year(self) -> None:
        self._require_initialized()
        self.set_year(next_year(self._years, self._selection.selected_year))

    def toggle_animation(self) -> None:
        self._require_initialized()
        if self._selection.animating:
            self.scheduler.stop()
            self._selection.animating = False
        else:
            self.scheduler.start()
            self._selection.animating = True
        logger.info("Animation playing." if self._selection.animating else "Animation paused.")

        self.update()
        self.animation_toggled.emit(self._selection.animating)

    # ------------------------------------------------------------------------------
    # Broadcast
    # ------------------------------------------------------------------------------

    def register_component(self, component: ViewComponent) -> None:
        if not isinstance(component, ViewComponent):
            raise TypeError(f"{type(component).__name__} has no update_view()")
        if component in self._components:
            logger.warning(f"{type(component).__name__} is already registered.")
            return
        self._components.append(component)

    def update(self) -> None:
        """Notify every component, in registration order."""
        for component in self._components:
            component.update_view()

    def resize(self) -> None:
        for component in self._components:
            if isinstance(component, ResizableComponent):
                component.resize_view()

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise NotInitializedError("The store has no data yet.")
