"""Shared fixtures: an offscreen QApplication and a small three-entity dataset."""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from animatedscatter.config import ChartSettings
from animatedscatter.model.records import Record
from animatedscatter.model.state import AppStore


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


def make_record(entity_id, year, x=1.0, y=50.0, size=100.0, category="Asia"):
    return Record(
        entity_id=entity_id, year=year, indicator_x=x, indicator_y=y, size=size, category=category
    )


@pytest.fixture
def three_entity_records():
    """A and B exist every year 1950-1952, Z only in 1951."""
    records = []
    for i, year in enumerate((1950, 1951, 1952)):
        records.append(make_record("A", year, x=2.0 + i, y=40.0 + i, size=100.0 * (i + 1)))
        records.append(make_record("B", year, x=6.0 - i, y=60.0 + i, size=400.0, category="South America"))
    records.append(make_record("Z", 1951, x=3.0, y=70.0, size=900.0, category="Europe"))
    return records


@pytest.fixture
def store(qapp, three_entity_records):
    s = AppStore(min_year=1950, max_year=1952, interval=750)
    s.initialize(three_entity_records)
    yield s
    if s.animating:
        s.toggle_animation()


@pytest.fixture
def chart_settings():
    # No interpolation so geometry checks see final values immediately
    return ChartSettings(transition_ms=0)


class RecordingComponent:
    """View double that records every broadcast it receives."""

    def __init__(self, name, log, store=None):
        self.name = name
        self.log = log
        self.store = store

    def update_view(self):
        if self.store is not None:
            self.log.append((self.name, self.store.selected_year, self.store.animating))
        else:
            self.log.append(self.name)
