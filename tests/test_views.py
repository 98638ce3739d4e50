"""
Tests for the scatterplot renderer, the controls and the main window wiring.
"""
import pytest
from PySide6.QtCore import QEvent, QObject, Qt
from PySide6.QtGui import QKeyEvent
from PySide6.QtTest import QTest
from PySide6.QtWidgets import QGraphicsSceneHoverEvent

from animatedscatter.config import ChartSettings, DATA_PATH
from animatedscatter.controller.keyboard import KeyboardController
from animatedscatter.model.records import records_for_year
from animatedscatter.model.state import AppStore
from animatedscatter.view.controls import ControlsWidget
from animatedscatter.view.main_window import MainWindow
from animatedscatter.view.scatterplot import ElementGeometry, ScatterplotView

from conftest import make_record


@pytest.fixture
def scatterplot(store, chart_settings):
    view = ScatterplotView(store, chart_settings)
    view.setup()
    store.register_component(view)
    yield view
    view.deleteLater()


# ------------------------------------------------------------------------------
# Scatterplot
# ------------------------------------------------------------------------------

def test_elements_match_frame_for_every_year(store, scatterplot):
    for year in store.years:
        store.set_year(year)
        expected = {r.entity_id for r in records_for_year(store.records, year)}
        assert set(scatterplot.elements) == expected


def test_enter_update_exit_scenario(store, scatterplot):
    """Z enters in 1951 and exits in 1952; A and B are moved, never re-created."""
    assert set(scatterplot.elements) == {"A", "B"}
    item_a = scatterplot.elements["A"]
    item_b = scatterplot.elements["B"]

    store.set_year(1951)
    assert set(scatterplot.elements) == {"A", "B", "Z"}
    assert scatterplot.last_plan.to_create == ["Z"]
    item_z = scatterplot.elements["Z"]

    store.set_year(1952)
    assert set(scatterplot.elements) == {"A", "B"}
    assert scatterplot.last_plan.to_remove == ["Z"]
    assert scatterplot.last_plan.to_create == []
    assert scatterplot.elements["A"] is item_a
    assert scatterplot.elements["B"] is item_b
    assert item_z.scene() is None


def test_geometry_follows_scales(store, scatterplot):
    store.set_year(1952)
    scales = scatterplot.scales
    item_a = scatterplot.elements["A"]
    record = item_a.record

    assert record.year == 1952
    assert item_a.target == ElementGeometry(
        x=scales.x(record.indicator_x), y=scales.y(record.indicator_y), r=scales.r(record.size)
    )
    assert item_a.pos().x() == pytest.approx(scales.x(4.0))
    assert item_a.rect().width() == pytest.approx(2 * scales.r(300.0))


def test_update_twice_is_idempotent(store, scatterplot):
    store.set_year(1951)
    before = {k: item.target for k, item in scatterplot.elements.items()}

    first = scatterplot.update_view()
    second = scatterplot.update_view()

    assert first.is_steady and second.is_steady
    assert {k: item.target for k, item in scatterplot.elements.items()} == before


def test_scales_are_stable_across_years(store, scatterplot):
    scales = scatterplot.scales
    domains = (scales.x.domain, scales.y.domain, scales.r.domain)

    for year in (1951, 1952, 1950):
        store.set_year(year)

    assert scatterplot.scales is scales
    assert (scales.x.domain, scales.y.domain, scales.r.domain) == domains


def test_toggle_twice_leaves_chart_untouched(store, scatterplot):
    """Play then pause re-renders the same frame without creating or moving circles."""
    store.set_year(1951)
    before = {key: (item, item.target) for key, item in scatterplot.elements.items()}

    store.toggle_animation()
    store.toggle_animation()

    assert store.animating is False
    assert not store.scheduler.is_running
    assert store.selected_year == 1951
    assert scatterplot.last_plan.to_create == []
    assert scatterplot.last_plan.to_remove == []
    after = scatterplot.elements
    assert set(after) == set(before)
    for key, (item, target) in before.items():
        assert after[key] is item
        assert item.target == target


def test_retained_elements_are_interpolated(store):
    view = ScatterplotView(store, ChartSettings(transition_ms=750))
    view.setup()
    store.register_component(view)
    item_a = view.elements["A"]
    start = item_a.geometry

    store.set_year(1951)

    # Newly entered circles are placed directly, retained ones glide
    assert not view.elements["Z"].is_animating
    assert item_a.is_animating
    assert item_a.geometry == start
    assert item_a.target != start

    QTest.qWait(900)
    assert not item_a.is_animating
    assert item_a.geometry == item_a.target


def test_duplicate_entity_in_frame_renders_once(qapp, chart_settings, caplog):
    s = AppStore(1950, 1950)
    s.initialize([make_record("A", 1950, x=1.0), make_record("A", 1950, x=2.0)])
    view = ScatterplotView(s, chart_settings)

    view.setup()

    assert list(view.elements) == ["A"]
    assert view.elements["A"].record.indicator_x == 1.0
    assert "Duplicate record for 'A'" in caplog.text


def test_hover_shows_and_clears_entity_name(scatterplot):
    item = scatterplot.elements["B"]

    item.hoverEnterEvent(QGraphicsSceneHoverEvent(QEvent.Type.GraphicsSceneHoverEnter))
    assert scatterplot.tooltip.text() == "B"

    item.hoverLeaveEvent(QGraphicsSceneHoverEvent(QEvent.Type.GraphicsSceneHoverLeave))
    assert scatterplot.tooltip.text() == ""


def test_category_styling_differs(scatterplot):
    a = scatterplot.elements["A"]
    b = scatterplot.elements["B"]
    assert a.category_key == "Asia"
    assert b.category_key == "South-America"
    assert a.brush().color() != b.brush().color()


# ------------------------------------------------------------------------------
# Controls
# ------------------------------------------------------------------------------

def test_year_label_updates_at_half_interval(store):
    controls = ControlsWidget(store, interval=750)
    store.register_component(controls)
    QTest.qWait(450)
    assert controls.lbl_year.text() == "1950"
    assert controls.label_delay == 375

    store.set_year(1951)

    # Not at +0 ms
    assert controls.lbl_year.text() == "1950"
    assert controls._label_timer.isActive()

    QTest.qWait(500)
    assert controls.lbl_year.text() == "1951"


def test_play_indicator_follows_animating(store):
    controls = ControlsWidget(store)
    store.register_component(controls)
    assert controls.btn_play.property("state") == "paused"

    controls.btn_play.click()
    assert store.animating
    assert controls.btn_play.property("state") == "playing"

    controls.btn_play.click()
    assert not store.animating
    assert controls.btn_play.property("state") == "paused"


# ------------------------------------------------------------------------------
# Keyboard
# ------------------------------------------------------------------------------

def test_space_toggles_and_is_consumed(store):
    keyboard = KeyboardController(store)
    press = QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_Space, Qt.KeyboardModifier.NoModifier)

    assert keyboard.eventFilter(QObject(), press) is True
    assert store.animating

    assert keyboard.eventFilter(QObject(), press) is True
    assert not store.animating


def test_other_keys_pass_through(store):
    keyboard = KeyboardController(store)
    press = QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_A, Qt.KeyboardModifier.NoModifier)

    assert keyboard.eventFilter(QObject(), press) is False
    assert not store.animating


def test_space_auto_repeat_is_ignored(store):
    keyboard = KeyboardController(store)
    repeat = QKeyEvent(
        QEvent.Type.KeyPress, Qt.Key.Key_Space, Qt.KeyboardModifier.NoModifier, "", True
    )

    assert keyboard.eventFilter(QObject(), repeat) is True
    assert not store.animating


# ------------------------------------------------------------------------------
# Main window
# ------------------------------------------------------------------------------

def test_window_builds_chart_once_data_arrives(qapp, three_entity_records):
    s = AppStore(1950, 1952)
    window = MainWindow(s, ChartSettings(transition_ms=0), autoplay=False)
    assert window.stack.currentWidget() is window.lbl_loading

    window.on_records_loaded(three_entity_records)

    assert s.is_initialized
    assert window.stack.currentWidget() is window.chart_page
    assert s.components == [window.scatterplot, window.controls]
    assert set(window.scatterplot.elements) == {"A", "B"}
    window.close()


def test_window_shows_load_error(qapp):
    window = MainWindow(AppStore(1950, 1952), autoplay=False)

    window.on_records_loaded([])

    assert window.stack.currentWidget() is window.lbl_loading
    assert "Failed to load data" in window.lbl_loading.text()
    window.close()


def test_window_ignores_reload_after_data_is_shown(qapp, three_entity_records):
    s = AppStore(1950, 1952)
    window = MainWindow(s, ChartSettings(transition_ms=0))
    window.on_records_loaded(three_entity_records)
    assert s.animating

    window.start_loading(DATA_PATH)

    assert window.load_worker is None
    assert window.stack.currentWidget() is window.chart_page
    assert s.animating

    window.on_load_error("late failure")
    assert window.stack.currentWidget() is window.chart_page

    s.toggle_animation()
    window.close()


def test_window_loads_bundled_dataset_and_autoplays(qapp):
    s = AppStore()
    window = MainWindow(s)
    window.show()

    window.start_loading(DATA_PATH)
    assert window.load_worker.wait(10000)
    QTest.qWait(100)

    assert s.is_initialized
    assert s.animating
    assert window.property("animating") is True

    window.close()
    assert not s.animating
