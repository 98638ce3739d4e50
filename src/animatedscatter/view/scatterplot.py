"""
Scatterplot (Reconciliation Renderer)
=====================================
Keeps one circle per entity of the selected year on a fixed-size scene.

Lifecycle:
1. setup   - runs once: scales over the whole dataset, axes, tooltip.
2. update_view - runs on every store broadcast: diff the rendered circles
   against the frame of the selected year and create / move / remove.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

import pyqtgraph as pg
from PySide6.QtCore import QAbstractAnimation, QEasingCurve, QRectF, Qt, QVariantAnimation
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import (
    QGraphicsEllipseItem, QGraphicsItem, QGraphicsRectItem, QGraphicsScene,
    QGraphicsSceneHoverEvent, QGraphicsSimpleTextItem, QGraphicsView, QWidget
)

from animatedscatter.config import ChartSettings, DEFAULT_CHART
from animatedscatter.controller.reconcile import ReconcilePlan, index_frame, plan_reconciliation
from animatedscatter.model.records import Record
from animatedscatter.model.scales import ChartScales

if TYPE_CHECKING:
    from animatedscatter.model.state import AppStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ElementGeometry:
    """Centre (px, plot-area coordinates) and radius of one circle."""
    x: float
    y: float
    r: float

    def lerp(self, other: ElementGeometry, t: float) -> ElementGeometry:
        return ElementGeometry(
            x=self.x + (other.x - self.x) * t,
            y=self.y + (other.y - self.y) * t,
            r=self.r + (other.r - self.r) * t,
        )


class ChartTooltip(QGraphicsSimpleTextItem):
    """Entity name shown in the top-right corner of the plot area."""

    def __init__(self, right_edge: float, parent: Optional[QGraphicsItem] = None) -> None:
        super().__init__(parent)
        self._right_edge = right_edge
        self.setZValue(10)

    def show_text(self, text: str) -> None:
        self.setText(text)
        self.setPos(self._right_edge - self.boundingRect().width(), 0)

    def clear(self) -> None:
        self.setText("")


class EntityItem(QGraphicsEllipseItem):
    """The circle of one entity; created on enter and moved in place afterwards."""

    def __init__(self, record: Record, tooltip: ChartTooltip, parent: Optional[QGraphicsItem] = None) -> None:
        super().__init__(parent)
        self.entity_id: str = record.entity_id
        self.category_key: str = record.category_key
        self.record: Record = record
        self.target: Optional[ElementGeometry] = None
        self._current: Optional[ElementGeometry] = None
        self._tooltip = tooltip
        self._animation: Optional[QVariantAnimation] = None

        self.setAcceptHoverEvents(True)

    @property
    def geometry(self) -> Optional[ElementGeometry]:
        """Geometry currently drawn (mid-transition values while animating)."""
        return self._current

    @property
    def is_animating(self) -> bool:
        return self._animation is not None and self._animation.state() == QAbstractAnimation.State.Running

    def set_style(self, color) -> None:
        self.setBrush(pg.mkBrush(color))
        self.setPen(pg.mkPen("w", width=1))

    def move_to(self, target: ElementGeometry, duration: int = 0) -> None:
        if target == self.target:
            return
        self.target = target
        self.stop()

        if duration <= 0 or self._current is None:
            self._apply(target)
            return

        start = self._current
        anim = QVariantAnimation()
        anim.setStartValue(0.0)
        anim.setEndValue(1.0)
        anim.setDuration(duration)
        anim.setEasingCurve(QEasingCurve.Type.InOutCubic)
        anim.valueChanged.connect(lambda t: self._apply(start.lerp(target, float(t))))
        anim.finished.connect(lambda: self._apply(target))
        self._animation = anim
        anim.start()

    def stop(self) -> None:
        if self._animation is not None:
            self._animation.stop()
            self._animation = None

    def _apply(self, geometry: ElementGeometry) -> None:
        self._current = geometry
        self.setRect(QRectF(-geometry.r, -geometry.r, 2 * geometry.r, 2 * geometry.r))
        self.setPos(geometry.x, geometry.y)

    def hoverEnterEvent(self, event: QGraphicsSceneHoverEvent) -> None:
        self._tooltip.show_text(self.entity_id)
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event: QGraphicsSceneHoverEvent) -> None:
        self._tooltip.clear()
        super().hoverLeaveEvent(event)


class ScatterplotView(QGraphicsView):
    def __init__(
        self,
        store: AppStore,
        settings: ChartSettings = DEFAULT_CHART,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.store = store
        self.settings = settings
        self.scales: Optional[ChartScales] = None
        self.last_plan: Optional[ReconcilePlan] = None

        self._elements: dict[str, EntityItem] = {}
        self._colors: dict[str, object] = {}
        self.x_axis: Optional[pg.AxisItem] = None
        self.y_axis: Optional[pg.AxisItem] = None

        self._scene = QGraphicsScene(0, 0, settings.width, settings.height, self)
        self.setScene(self._scene)
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setFixedSize(settings.width + 2 * self.frameWidth(), settings.height + 2 * self.frameWidth())
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)

        # Plot area, translated by the margins; circles live in its coordinates
        self._plot_area = QGraphicsRectItem(0, 0, settings.inner_width, settings.inner_height)
        self._plot_area.setPen(pg.mkPen(None))
        self._plot_area.setPos(settings.margin_left, settings.margin_top)
        self._scene.addItem(self._plot_area)

        self.tooltip = ChartTooltip(settings.inner_width, parent=self._plot_area)

    @property
    def elements(self) -> dict[str, EntityItem]:
        return dict(self._elements)

    # ------------------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------------------

    def setup(self) -> None:
        records = self.store.records
        self.scales = ChartScales.from_records(records, self.settings)

        categories = sorted({r.category_key for r in records})
        self._colors = {
            key: pg.intColor(i, hues=max(len(categories), 1), alpha=200)
            for i, key in enumerate(categories)
        }

        self._draw_axes()
        logger.info(f"Scatterplot set up: {self.scales.x}, {self.scales.y}, {self.scales.r}")
        self.update_view()

    def update_view(self) -> ReconcilePlan:
        if self.scales is None:
            raise RuntimeError("ScatterplotView.setup() must run before update_view().")

        frame = index_frame(self.store.current_records())
        plan = plan_reconciliation(self._elements.keys(), frame)

        for key in plan.to_create:
            self._elements[key] = self._create_element(frame[key])

        entered = set(plan.to_create)
        for key in plan.to_create + plan.to_update:
            item = self._elements[key]
            record = frame[key]
            item.record = record
            # Newly entered circles have nothing to interpolate from
            duration = 0 if key in entered else self.settings.transition_ms
            item.move_to(self._geometry_for(record), duration)

        for key in plan.to_remove:
            self._remove_element(key)

        self.last_plan = plan
        logger.debug(
            f"Year {self.store.selected_year}: +{len(plan.to_create)} "
            f"~{len(plan.to_update)} -{len(plan.to_remove)}"
        )
        return plan

    # ------------------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------------------

    def _geometry_for(self, record: Record) -> ElementGeometry:
        return ElementGeometry(
            x=self.scales.x(record.indicator_x),
            y=self.scales.y(record.indicator_y),
            r=self.scales.r(record.size),
        )

    def _create_element(self, record: Record) -> EntityItem:
        item = EntityItem(record, self.tooltip, parent=self._plot_area)
        item.set_style(self._colors.get(record.category_key, "k"))
        return item

    def _remove_element(self, key: str) -> None:
        item = self._elements.pop(key)
        item.stop()
        if self.tooltip.text() == key:
            self.tooltip.clear()
        self._scene.removeItem(item)

    def _draw_axes(self) -> None:
        s = self.settings
        x_axis = pg.AxisItem("bottom")
        x_axis.setRange(*self.scales.x.domain)
        y_axis = pg.AxisItem("left")
        y_axis.setRange(*self.scales.y.domain)

        for axis in (x_axis, y_axis):
            axis.setPen("k")
            axis.setTextPen("k")
            self._scene.addItem(axis)

        x_axis.setGeometry(QRectF(s.margin_left, s.margin_top + s.inner_height, s.inner_width, s.margin_bottom))
        y_axis.setGeometry(QRectF(0, s.margin_top, s.margin_left, s.inner_height))
        self.x_axis, self.y_axis = x_axis, y_axis
