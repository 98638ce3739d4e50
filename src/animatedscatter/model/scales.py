"""
Scales
======
Maps indicator values to pixels. Domains are computed once over the whole
dataset so the axes stay fixed while the points move.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from animatedscatter.config import ChartSettings
from animatedscatter.model.records import Record


class LinearScale:
    def __init__(self, domain: tuple[float, float], range_: tuple[float, float]) -> None:
        self._domain = (float(domain[0]), float(domain[1]))
        self._range = (float(range_[0]), float(range_[1]))

    @property
    def domain(self) -> tuple[float, float]:
        return self._domain

    @property
    def range(self) -> tuple[float, float]:
        return self._range

    def _normalize(self, value: float) -> float:
        d0, d1 = self._domain
        if d1 == d0:
            return 0.0
        return (value - d0) / (d1 - d0)

    def __call__(self, value: float) -> float:
        r0, r1 = self._range
        return r0 + self._normalize(value) * (r1 - r0)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(domain={self._domain}, range={self._range})"


class SqrtScale(LinearScale):
    """Square-root scale, so that the area of a circle is proportional to the value."""

    def _normalize(self, value: float) -> float:
        d0, d1 = np.sqrt(self._domain)
        if d1 == d0:
            return 0.0
        return float((np.sqrt(max(value, 0.0)) - d0) / (d1 - d0))


@dataclass(frozen=True)
class ChartScales:
    x: LinearScale
    y: LinearScale
    r: SqrtScale

    @classmethod
    def from_records(cls, records: Sequence[Record], settings: ChartSettings) -> ChartScales:
        if records:
            values = np.array([(r.indicator_x, r.indicator_y, r.size) for r in records], dtype=np.float64)
            max_x, max_y, max_size = np.nanmax(values, axis=0)
        else:
            max_x = max_y = max_size = 0.0

        return cls(
            x=LinearScale((0.0, max_x), (0.0, settings.inner_width)),
            # Inverted so larger values render higher
            y=LinearScale((0.0, max_y), (settings.inner_height, 0.0)),
            r=SqrtScale((0.0, max_size), (0.0, settings.radius_max)),
        )
