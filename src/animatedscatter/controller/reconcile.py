"""
Keyed reconciliation of the rendered elements against the current frame.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Iterable

from animatedscatter.model.errors import DataIntegrityError
from animatedscatter.model.records import Record

logger = logging.getLogger(__name__)


@dataclass
class ReconcilePlan:
    to_create: list[str] = field(default_factory=list)
    to_update: list[str] = field(default_factory=list)
    to_remove: list[str] = field(default_factory=list)

    @property
    def is_steady(self) -> bool:
        """True when nothing enters or exits."""
        return not self.to_create and not self.to_remove


def index_frame(records: Iterable[Record]) -> dict[str, Record]:
    """
    Key the frame by entity identity.

    A repeated entity breaks the one-element-per-entity contract; it is
    reported and the first record wins.
    """
    frame: dict[str, Record] = {}
    for record in records:
        if record.entity_id in frame:
            error = DataIntegrityError(
                f"Duplicate record for '{record.entity_id}' in {record.year}, keeping the first one."
            )
            logger.warning(str(error))
            continue
        frame[record.entity_id] = record
    return frame


def plan_reconciliation(previous: AbstractSet[str], frame: dict[str, Record]) -> ReconcilePlan:
    """
    Three-way set difference between the rendered keys and the frame keys:
    create = current - previous, update = current & previous,
    remove = previous - current. Frame order is kept for create and update.
    """
    to_create = [key for key in frame if key not in previous]
    to_update = [key for key in frame if key in previous]
    to_remove = sorted(key for key in previous if key not in frame)
    return ReconcilePlan(to_create=to_create, to_update=to_update, to_remove=to_remove)
