"""Aggregate counters kept alongside the script map."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class StatsEvent(Enum):
    CREATED = "created"
    VIEWED = "viewed"


@dataclass(slots=True)
class StoreStatistics:
    total_scripts: int = 0
    total_views: int = 0
    # Monotonic; there is no day-boundary reset.
    created_today: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "total_scripts": self.total_scripts,
            "total_views": self.total_views,
            "created_today": self.created_today,
        }


class StatsAggregator:
    """Apply store events to a :class:`StoreStatistics` instance.

    Only increments happen here. The repository lowers ``total_scripts``
    itself when a script is deleted.
    """

    def __init__(self) -> None:
        self.counters = StoreStatistics()

    def record(self, event: StatsEvent) -> None:
        if event is StatsEvent.CREATED:
            self.counters.total_scripts += 1
            self.counters.created_today += 1
        elif event is StatsEvent.VIEWED:
            self.counters.total_views += 1
        else:
            raise ValueError(f"Unknown stats event: {event!r}")

    def snapshot(self) -> StoreStatistics:
        return replace(self.counters)
