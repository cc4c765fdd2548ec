"""
PointsLedger - Append-only log of point awards.

The total is always a fold over the events; no running total is stored,
so the history and the displayed score can never drift apart.
"""

from datetime import date, datetime
from typing import Callable, Iterable, Optional

from fineduca.schemas import PointEvent, PointReason
from fineduca.utils import Clock, now_ms


QUIZ_PASSED_POINTS = 50
COURSE_COMPLETED_POINTS = 100
GOAL_COMPLETED_POINTS = 25


class PointsLedger:
    """Event-sourced point economy."""

    def __init__(
        self,
        events: Optional[Iterable[PointEvent]] = None,
        clock: Clock = now_ms,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self._events: list[PointEvent] = list(events or [])
        self._clock = clock
        self._on_change = on_change

    @property
    def events(self) -> tuple[PointEvent, ...]:
        """Read-only snapshot of all events in append order."""
        return tuple(self._events)

    def append(self, points: int, reason: PointReason) -> PointEvent:
        """Record a new award stamped with the current time."""
        event = PointEvent(points=points, timestamp=self._clock(), reason=reason)
        self._events.append(event)
        if self._on_change:
            self._on_change()
        return event

    def total(self) -> int:
        return sum(event.points for event in self._events)

    def points_by_day(self) -> list[tuple[date, int]]:
        """
        Aggregate points per local calendar day, oldest first.

        Feeds the dashboard's points evolution chart.
        """
        by_day: dict[date, int] = {}
        for event in self._events:
            day = datetime.fromtimestamp(event.timestamp / 1000).date()
            by_day[day] = by_day.get(day, 0) + event.points
        return sorted(by_day.items())
