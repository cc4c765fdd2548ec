"""
GoalsManager - User-defined goals with a completion flag.

Completing a goal awards points; un-completing it never retracts them,
and completing it again awards them again.
"""

import logging
from typing import Callable, Iterable, Optional

from fineduca.schemas import Goal, PointReason
from fineduca.utils import Clock, now_ms

from .ledger import GOAL_COMPLETED_POINTS, PointsLedger


logger = logging.getLogger(__name__)


class GoalsManager:
    """Owns the Goals slice."""

    def __init__(
        self,
        ledger: PointsLedger,
        goals: Optional[Iterable[Goal]] = None,
        clock: Clock = now_ms,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.ledger = ledger
        self._goals: list[Goal] = list(goals or [])
        self._clock = clock
        self._on_change = on_change

    @property
    def goals(self) -> list[Goal]:
        return list(self._goals)

    @property
    def completed_count(self) -> int:
        return sum(1 for goal in self._goals if goal.completed)

    def get_goal(self, goal_id: int) -> Optional[Goal]:
        for goal in self._goals:
            if goal.id == goal_id:
                return goal
        return None

    def add_goal(self, text: str) -> Goal:
        """
        Create a goal. Empty text is rejected by callers, not here.

        The id is the creation timestamp; if that id is already taken
        (two goals in the same millisecond) it is bumped past the highest id.
        """
        goal_id = self._clock()
        if any(goal.id >= goal_id for goal in self._goals):
            goal_id = max(goal.id for goal in self._goals) + 1

        goal = Goal(id=goal_id, text=text)
        self._goals.append(goal)
        self._notify()
        return goal

    def toggle_goal(self, goal_id: int) -> Optional[Goal]:
        """Flip a goal's completed flag. Unknown ids are ignored."""
        for i, goal in enumerate(self._goals):
            if goal.id != goal_id:
                continue

            toggled = goal.model_copy(update={"completed": not goal.completed})
            self._goals[i] = toggled
            if toggled.completed:
                self.ledger.append(GOAL_COMPLETED_POINTS, PointReason.GOAL_COMPLETED)
                logger.info(f"Goal {goal_id} completed")
            self._notify()
            return toggled

        logger.warning(f"Toggle requested for unknown goal {goal_id}")
        return None

    def _notify(self):
        if self._on_change:
            self._on_change()
