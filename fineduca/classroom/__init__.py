"""
FinEduca Classroom - Runtime components for progress and points.

This module provides:
- PointsLedger: Append-only point events
- ProgressTracker: Quiz passes and course completion
- GoalsManager: User goals
- Navigator: View state and derived selections
"""

from .ledger import (
    PointsLedger,
    QUIZ_PASSED_POINTS,
    COURSE_COMPLETED_POINTS,
    GOAL_COMPLETED_POINTS,
)

from .progress import (
    ProgressTracker,
    QuizOutcome,
    PASS_RATIO,
)

from .goals import GoalsManager

from .navigator import (
    Navigator,
    AppView,
    QuizSelection,
    NavigationCourse,
)

__all__ = [
    # Ledger
    "PointsLedger",
    "QUIZ_PASSED_POINTS",
    "COURSE_COMPLETED_POINTS",
    "GOAL_COMPLETED_POINTS",
    # Progress
    "ProgressTracker",
    "QuizOutcome",
    "PASS_RATIO",
    # Goals
    "GoalsManager",
    # Navigator
    "Navigator",
    "AppView",
    "QuizSelection",
    "NavigationCourse",
]
