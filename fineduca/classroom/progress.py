"""
ProgressTracker - Track passed quizzes and completed courses.

Each (course, lesson) pair moves one way: not attempted -> passed.
First-time transitions award points through the PointsLedger:
- Passing a lesson quiz for the first time (>= 70% correct)
- Completing a course (all of its lesson quizzes passed)

Completion is only evaluated when a quiz result is recorded. A course that
was not loaded yet at that moment is re-checked at its next quiz event.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from fineduca.schemas import Course, PointReason, Progress

from .ledger import COURSE_COMPLETED_POINTS, QUIZ_PASSED_POINTS, PointsLedger


logger = logging.getLogger(__name__)

PASS_RATIO = 0.70

CourseLookup = Callable[[str], Optional[Course]]


@dataclass(frozen=True)
class QuizOutcome:
    """What a recorded quiz result changed."""
    passed: bool
    first_pass: bool = False
    course_completed: bool = False
    points_awarded: int = 0


class ProgressTracker:
    """
    Owns the Progress slice.

    The catalog is referenced through a lookup callable, never owned, so
    courses that are still being generated simply read as unavailable.
    """

    def __init__(
        self,
        ledger: PointsLedger,
        course_lookup: CourseLookup,
        progress: Optional[Progress] = None,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.ledger = ledger
        self._course_lookup = course_lookup
        self._progress = progress or Progress()
        self._on_change = on_change

    @property
    def progress(self) -> Progress:
        """Snapshot copy of the current progress."""
        return self._progress.model_copy(deep=True)

    # -------------------------------------------------------------------------
    # Quiz results
    # -------------------------------------------------------------------------

    def record_quiz_result(self, course_id: str, lesson_index: int, score: int, total: int) -> QuizOutcome:
        """
        Record a finished quiz.

        Args:
            course_id: Course the quiz belongs to
            lesson_index: Index of the lesson within the course
            score: Correct answers (0 <= score <= total)
            total: Number of questions (> 0)

        Returns:
            QuizOutcome describing the transitions that happened
        """
        if score / total < PASS_RATIO:
            return QuizOutcome(passed=False)

        passed = self._progress.quizzes_passed.setdefault(course_id, [])
        if lesson_index in passed:
            return QuizOutcome(passed=True)

        passed.append(lesson_index)
        self.ledger.append(QUIZ_PASSED_POINTS, PointReason.QUIZ_PASSED)
        points = QUIZ_PASSED_POINTS
        logger.info(f"Lesson {lesson_index} of {course_id} passed for the first time")

        completed = self._check_completion(course_id)
        if completed:
            points += COURSE_COMPLETED_POINTS

        if self._on_change:
            self._on_change()

        return QuizOutcome(
            passed=True,
            first_pass=True,
            course_completed=completed,
            points_awarded=points,
        )

    def _check_completion(self, course_id: str) -> bool:
        """Mark the course completed if every lesson quiz is now passed."""
        course = self._course_lookup(course_id)
        if course is None:
            logger.debug(f"Course {course_id} not loaded; completion check deferred")
            return False
        if course_id in self._progress.courses_completed:
            return False
        if len(self._progress.quizzes_passed.get(course_id, [])) != course.lesson_count:
            return False

        self._progress.courses_completed.append(course_id)
        self.ledger.append(COURSE_COMPLETED_POINTS, PointReason.COURSE_COMPLETED)
        logger.info(f"Course {course_id} completed")
        return True

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def passed_lessons(self, course_id: str) -> set[int]:
        return set(self._progress.quizzes_passed.get(course_id, []))

    def is_lesson_passed(self, course_id: str, lesson_index: int) -> bool:
        return lesson_index in self._progress.quizzes_passed.get(course_id, [])

    def is_course_completed(self, course_id: str) -> bool:
        return course_id in self._progress.courses_completed

    def completed_course_ids(self) -> list[str]:
        return list(self._progress.courses_completed)

    def course_completion_percent(self, course: Course) -> float:
        """Share of the course's lessons passed, 0-100, one decimal."""
        if course.lesson_count == 0:
            return 0.0
        passed = len(self.passed_lessons(course.id))
        return round(min(passed, course.lesson_count) / course.lesson_count * 100, 1)
