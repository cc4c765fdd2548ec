"""
Navigator - View state and derived course/quiz selections.

Provides:
- Current view (dashboard / course / quiz)
- Active course and active quiz question set
- Course cards and lesson status indicators for display
"""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from fineduca.schemas import Course, QuizQuestion

from .progress import ProgressTracker


class AppView(str, Enum):
    DASHBOARD = "dashboard"
    COURSE = "course"
    QUIZ = "quiz"


@dataclass(frozen=True)
class QuizSelection:
    course_id: str
    lesson_index: int


@dataclass
class NavigationCourse:
    """Course with progress metadata for the dashboard."""
    course: Course
    completion_percent: float
    is_completed: bool


class Navigator:
    """
    Hold navigation state and derive what the view layer should show.

    Reads the catalog and the ProgressTracker; mutates neither.
    """

    def __init__(self, progress: ProgressTracker):
        self.progress = progress
        self.view = AppView.DASHBOARD
        self.selected_course_id: Optional[str] = None
        self.current_quiz: Optional[QuizSelection] = None

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def select_course(self, course_id: str):
        self.selected_course_id = course_id
        self.current_quiz = None
        self.view = AppView.COURSE

    def start_quiz(self, course_id: str, lesson_index: int):
        self.selected_course_id = course_id
        self.current_quiz = QuizSelection(course_id, lesson_index)
        self.view = AppView.QUIZ

    def finish_quiz(self) -> Optional[QuizSelection]:
        """Leave the quiz view, returning the quiz that was active."""
        finished = self.current_quiz
        self.current_quiz = None
        self.view = AppView.COURSE
        return finished

    def back_to_dashboard(self):
        self.selected_course_id = None
        self.current_quiz = None
        self.view = AppView.DASHBOARD

    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------

    def active_course(self, catalog: Mapping[str, Course]) -> Optional[Course]:
        if self.selected_course_id is None:
            return None
        return catalog.get(self.selected_course_id)

    def active_quiz_questions(self, catalog: Mapping[str, Course]) -> Optional[list[QuizQuestion]]:
        """Questions of the active quiz, or None if it cannot be resolved."""
        course = self.active_course(catalog)
        if course is None or self.current_quiz is None:
            return None
        index = self.current_quiz.lesson_index
        if not 0 <= index < course.lesson_count:
            return None
        return list(course.lessons[index].quiz)

    def course_cards(self, catalog: Mapping[str, Course]) -> list[NavigationCourse]:
        return [
            NavigationCourse(
                course=course,
                completion_percent=self.progress.course_completion_percent(course),
                is_completed=self.progress.is_course_completed(course.id),
            )
            for course in catalog.values()
        ]

    def get_status_indicator(self, course_id: str, lesson_index: int) -> str:
        """
        Get status indicator for a lesson row.

        Returns:
            ✓ for passed
            → for the quiz currently open
            ○ for not yet passed
        """
        if self.progress.is_lesson_passed(course_id, lesson_index):
            return "✓"
        if self.current_quiz == QuizSelection(course_id, lesson_index):
            return "→"
        return "○"
