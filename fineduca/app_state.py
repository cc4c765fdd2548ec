"""
FinEducaApp - Single owner of all state slices.

Wires the ledger, progress tracker, goals, catalog and navigator together and
mirrors every slice mutation to the store through one write-through hook.
The view layer reads snapshots from here and calls the intent methods; it
holds no business logic of its own.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, Mapping, Optional

from fineduca.catalog import SEED_TOPICS, CatalogLoader, Pacer, SeedTopic
from fineduca.classroom import (
    AppView,
    GoalsManager,
    Navigator,
    PointsLedger,
    ProgressTracker,
    QuizOutcome,
)
from fineduca.config import Settings
from fineduca.errors import DuplicateTopicError, GenerationError
from fineduca.generation.base import AvatarGenerator, ContentGenerator
from fineduca.schemas import Course, Difficulty, Goal, PointEvent, Progress, QuizQuestion
from fineduca.storage import KeyValueStore, PersistenceSynchronizer, SQLiteStore, StateSnapshot
from fineduca.themes import Theme, find_theme
from fineduca.utils import Clock, now_ms


logger = logging.getLogger(__name__)

DUPLICATE_TOPIC_MESSAGE = "Você já gerou um curso sobre este tópico!"
UNKNOWN_LOAD_ERROR = "Ocorreu um erro desconhecido ao carregar os cursos."


@dataclass
class LoadResult:
    """Outcome of startup; error blocks the dashboard when set."""
    courses: dict[str, Course] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class CourseRequestResult:
    """Outcome of an on-demand course request; message is shown inline."""
    course: Optional[Course] = None
    message: Optional[str] = None
    duplicate: bool = False


@dataclass
class DashboardStats:
    completed_courses: int
    total_courses: int
    total_points: int
    completed_goals: int
    total_goals: int


class FinEducaApp:
    """Orchestrating owner exposing narrow mutation methods per slice."""

    def __init__(
        self,
        store: KeyValueStore,
        content_generator: ContentGenerator,
        avatar_generator: Optional[AvatarGenerator] = None,
        seed_topics: Iterable[SeedTopic] = SEED_TOPICS,
        pacer: Optional[Pacer] = None,
        clock: Clock = now_ms,
        status_callback: Optional[Callable[[str], None]] = None,
    ):
        self.sync = PersistenceSynchronizer(store)
        self.catalog = CatalogLoader(
            content_generator,
            self.sync,
            seed_topics=seed_topics,
            pacer=pacer,
            status_callback=status_callback,
        )
        self.avatar_generator = avatar_generator
        self._clock = clock
        self._savers: dict[str, Callable[[], None]] = {
            "points": lambda: self.sync.save_points(self.ledger.events),
            "progress": lambda: self.sync.save_progress(self.tracker.progress),
            "goals": lambda: self.sync.save_goals(self.goals.goals),
            "avatar": lambda: self.sync.save_avatar(self.avatar),
            "theme": lambda: self.sync.save_theme(self.theme.id),
        }
        self._restore(StateSnapshot())

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        status_callback: Optional[Callable[[str], None]] = None,
    ) -> "FinEducaApp":
        """Build an app backed by SQLite and Gemini."""
        from fineduca.generation.gemini import GeminiAvatarGenerator, GeminiClient, GeminiCourseGenerator

        settings = settings or Settings.from_env()
        client = GeminiClient.from_settings(settings)
        return cls(
            store=SQLiteStore(settings.db_path),
            content_generator=GeminiCourseGenerator(client),
            avatar_generator=GeminiAvatarGenerator(client),
            pacer=Pacer(settings.pacing_seconds),
            status_callback=status_callback,
        )

    # -------------------------------------------------------------------------
    # Startup and persistence
    # -------------------------------------------------------------------------

    def _restore(self, snapshot: StateSnapshot):
        self.ledger = PointsLedger(snapshot.points, clock=self._clock, on_change=lambda: self._persist("points"))
        self.tracker = ProgressTracker(
            self.ledger,
            self.catalog.get_course,
            snapshot.progress,
            on_change=lambda: self._persist("progress"),
        )
        self.goals = GoalsManager(self.ledger, snapshot.goals, clock=self._clock, on_change=lambda: self._persist("goals"))
        self.navigator = Navigator(self.tracker)
        self.avatar: Optional[str] = snapshot.avatar
        self.theme: Theme = snapshot.theme

    def _persist(self, slice_name: str):
        """Write-through hook: overwrite one slice in the store."""
        self._savers[slice_name]()

    def hydrate(self):
        """Rehydrate every slice from the store."""
        snapshot = self.sync.hydrate()
        self._restore(snapshot)
        logger.info(
            f"Hydrated: {len(snapshot.points)} point events, {len(snapshot.goals)} goals, "
            f"{len(snapshot.progress.courses_completed)} completed courses"
        )

    async def startup(self) -> LoadResult:
        """Hydrate state, then run the seed reconciliation pass."""
        self.hydrate()
        try:
            courses = await self.catalog.reconcile()
        except GenerationError as e:
            return LoadResult(courses=dict(self.catalog.courses), error=str(e) or UNKNOWN_LOAD_ERROR)
        return LoadResult(courses=courses)

    # -------------------------------------------------------------------------
    # Intents
    # -------------------------------------------------------------------------

    def select_course(self, course_id: str):
        self.navigator.select_course(course_id)

    def start_quiz(self, course_id: str, lesson_index: int):
        self.navigator.start_quiz(course_id, lesson_index)

    def back_to_dashboard(self):
        self.navigator.back_to_dashboard()

    def complete_quiz(self, score: int, total: int) -> Optional[QuizOutcome]:
        """Record the active quiz's result and return to the course view."""
        quiz = self.navigator.current_quiz
        if quiz is None:
            return None
        outcome = self.tracker.record_quiz_result(quiz.course_id, quiz.lesson_index, score, total)
        self.navigator.finish_quiz()
        return outcome

    def add_goal(self, text: str) -> Goal:
        return self.goals.add_goal(text)

    def toggle_goal(self, goal_id: int) -> Optional[Goal]:
        return self.goals.toggle_goal(goal_id)

    async def request_new_course(
        self,
        topic_title: str,
        difficulty: Difficulty = Difficulty.BEGINNER,
    ) -> CourseRequestResult:
        """Generate a course for a user topic without blocking the dashboard."""
        try:
            course = await self.catalog.generate_on_demand(topic_title, difficulty)
        except DuplicateTopicError:
            return CourseRequestResult(message=DUPLICATE_TOPIC_MESSAGE, duplicate=True)
        except GenerationError as e:
            return CourseRequestResult(message=str(e))
        return CourseRequestResult(course=course)

    async def generate_avatar(self, prompt: str) -> str:
        """
        Generate an avatar image (base64). Not saved until save_avatar().

        Raises:
            GenerationError: If no avatar generator is configured or it fails
        """
        if self.avatar_generator is None:
            raise GenerationError("Avatar generation is not configured.")
        return await self.avatar_generator.generate_avatar(prompt)

    def save_avatar(self, image: Optional[str]):
        self.avatar = image or None
        self._persist("avatar")

    def change_theme(self, theme_id: str) -> Theme:
        """Switch theme; unknown ids leave the current theme in place."""
        theme = find_theme(theme_id)
        if theme is None:
            logger.warning(f"Ignoring unknown theme {theme_id!r}")
            return self.theme
        self.theme = theme
        self._persist("theme")
        return theme

    # -------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------

    @property
    def courses(self) -> Mapping[str, Course]:
        return self.catalog.courses

    @property
    def progress(self) -> Progress:
        return self.tracker.progress

    @property
    def goal_list(self) -> list[Goal]:
        return self.goals.goals

    @property
    def point_events(self) -> tuple[PointEvent, ...]:
        return self.ledger.events

    @property
    def total_points(self) -> int:
        return self.ledger.total()

    @property
    def view(self) -> AppView:
        return self.navigator.view

    def active_course(self) -> Optional[Course]:
        return self.navigator.active_course(self.catalog.courses)

    def active_quiz_questions(self) -> Optional[list[QuizQuestion]]:
        return self.navigator.active_quiz_questions(self.catalog.courses)

    def points_by_day(self) -> list[tuple[date, int]]:
        return self.ledger.points_by_day()

    def dashboard_stats(self) -> DashboardStats:
        goals = self.goals.goals
        return DashboardStats(
            completed_courses=len(self.tracker.completed_course_ids()),
            total_courses=len(self.catalog.courses),
            total_points=self.ledger.total(),
            completed_goals=self.goals.completed_count,
            total_goals=len(goals),
        )
