"""
PersistenceSynchronizer - Mirror in-memory state slices to a key-value store.

Each slice (progress, goals, points history, avatar, theme, and one entry per
cached course) lives under its own key:
- Reads happen once per slice at startup. A missing, unreadable or malformed
  slice falls back to its empty default and is logged; other slices still load.
- Writes overwrite the whole slice on every change. Write failures are logged
  and dropped (best-effort persistence).
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

from pydantic import TypeAdapter

from fineduca.schemas import Course, Goal, PointEvent, Progress
from fineduca.themes import DEFAULT_THEME, Theme, find_theme

from .kv import KeyValueStore


logger = logging.getLogger(__name__)

PROGRESS_KEY = "finEducaProgress"
GOALS_KEY = "finEducaGoals"
POINTS_KEY = "finEducaPointsHistory"
AVATAR_KEY = "finEducaProfilePic"
THEME_KEY = "finEducaTheme"
COURSE_KEY_PREFIX = "course-"

T = TypeVar("T")

_goals_adapter = TypeAdapter(list[Goal])
_points_adapter = TypeAdapter(list[PointEvent])


def course_key(course_id: str) -> str:
    """Store key for a cached course."""
    return f"{COURSE_KEY_PREFIX}{course_id}"


@dataclass
class StateSnapshot:
    """All slices as loaded at startup."""
    progress: Progress = field(default_factory=Progress)
    goals: list[Goal] = field(default_factory=list)
    points: list[PointEvent] = field(default_factory=list)
    avatar: Optional[str] = None
    theme: Theme = DEFAULT_THEME
    courses: dict[str, Course] = field(default_factory=dict)


class PersistenceSynchronizer:
    """Read-through at startup, write-through on change."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def _read(self, key: str, parse: Callable[[str], T], default: Callable[[], T]) -> T:
        try:
            raw = self.store.get(key)
        except Exception:
            logger.exception(f"Failed to read {key} from store; using default")
            return default()

        if raw is None:
            return default()

        try:
            return parse(raw)
        except ValueError as e:
            logger.warning(f"Malformed data under {key}; using default: {e}")
            return default()

    def load_progress(self) -> Progress:
        return self._read(PROGRESS_KEY, Progress.model_validate_json, Progress)

    def load_goals(self) -> list[Goal]:
        return self._read(GOALS_KEY, _goals_adapter.validate_json, list)

    def load_points(self) -> list[PointEvent]:
        return self._read(POINTS_KEY, _points_adapter.validate_json, list)

    def load_avatar(self) -> Optional[str]:
        return self._read(AVATAR_KEY, lambda raw: raw or None, lambda: None)

    def load_theme(self) -> Theme:
        theme_id = self._read(THEME_KEY, lambda raw: raw, lambda: None)
        theme = find_theme(theme_id)
        if theme_id is not None and theme is None:
            logger.warning(f"Unknown theme {theme_id!r}; using {DEFAULT_THEME.id}")
        return theme or DEFAULT_THEME

    def load_courses(self) -> dict[str, Course]:
        """
        Load every cached course by scanning keys with the course prefix.

        A malformed entry is skipped; the rest still load.
        """
        try:
            keys = [key for key in self.store.keys() if key.startswith(COURSE_KEY_PREFIX)]
        except Exception:
            logger.exception("Failed to enumerate cached courses")
            return {}

        courses: dict[str, Course] = {}
        for key in keys:
            course = self._read(key, Course.model_validate_json, lambda: None)
            if course is not None:
                courses[course.id] = course
        logger.debug(f"Loaded {len(courses)} cached courses")
        return courses

    def hydrate(self) -> StateSnapshot:
        """Load all slices independently."""
        return StateSnapshot(
            progress=self.load_progress(),
            goals=self.load_goals(),
            points=self.load_points(),
            avatar=self.load_avatar(),
            theme=self.load_theme(),
            courses=self.load_courses(),
        )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def _write(self, key: str, value: str):
        try:
            self.store.set(key, value)
        except Exception:
            logger.exception(f"Failed to save {key}")

    def save_progress(self, progress: Progress):
        self._write(PROGRESS_KEY, progress.model_dump_json(by_alias=True))

    def save_goals(self, goals: list[Goal]):
        self._write(GOALS_KEY, _goals_adapter.dump_json(goals).decode("utf-8"))

    def save_points(self, events: list[PointEvent]):
        self._write(POINTS_KEY, _points_adapter.dump_json(list(events)).decode("utf-8"))

    def save_avatar(self, image: Optional[str]):
        if image:
            self._write(AVATAR_KEY, image)
            return
        try:
            self.store.delete(AVATAR_KEY)
        except Exception:
            logger.exception(f"Failed to delete {AVATAR_KEY}")

    def save_theme(self, theme_id: str):
        self._write(THEME_KEY, theme_id)

    def save_course(self, course: Course):
        self._write(course_key(course.id), course.to_json())
