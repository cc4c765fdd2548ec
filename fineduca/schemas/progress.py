"""
Progress tracking schemas for FinEduca.

Defines Pydantic models for the learner's state slices:
- Quiz/course progress
- User-defined goals
- Point ledger events
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PointReason(str, Enum):
    QUIZ_PASSED = "quiz-passed"
    COURSE_COMPLETED = "course-completed"
    GOAL_COMPLETED = "goal-completed"


# Labels written by earlier releases of the web client
LEGACY_REASON_LABELS = {
    "Quiz Passou": PointReason.QUIZ_PASSED,
    "Curso Completo": PointReason.COURSE_COMPLETED,
    "Meta Completa": PointReason.GOAL_COMPLETED,
}


class PointEvent(BaseModel):
    """One immutable point award."""
    model_config = ConfigDict(frozen=True)

    points: int = Field(..., gt=0)
    timestamp: int               # epoch milliseconds
    reason: PointReason

    @field_validator("reason", mode="before")
    @classmethod
    def accept_legacy_labels(cls, v):
        return LEGACY_REASON_LABELS.get(v, v)


class Goal(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int                      # creation timestamp (ms), never reused
    text: str
    completed: bool = False


class Progress(BaseModel):
    """
    Passed quizzes and completed courses.

    quizzes_passed maps course id -> lesson indices whose quiz was passed at
    least once. courses_completed is append-only.
    """
    model_config = ConfigDict(populate_by_name=True)

    courses_completed: list[str] = Field(default_factory=list, alias="coursesCompleted")
    quizzes_passed: dict[str, list[int]] = Field(default_factory=dict, alias="quizzesPassed")

    @field_validator("courses_completed")
    @classmethod
    def dedupe_courses(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))

    @field_validator("quizzes_passed")
    @classmethod
    def dedupe_lessons(cls, v: dict[str, list[int]]) -> dict[str, list[int]]:
        return {course_id: list(dict.fromkeys(indices)) for course_id, indices in v.items()}
