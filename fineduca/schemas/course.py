"""
Course content schemas for FinEduca.

Defines Pydantic models for generated course content including:
- Quiz questions (4 options, one correct index)
- Lessons with markdown content and a quiz
- Course body as returned by the content generator
- Course (body + stable identifier and title)

Field names follow Python conventions; the stored/wire form keeps the
generator's camelCase keys via aliases (e.g. correctAnswerIndex).
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CourseIcon(str, Enum):
    TAX = "tax"
    INVESTMENT = "investment"
    BUDGET = "budget"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"


# -----------------------------------------------------------------------------
# Lesson and quiz
# -----------------------------------------------------------------------------

class QuizQuestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    question: str
    options: list[str] = Field(..., min_length=4, max_length=4)
    correct_answer_index: int = Field(..., alias="correctAnswerIndex", ge=0, le=3)

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_answer_index]


class Lesson(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str
    content: str             # markdown
    quiz: list[QuizQuestion]  # 3 questions by generation contract


# -----------------------------------------------------------------------------
# Course
# -----------------------------------------------------------------------------

class CourseBody(BaseModel):
    """
    Course content as produced by the content generator (no id/title yet).

    Any validation failure here is a generation failure: description must be
    non-empty, icon and difficulty must come from their enums, and there must
    be at least one lesson.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    description: str
    icon: CourseIcon
    difficulty: Difficulty
    lessons: list[Lesson] = Field(..., min_length=1)

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("description must not be empty")
        return v

    def to_course(self, course_id: str, title: str) -> "Course":
        """Attach a stable identifier and title to this body."""
        return Course(
            id=course_id,
            title=title,
            description=self.description,
            icon=self.icon,
            difficulty=self.difficulty,
            lessons=self.lessons,
        )


class Course(CourseBody):
    id: str
    title: str

    @property
    def lesson_count(self) -> int:
        return len(self.lessons)

    def to_json(self) -> str:
        """Serialize using the stored (camelCase) field names."""
        return self.model_dump_json(by_alias=True)
