"""
Schema validation tests for FinEduca.

Tests all Pydantic models to ensure they validate correctly.
"""

import json

import pytest
from pydantic import ValidationError

from fineduca.schemas import (
    # Course
    CourseIcon,
    Difficulty,
    QuizQuestion,
    Lesson,
    CourseBody,
    Course,
    # Progress
    PointReason,
    PointEvent,
    Goal,
    Progress,
)

from conftest import make_body


class TestQuizQuestion:
    """Test quiz question schema."""

    def test_valid_question(self):
        q = QuizQuestion.model_validate({
            "question": "O que é inflação?",
            "options": ["Alta de preços", "Queda de preços", "Juros", "Impostos"],
            "correctAnswerIndex": 0,
        })
        assert q.correct_answer_index == 0
        assert q.correct_option == "Alta de preços"

    def test_populate_by_field_name(self):
        q = QuizQuestion(question="?", options=["a", "b", "c", "d"], correct_answer_index=3)
        assert q.correct_option == "d"

    def test_requires_four_options(self):
        with pytest.raises(ValidationError):
            QuizQuestion(question="?", options=["a", "b", "c"], correct_answer_index=0)
        with pytest.raises(ValidationError):
            QuizQuestion(question="?", options=["a", "b", "c", "d", "e"], correct_answer_index=0)

    def test_index_out_of_range(self):
        with pytest.raises(ValidationError):
            QuizQuestion(question="?", options=["a", "b", "c", "d"], correct_answer_index=4)
        with pytest.raises(ValidationError):
            QuizQuestion(question="?", options=["a", "b", "c", "d"], correct_answer_index=-1)


class TestCourseSchemas:
    """Test course body and course schemas."""

    def test_body_valid(self):
        body = make_body(lessons=2)
        assert body.icon == CourseIcon.BUDGET
        assert body.difficulty == Difficulty.BEGINNER
        assert len(body.lessons) == 2
        assert isinstance(body.lessons[0], Lesson)

    def test_body_rejects_empty_lessons(self):
        with pytest.raises(ValidationError):
            CourseBody(description="x", icon="tax", difficulty="beginner", lessons=[])

    def test_body_rejects_blank_description(self):
        with pytest.raises(ValidationError):
            CourseBody(description="   ", icon="tax", difficulty="beginner", lessons=make_body().lessons)

    def test_body_rejects_unknown_icon(self):
        data = make_body().model_dump(by_alias=True)
        data["icon"] = "crypto"
        with pytest.raises(ValidationError):
            CourseBody.model_validate(data)

    def test_body_rejects_unknown_difficulty(self):
        data = make_body().model_dump(by_alias=True)
        data["difficulty"] = "advanced"
        with pytest.raises(ValidationError):
            CourseBody.model_validate(data)

    def test_to_course_attaches_id_and_title(self):
        course = make_body(lessons=4).to_course("personal-budget", "Orçamento Pessoal")
        assert isinstance(course, Course)
        assert course.id == "personal-budget"
        assert course.title == "Orçamento Pessoal"
        assert course.lesson_count == 4

    def test_course_json_uses_camel_case(self):
        course = make_body().to_course("c1", "Curso")
        data = json.loads(course.to_json())
        assert "correctAnswerIndex" in data["lessons"][0]["quiz"][0]
        assert Course.model_validate_json(course.to_json()) == course


class TestProgressSchemas:
    """Test progress, goal and point event schemas."""

    def test_progress_defaults(self):
        progress = Progress()
        assert progress.courses_completed == []
        assert progress.quizzes_passed == {}

    def test_progress_aliases(self):
        progress = Progress.model_validate({
            "coursesCompleted": ["a"],
            "quizzesPassed": {"a": [0, 1]},
        })
        assert progress.courses_completed == ["a"]
        assert progress.quizzes_passed == {"a": [0, 1]}
        dumped = json.loads(progress.model_dump_json(by_alias=True))
        assert dumped == {"coursesCompleted": ["a"], "quizzesPassed": {"a": [0, 1]}}

    def test_progress_dedupes(self):
        progress = Progress.model_validate({
            "coursesCompleted": ["a", "a"],
            "quizzesPassed": {"a": [0, 0, 1]},
        })
        assert progress.courses_completed == ["a"]
        assert progress.quizzes_passed["a"] == [0, 1]

    def test_point_event_requires_positive_points(self):
        with pytest.raises(ValidationError):
            PointEvent(points=0, timestamp=1, reason=PointReason.QUIZ_PASSED)

    def test_point_event_accepts_legacy_labels(self):
        event = PointEvent.model_validate({"points": 50, "timestamp": 1, "reason": "Quiz Passou"})
        assert event.reason == PointReason.QUIZ_PASSED
        event = PointEvent.model_validate({"points": 25, "timestamp": 1, "reason": "Meta Completa"})
        assert event.reason == PointReason.GOAL_COMPLETED

    def test_point_event_rejects_unknown_reason(self):
        with pytest.raises(ValidationError):
            PointEvent.model_validate({"points": 50, "timestamp": 1, "reason": "bonus"})

    def test_goal_defaults_incomplete(self):
        goal = Goal(id=1, text="Guardar dinheiro")
        assert goal.completed is False

    def test_goal_is_frozen(self):
        goal = Goal(id=1, text="Guardar dinheiro")
        with pytest.raises(ValidationError):
            goal.completed = True
