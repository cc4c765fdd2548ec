"""
FinEduca Schemas - Pydantic models for the financial education tracker.

This module exports all schema classes for:
- Course: generated course content, lessons, quizzes
- Progress: quiz/course progress, goals, point events
"""

# Course schemas
from .course import (
    CourseIcon,
    Difficulty,
    QuizQuestion,
    Lesson,
    CourseBody,
    Course,
)

# Progress schemas
from .progress import (
    PointReason,
    PointEvent,
    Goal,
    Progress,
    LEGACY_REASON_LABELS,
)

__all__ = [
    # Course
    'CourseIcon',
    'Difficulty',
    'QuizQuestion',
    'Lesson',
    'CourseBody',
    'Course',
    # Progress
    'PointReason',
    'PointEvent',
    'Goal',
    'Progress',
    'LEGACY_REASON_LABELS',
]
