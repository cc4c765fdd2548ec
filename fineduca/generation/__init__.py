"""
FinEduca Generation - External content and avatar generators.

This module provides:
- ContentGenerator / AvatarGenerator interfaces
- Response parsing and validation
- Gemini implementations
"""

from .base import ContentGenerator, AvatarGenerator

from .parsing import extract_json_from_response, parse_course_body

from .gemini import (
    GeminiClient,
    GeminiCourseGenerator,
    GeminiAvatarGenerator,
    COURSE_RESPONSE_SCHEMA,
)

__all__ = [
    # Interfaces
    "ContentGenerator",
    "AvatarGenerator",
    # Parsing
    "extract_json_from_response",
    "parse_course_body",
    # Gemini
    "GeminiClient",
    "GeminiCourseGenerator",
    "GeminiAvatarGenerator",
    "COURSE_RESPONSE_SCHEMA",
]
