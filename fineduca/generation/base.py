"""Interfaces for the external content and avatar generators."""

from typing import Protocol

from fineduca.schemas import CourseBody, Difficulty


class ContentGenerator(Protocol):
    async def generate_course(self, topic_title: str, difficulty: Difficulty) -> CourseBody:
        """
        Generate a course body for a topic.

        Raises:
            GenerationError: On any provider failure or invalid response
        """
        ...


class AvatarGenerator(Protocol):
    async def generate_avatar(self, prompt: str) -> str:
        """
        Generate one avatar image and return it base64-encoded.

        Raises:
            GenerationError: On provider failure or when no image is returned
        """
        ...
