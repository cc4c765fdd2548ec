"""Error taxonomy for course generation and catalog operations."""

from __future__ import annotations


class FinEducaError(Exception):
    """Base exception for FinEduca failures that reach the user."""


class GenerationError(FinEducaError):
    """Raised when an external generator call fails or its response is invalid."""

    def __init__(self, message: str, *, topic: str | None = None) -> None:
        super().__init__(message)
        self.topic = topic


class DuplicateTopicError(FinEducaError):
    """Raised when an on-demand course would reuse an existing identifier."""

    def __init__(self, topic_id: str) -> None:
        super().__init__(f"A course already exists for topic id {topic_id!r}")
        self.topic_id = topic_id


class ConfigurationError(FinEducaError):
    """Raised when required configuration (e.g. the API key) is missing."""
