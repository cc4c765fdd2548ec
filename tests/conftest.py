"""Shared fixtures and fakes for FinEduca tests."""

import asyncio

import pytest

from fineduca.errors import GenerationError
from fineduca.schemas import CourseBody, Difficulty
from fineduca.storage import MemoryStore


def make_body(lessons: int = 3, description: str = "Curso de teste") -> CourseBody:
    """Valid course body with the given number of lessons."""
    return CourseBody.model_validate({
        "description": description,
        "icon": "budget",
        "difficulty": "beginner",
        "lessons": [
            {
                "title": f"Lição {i + 1}",
                "content": f"# Lição {i + 1}\n\nConteúdo.",
                "quiz": [
                    {
                        "question": f"Pergunta {q + 1}?",
                        "options": ["A", "B", "C", "D"],
                        "correctAnswerIndex": q % 4,
                    }
                    for q in range(3)
                ],
            }
            for i in range(lessons)
        ],
    })


class FakeContentGenerator:
    """Records calls; fails on the call numbers listed in fail_on (1-based)."""

    def __init__(self, lessons: int = 3, fail_on: tuple[int, ...] = (), events: list | None = None):
        self.lessons = lessons
        self.fail_on = set(fail_on)
        self.calls: list[tuple[str, Difficulty]] = []
        self.events = events

    async def generate_course(self, topic_title: str, difficulty: Difficulty) -> CourseBody:
        self.calls.append((topic_title, difficulty))
        if self.events is not None:
            self.events.append(("generate", topic_title))
        await asyncio.sleep(0)
        if len(self.calls) in self.fail_on:
            raise GenerationError(f"Falha ao gerar {topic_title}", topic=topic_title)
        return make_body(self.lessons)


class FakeAvatarGenerator:
    def __init__(self, image: str = "aW1hZ2U="):
        self.image = image
        self.prompts: list[str] = []

    async def generate_avatar(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.image


class FlakyStore(MemoryStore):
    """MemoryStore whose reads or writes fail for selected keys."""

    def __init__(self, initial=None, fail_reads=(), fail_writes=(), fail_keys=False):
        super().__init__(initial)
        self.fail_reads = set(fail_reads)
        self.fail_writes = set(fail_writes)
        self.fail_keys = fail_keys

    def get(self, key):
        if key in self.fail_reads:
            raise OSError(f"read failed: {key}")
        return super().get(key)

    def set(self, key, value):
        if key in self.fail_writes:
            raise OSError(f"write failed: {key}")
        super().set(key, value)

    def keys(self):
        if self.fail_keys:
            raise OSError("keys failed")
        return super().keys()


class FixedClock:
    """Millisecond clock that advances by step on every call."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 0):
        self.now = start
        self.step = step

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def clock():
    return FixedClock()
