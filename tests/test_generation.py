"""Tests for the Gemini generators, prompts and settings (no network)."""

import base64
import json

import pytest

from fineduca.config import DEFAULT_MODEL, Settings
from fineduca.errors import ConfigurationError, GenerationError
from fineduca.generation import (
    COURSE_RESPONSE_SCHEMA,
    GeminiAvatarGenerator,
    GeminiClient,
    GeminiCourseGenerator,
)
from fineduca.schemas import Difficulty
from fineduca.utils import get_available_prompts, load_prompt

from conftest import make_body


class StubClient:
    """Stands in for GeminiClient; returns canned text or raises."""

    def __init__(self, text=None, image=None, error=None):
        self.text = text
        self.image = image
        self.error = error
        self.requests = []

    async def generate_json(self, system_prompt, user_prompt, schema):
        self.requests.append((system_prompt, user_prompt, schema))
        if self.error:
            raise self.error
        return self.text

    async def generate_image(self, prompt):
        self.requests.append(prompt)
        if self.error:
            raise self.error
        return self.image


class TestPrompts:

    def test_available_prompts(self):
        assert get_available_prompts() == ["generate_avatar", "generate_course"]

    def test_course_prompt_keys(self):
        config = load_prompt("generate_course")
        assert "{topic_title}" in config["user_template"]
        assert "{difficulty}" in config["user_template"]

    def test_missing_prompt(self):
        with pytest.raises(FileNotFoundError):
            load_prompt("does_not_exist")


class TestCourseGenerator:

    @pytest.mark.asyncio
    async def test_generates_body(self):
        text = make_body(lessons=2).model_dump_json(by_alias=True)
        client = StubClient(text=text)
        body = await GeminiCourseGenerator(client).generate_course("Orçamento", Difficulty.BEGINNER)
        assert len(body.lessons) == 2

        _, user_prompt, schema = client.requests[0]
        assert "Orçamento" in user_prompt
        assert "beginner" in user_prompt
        assert schema is COURSE_RESPONSE_SCHEMA

    @pytest.mark.asyncio
    async def test_provider_error_wrapped(self):
        client = StubClient(error=RuntimeError("quota"))
        with pytest.raises(GenerationError) as exc_info:
            await GeminiCourseGenerator(client).generate_course("Orçamento", Difficulty.BEGINNER)
        assert "Orçamento" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_invalid_response(self):
        client = StubClient(text=json.dumps({"description": "x"}))
        with pytest.raises(GenerationError):
            await GeminiCourseGenerator(client).generate_course("Orçamento", Difficulty.BEGINNER)


class TestAvatarGenerator:

    @pytest.mark.asyncio
    async def test_returns_base64(self):
        client = StubClient(image=b"png-bytes")
        image = await GeminiAvatarGenerator(client).generate_avatar("um gato")
        assert base64.b64decode(image) == b"png-bytes"
        assert "um gato" in client.requests[0]

    @pytest.mark.asyncio
    async def test_no_image(self):
        with pytest.raises(GenerationError):
            await GeminiAvatarGenerator(StubClient(image=None)).generate_avatar("um gato")

    @pytest.mark.asyncio
    async def test_provider_error(self):
        with pytest.raises(GenerationError):
            await GeminiAvatarGenerator(StubClient(error=RuntimeError("x"))).generate_avatar("um gato")


class TestSettings:

    def test_client_requires_api_key(self):
        with pytest.raises(ConfigurationError):
            GeminiClient(api_key=None)

    def test_from_env(self, monkeypatch, tmp_path):
        for var in ("GEMINI_API_KEY", "API_KEY", "FINEDUCA_MODEL", "FINEDUCA_PACING_SECONDS", "FINEDUCA_DB_PATH"):
            monkeypatch.delenv(var, raising=False)
        monkeypatch.setenv("API_KEY", "secret")
        monkeypatch.setenv("FINEDUCA_PACING_SECONDS", "2.5")
        monkeypatch.setenv("FINEDUCA_DB_PATH", str(tmp_path / "s.db"))

        settings = Settings.from_env(env_file=tmp_path / "missing.env")
        assert settings.api_key == "secret"
        assert settings.pacing_seconds == 2.5
        assert settings.db_path == tmp_path / "s.db"
        assert settings.model == DEFAULT_MODEL
