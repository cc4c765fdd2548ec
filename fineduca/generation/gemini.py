"""
Gemini-backed content and avatar generators.

Courses are requested as JSON constrained by a response schema, then
validated locally (see parsing.py). Avatars come from the Imagen model and
are returned base64-encoded.
"""

import base64
import logging
from typing import Any, Optional

from google import genai
from google.genai import types as genai_types

from fineduca.config import DEFAULT_IMAGE_MODEL, DEFAULT_MODEL, Settings
from fineduca.errors import ConfigurationError, GenerationError
from fineduca.schemas import CourseBody, CourseIcon, Difficulty
from fineduca.utils.prompt_loader import format_prompt, load_prompt

from .parsing import parse_course_body


logger = logging.getLogger(__name__)


_QUIZ_QUESTION_SCHEMA = genai_types.Schema(
    type=genai_types.Type.OBJECT,
    properties={
        "question": genai_types.Schema(type=genai_types.Type.STRING),
        "options": genai_types.Schema(
            type=genai_types.Type.ARRAY,
            items=genai_types.Schema(type=genai_types.Type.STRING),
            min_items=4,
            max_items=4,
        ),
        "correctAnswerIndex": genai_types.Schema(type=genai_types.Type.INTEGER),
    },
    required=["question", "options", "correctAnswerIndex"],
)

COURSE_RESPONSE_SCHEMA = genai_types.Schema(
    type=genai_types.Type.OBJECT,
    properties={
        "description": genai_types.Schema(type=genai_types.Type.STRING),
        "icon": genai_types.Schema(
            type=genai_types.Type.STRING,
            enum=[icon.value for icon in CourseIcon],
        ),
        "difficulty": genai_types.Schema(
            type=genai_types.Type.STRING,
            enum=[level.value for level in Difficulty],
        ),
        "lessons": genai_types.Schema(
            type=genai_types.Type.ARRAY,
            items=genai_types.Schema(
                type=genai_types.Type.OBJECT,
                properties={
                    "title": genai_types.Schema(type=genai_types.Type.STRING),
                    "content": genai_types.Schema(type=genai_types.Type.STRING),
                    "quiz": genai_types.Schema(
                        type=genai_types.Type.ARRAY,
                        items=_QUIZ_QUESTION_SCHEMA,
                    ),
                },
                required=["title", "content", "quiz"],
            ),
        ),
    },
    required=["description", "icon", "difficulty", "lessons"],
)


# -----------------------------------------------------------------------------
# Gemini API Client
# -----------------------------------------------------------------------------

class GeminiClient:
    """Thin async wrapper around the Gemini API with bounded retries."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        image_model: str = DEFAULT_IMAGE_MODEL,
        temperature: float = 0.7,
        max_retries: int = 1,
    ):
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY not set. Check your .env file.")

        self.client = genai.Client(api_key=api_key)
        self.model_name = model
        self.image_model_name = image_model
        self.temperature = temperature
        self.max_retries = max_retries

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiClient":
        return cls(
            api_key=settings.api_key,
            model=settings.model,
            image_model=settings.image_model,
            temperature=settings.temperature,
            max_retries=settings.max_retries,
        )

    async def generate_json(self, system_prompt: str, user_prompt: str, schema: Any) -> str:
        """Generate a JSON document constrained by a response schema."""
        config = genai_types.GenerateContentConfig(
            system_instruction=system_prompt or None,
            temperature=self.temperature,
            response_mime_type="application/json",
            response_schema=schema,
        )

        for attempt in range(self.max_retries):
            try:
                response = await self.client.aio.models.generate_content(
                    model=self.model_name,
                    contents=user_prompt,
                    config=config,
                )
                if not response.text:
                    raise ValueError("Empty response from API")
                return response.text

            except Exception as e:
                logger.warning(f"API call failed (attempt {attempt + 1}/{self.max_retries}): {e}")
                if attempt == self.max_retries - 1:
                    raise

    async def generate_image(self, prompt: str) -> Optional[bytes]:
        """Generate a single square PNG; None if the API returned no image."""
        response = await self.client.aio.models.generate_images(
            model=self.image_model_name,
            prompt=prompt,
            config=genai_types.GenerateImagesConfig(
                number_of_images=1,
                output_mime_type="image/png",
                aspect_ratio="1:1",
            ),
        )
        if not response.generated_images:
            return None
        image = response.generated_images[0].image
        return image.image_bytes if image else None


# -----------------------------------------------------------------------------
# Generators
# -----------------------------------------------------------------------------

class GeminiCourseGenerator:
    """ContentGenerator backed by Gemini structured output."""

    def __init__(self, client: GeminiClient, prompt_config: Optional[dict] = None):
        self.client = client
        self.prompt_config = prompt_config or load_prompt("generate_course")

    def build_prompt(self, topic_title: str, difficulty: Difficulty) -> str:
        return format_prompt(
            self.prompt_config["user_template"],
            topic_title=topic_title,
            difficulty=Difficulty(difficulty).value,
        )

    async def generate_course(self, topic_title: str, difficulty: Difficulty) -> CourseBody:
        logger.info(f"Generating course: {topic_title} ({Difficulty(difficulty).value})")
        try:
            text = await self.client.generate_json(
                self.prompt_config.get("system", ""),
                self.build_prompt(topic_title, difficulty),
                COURSE_RESPONSE_SCHEMA,
            )
        except Exception as e:
            logger.error(f"Error generating course {topic_title!r}: {e}")
            raise GenerationError(
                f"Failed to generate course content for \"{topic_title}\". Please try again.",
                topic=topic_title,
            ) from e

        return parse_course_body(text, topic_title)


class GeminiAvatarGenerator:
    """AvatarGenerator backed by the Imagen model."""

    def __init__(self, client: GeminiClient, prompt_config: Optional[dict] = None):
        self.client = client
        self.prompt_config = prompt_config or load_prompt("generate_avatar")

    async def generate_avatar(self, prompt: str) -> str:
        full_prompt = format_prompt(self.prompt_config["user_template"], description=prompt)
        try:
            image_bytes = await self.client.generate_image(full_prompt)
        except Exception as e:
            logger.error(f"Error generating avatar: {e}")
            raise GenerationError("Failed to generate avatar. Please check your prompt and try again.") from e

        if not image_bytes:
            raise GenerationError("No image was generated.")
        return base64.b64encode(image_bytes).decode("ascii")
