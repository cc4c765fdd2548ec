"""
Runtime configuration for FinEduca.

Values come from the environment, after loading a project-level .env file:
- GEMINI_API_KEY (or API_KEY): Gemini API key
- FINEDUCA_MODEL: text model used for course generation
- FINEDUCA_IMAGE_MODEL: image model used for avatars
- FINEDUCA_PACING_SECONDS: spacing between seed generation calls
- FINEDUCA_DB_PATH: SQLite state file
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from fineduca.storage.kv import DEFAULT_STATE_DB


PROJECT_ROOT = Path(__file__).parent.parent

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "imagen-4.0-generate-001"
DEFAULT_API_SLEEP = 1.0


class Settings(BaseModel):
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    pacing_seconds: float = Field(default=DEFAULT_API_SLEEP, ge=0.0)
    max_retries: int = Field(default=1, ge=1)
    db_path: Path = DEFAULT_STATE_DB

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        """Build settings from environment variables (and .env if present)."""
        load_dotenv(env_file or PROJECT_ROOT / ".env")

        values = {
            "api_key": os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY"),
            "model": os.environ.get("FINEDUCA_MODEL"),
            "image_model": os.environ.get("FINEDUCA_IMAGE_MODEL"),
            "pacing_seconds": os.environ.get("FINEDUCA_PACING_SECONDS"),
            "db_path": os.environ.get("FINEDUCA_DB_PATH"),
        }
        return cls(**{k: v for k, v in values.items() if v is not None})
