"""FinEduca utilities."""

from .clock import Clock, now_ms
from .prompt_loader import load_prompt, format_prompt, get_available_prompts

__all__ = [
    "Clock",
    "now_ms",
    "load_prompt",
    "format_prompt",
    "get_available_prompts",
]
