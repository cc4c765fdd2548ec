"""
LLM response parsing and validation.

The model is asked for raw JSON, but responses occasionally arrive wrapped
in markdown code fences or followed by stray text; both are tolerated here.
Anything that does not validate as a CourseBody is a generation failure.
"""

import json
import re
from typing import Any

from pydantic import ValidationError

from fineduca.errors import GenerationError
from fineduca.schemas import CourseBody


_CODE_BLOCK = re.compile(r'```(?:json)?\s*([\s\S]*?)```')


def extract_json_from_response(text: str) -> dict[str, Any]:
    """Extract a JSON object from LLM response text."""
    # Try to find JSON in code blocks first
    for match in _CODE_BLOCK.findall(text):
        try:
            return json.loads(match.strip())
        except json.JSONDecodeError:
            continue

    # Raw JSON, possibly with trailing text after the closing brace
    text = text.strip()
    if text.startswith('{'):
        depth = 0
        in_string = False
        escaped = False
        for i, char in enumerate(text):
            if in_string:
                if escaped:
                    escaped = False
                elif char == '\\':
                    escaped = True
                elif char == '"':
                    in_string = False
            elif char == '"':
                in_string = True
            elif char == '{':
                depth += 1
            elif char == '}':
                depth -= 1
                if depth == 0:
                    try:
                        return json.loads(text[:i + 1])
                    except json.JSONDecodeError:
                        break

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Could not extract JSON from response: {e}\n\nResponse:\n{text[:500]}...") from e


def parse_course_body(text: str, topic_title: str) -> CourseBody:
    """
    Parse and validate a generator response.

    Raises:
        GenerationError: If the text holds no JSON object or it fails validation
    """
    try:
        data = extract_json_from_response(text)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        return CourseBody.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise GenerationError(
            f"Invalid course structure received for \"{topic_title}\": {e}",
            topic=topic_title,
        ) from e
