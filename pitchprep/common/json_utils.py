"""
JSON utilities for oracle response parsing.

Generative services are asked for JSON objects, but their output may still be
wrapped in markdown fences, surrounded by prose, or slightly malformed
(single quotes, trailing commas, unquoted keys). json-repair is used as a
fallback when standard json.loads() fails.
"""

import json
import re
from typing import Any, Dict

from json_repair import repair_json


def parse_llm_json(text: str) -> Dict[str, Any]:
    """
    Parse a JSON object from an oracle response with error recovery.

    Args:
        text: Raw response text that may contain JSON

    Returns:
        Parsed dictionary

    Raises:
        ValueError: If no JSON object can be extracted or repaired

    Example:
        >>> parse_llm_json('```json\\n{"whatTheyDo": "Search"}\\n```')
        {'whatTheyDo': 'Search'}
        >>> parse_llm_json("{'companyName': 'Acme',}")
        {'companyName': 'Acme'}
    """
    if not text or not text.strip():
        raise ValueError("Empty input: no JSON content to parse")

    json_str = _strip_markdown_blocks(text.strip())
    json_str = _extract_json_object(json_str)

    # Fast path for well-formed output
    try:
        parsed = json.loads(json_str)
    except json.JSONDecodeError:
        parsed = None

    if isinstance(parsed, dict):
        return parsed

    try:
        repaired = repair_json(json_str, return_objects=True)
    except Exception as e:
        raise ValueError(
            f"Failed to parse or repair JSON: {e}\n"
            f"Original text (first 500 chars): {text[:500]}"
        ) from e

    return _coerce_to_dict(repaired, text)


def _coerce_to_dict(repaired: Any, original: str) -> Dict[str, Any]:
    """Turn a json-repair result into a single dict or fail."""
    if isinstance(repaired, dict) and repaired:
        return repaired

    if isinstance(repaired, list):
        dicts = [item for item in repaired if isinstance(item, dict)]
        # Model sometimes wraps the object in brackets: [{...}]
        if len(dicts) == 1:
            return dicts[0]
        # Multiple partial objects are merged in order
        if dicts:
            merged: Dict[str, Any] = {}
            for item in dicts:
                merged.update(item)
            return merged

    raise ValueError(
        f"Could not repair response into a JSON object (got {type(repaired).__name__}). "
        f"Original text (first 500 chars): {original[:500]}"
    )


def _strip_markdown_blocks(text: str) -> str:
    """
    Remove markdown code block wrappers (```json ... ``` or ``` ... ```).

    Args:
        text: Text that may be wrapped in markdown code blocks

    Returns:
        Text with code block markers removed
    """
    result = text

    if result.startswith("```json"):
        result = result[7:]
    elif result.startswith("```"):
        result = result[3:]

    if result.endswith("```"):
        result = result[:-3]

    return result.strip()


def _extract_json_object(text: str) -> str:
    """
    Extract the outermost JSON object from text with surrounding content.

    Raises:
        ValueError: If no JSON object pattern is found
    """
    text = text.strip()

    if text.startswith("{"):
        return text

    json_match = re.search(r"\{.*\}", text, re.DOTALL)
    if json_match:
        return json_match.group(0)

    raise ValueError(f"No JSON object found in text: {text[:200]}")
