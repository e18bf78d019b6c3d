import json
import re
from typing import Any

from json_repair import repair_json

from heyweb.core.logger import get_logger

logger = get_logger("heyweb.json_utils")

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def strip_code_fence(content: str) -> str:
    match = _FENCE_RE.match(content.strip())
    return match.group(1) if match else content.strip()


def safe_json_loads(content: str, context: str = "") -> dict[str, Any] | None:
    """Parse a JSON object out of model output.

    Tries a direct parse, then the first ``{...}`` span, then json-repair.
    Anything that does not end up as a dict returns None.
    """
    if not content or not content.strip():
        return None
    text = strip_code_fence(content)

    try:
        parsed = json.loads(text)
        return parsed if isinstance(parsed, dict) else None
    except json.JSONDecodeError as e:
        logger.debug("%s: direct JSON parse failed: %s", context, e)

    match = _OBJECT_RE.search(text)
    if match is None:
        logger.debug("%s: no JSON object in content", context)
        return None

    candidate = match.group(0)
    try:
        parsed = json.loads(candidate)
        return parsed if isinstance(parsed, dict) else None
    except json.JSONDecodeError:
        pass

    try:
        parsed = json.loads(repair_json(candidate))
    except Exception as e:
        logger.warning("%s: JSON auto-repair failed: %s", context, e)
        return None
    if isinstance(parsed, dict) and parsed:
        logger.info("%s: JSON auto-repair succeeded", context)
        return parsed
    return None
