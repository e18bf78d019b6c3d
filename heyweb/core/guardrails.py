from __future__ import annotations

import re
from urllib.parse import urlparse

from pydantic import BaseModel, Field

DANGEROUS_PATTERNS = [
    re.compile(r"<\s*script[^>]*>.*?<\s*/\s*script\s*>", re.IGNORECASE | re.DOTALL),
    re.compile(r"<\s*script", re.IGNORECASE),
    re.compile(r"javascript\s*:", re.IGNORECASE),
    re.compile(r"<\s*iframe", re.IGNORECASE),
]

ALLOWED_URL_SCHEMES = {"http", "https"}
BARE_DOMAIN_RE = re.compile(r"^[a-z0-9.-]+\.[a-z]{2,}(?::\d+)?(?:[/?#].*)?$", re.IGNORECASE)

MAX_TEXT_LENGTH = 12000
MAX_TARGET_LENGTH = 200


class SanitizedInput(BaseModel):
    original: str
    sanitized: str
    was_modified: bool
    warnings: list[str] = Field(default_factory=list)


def sanitize_text(text: str, max_length: int = MAX_TEXT_LENGTH) -> SanitizedInput:
    """Strip script-like markup and cap length before text is sent upstream."""
    if not text:
        return SanitizedInput(original=text, sanitized=text, was_modified=False)

    warnings: list[str] = []
    sanitized = text
    for pattern in DANGEROUS_PATTERNS:
        if pattern.search(sanitized):
            sanitized = pattern.sub("", sanitized)
            if "removed script-like markup" not in warnings:
                warnings.append("removed script-like markup")

    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length]
        warnings.append(f"truncated to {max_length} characters")

    return SanitizedInput(
        original=text,
        sanitized=sanitized,
        was_modified=sanitized != text,
        warnings=warnings,
    )


def normalize_url(raw: str) -> str:
    """Add a scheme to bare domains such as ``example.com/path``."""
    url = (raw or "").strip()
    if not url:
        return ""
    if "://" not in url and BARE_DOMAIN_RE.match(url):
        return "https://" + url
    return url


def is_safe_url(url: str) -> bool:
    parsed = urlparse((url or "").strip())
    if parsed.scheme.lower() not in ALLOWED_URL_SCHEMES:
        return False
    return bool(parsed.netloc)


def sanitize_target(target: str | None) -> str:
    if not target:
        return ""
    cleaned = re.sub(r"\s+", " ", target).strip()
    return cleaned[:MAX_TARGET_LENGTH]
