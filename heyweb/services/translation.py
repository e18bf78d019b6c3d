from __future__ import annotations

from heyweb.core.guardrails import sanitize_text
from heyweb.schemas.text import TranslateResponse
from heyweb.services.completion import CompletionClient

AUTO_DETECTED = "auto-detected"
TRANSLATION_FALLBACK = "Translation could not be generated."


def build_translation_prompt(target_language: str, source_language: str | None) -> str:
    source_line = f"Source language: {source_language}" if source_language else "Auto-detect source language"
    return (
        f"You are an expert translator. Translate the provided text to {target_language}.\n\n"
        "Requirements:\n"
        "1. Provide accurate, natural translation\n"
        "2. Maintain the original meaning and tone\n"
        "3. Preserve formatting and structure\n"
        "4. If the source language is not specified, detect it automatically\n"
        "5. Return only the translated text, no explanations or additional content\n\n"
        f"{source_line}\n"
        f"Target language: {target_language}"
    )


def translate_text(
    client: CompletionClient,
    text: str,
    target_language: str,
    source_language: str | None = None,
) -> TranslateResponse:
    result = client.complete(
        [
            {"role": "system", "content": build_translation_prompt(target_language, source_language)},
            {"role": "user", "content": f"Translate this text:\n\n{sanitize_text(text).sanitized}"},
        ],
        temperature=0.3,
        max_tokens=1000,
    )
    translated = (result.content or TRANSLATION_FALLBACK).strip()
    return TranslateResponse(
        translated_text=translated,
        source_language=source_language or AUTO_DETECTED,
        target_language=target_language,
    )
