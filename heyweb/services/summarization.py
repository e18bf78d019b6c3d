from __future__ import annotations

from heyweb.core.guardrails import sanitize_text
from heyweb.core.logger import get_logger
from heyweb.schemas.text import SummarizeResponse
from heyweb.services.completion import CompletionClient
from heyweb.services.json_utils import safe_json_loads

logger = get_logger("heyweb.summarization")

SUMMARY_FALLBACK = "Summary could not be generated."


def build_summary_prompt(max_length: int, include_key_points: bool) -> str:
    key_points = (
        "Extract 3-5 key points that highlight the most important information"
        if include_key_points
        else "Key points are optional; return an empty list if none are needed"
    )
    return (
        "You are an expert text summarizer. Your task is to create concise, accurate "
        "summaries of the provided text.\n\n"
        "Requirements:\n"
        "1. Create a clear, coherent summary that captures the main ideas\n"
        f"2. Keep the summary within {max_length} words\n"
        "3. Maintain the original meaning and tone\n"
        f"4. {key_points}\n\n"
        "Format your response as JSON:\n"
        '{\n  "summary": "Your summary text here",\n'
        '  "keyPoints": ["Key point 1", "Key point 2", "Key point 3"]\n}'
    )


def summarize_text(
    client: CompletionClient,
    text: str,
    max_length: int = 300,
    include_key_points: bool = True,
) -> SummarizeResponse:
    cleaned = sanitize_text(text)
    if cleaned.warnings:
        logger.info("summarize: input adjusted (%s)", "; ".join(cleaned.warnings))

    result = client.complete(
        [
            {"role": "system", "content": build_summary_prompt(max_length, include_key_points)},
            {"role": "user", "content": f"Please summarize this text:\n\n{cleaned.sanitized}"},
        ],
        temperature=0.3,
        max_tokens=800,
    )
    content = result.content

    parsed = safe_json_loads(content, context="summarize")
    if parsed is None or not ({"summary", "keyPoints", "key_points"} & parsed.keys()):
        # Model ignored the JSON format: the whole reply is the summary.
        return SummarizeResponse(summary=content, key_points=[])

    key_points = parsed.get("keyPoints") or parsed.get("key_points") or []
    if not isinstance(key_points, list):
        key_points = []
    return SummarizeResponse(
        summary=str(parsed.get("summary") or SUMMARY_FALLBACK),
        key_points=[str(item) for item in key_points if str(item).strip()],
    )
