from fastapi import APIRouter, Depends, HTTPException

from heyweb.core.logger import get_logger
from heyweb.schemas.text import (
    SummarizeRequest,
    SummarizeResponse,
    TranslateRequest,
    TranslateResponse,
)
from heyweb.services.completion import CompletionClient, UpstreamError, get_completion_client
from heyweb.services.summarization import summarize_text
from heyweb.services.translation import translate_text

router = APIRouter(tags=["text"])
logger = get_logger("heyweb.routes_text")


@router.post("/summarize", response_model=SummarizeResponse)
def summarize(
    payload: SummarizeRequest,
    client: CompletionClient = Depends(get_completion_client),
) -> SummarizeResponse:
    if not payload.text:
        raise HTTPException(status_code=400, detail="text required")
    try:
        return summarize_text(
            client,
            payload.text,
            max_length=payload.max_length,
            include_key_points=payload.include_key_points,
        )
    except UpstreamError as exc:
        logger.error("summarize failed: %s", exc)
        raise HTTPException(status_code=500, detail="summarization error") from exc


@router.post("/translate", response_model=TranslateResponse)
def translate(
    payload: TranslateRequest,
    client: CompletionClient = Depends(get_completion_client),
) -> TranslateResponse:
    if not payload.text or not payload.target_language:
        raise HTTPException(status_code=400, detail="text and targetLanguage required")
    try:
        return translate_text(
            client,
            payload.text,
            target_language=payload.target_language,
            source_language=payload.source_language,
        )
    except UpstreamError as exc:
        logger.error("translate failed: %s", exc)
        raise HTTPException(status_code=500, detail="translation error") from exc
