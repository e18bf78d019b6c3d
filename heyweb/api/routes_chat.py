from fastapi import APIRouter, Depends, HTTPException

from heyweb.core.logger import get_logger
from heyweb.schemas.chat import ChatRequest, ChatResponse
from heyweb.services.chat_service import run_chat
from heyweb.services.completion import CompletionClient, UpstreamError, get_completion_client

router = APIRouter(prefix="/chat", tags=["chat"])
logger = get_logger("heyweb.routes_chat")


@router.post("", response_model=ChatResponse)
def chat(
    payload: ChatRequest,
    client: CompletionClient = Depends(get_completion_client),
) -> ChatResponse:
    if payload.messages is None:
        raise HTTPException(status_code=400, detail="messages required")
    try:
        return run_chat(client, payload.messages, payload.context)
    except UpstreamError as exc:
        logger.error("chat failed: %s", exc)
        raise HTTPException(status_code=500, detail="server error") from exc
