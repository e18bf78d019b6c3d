"""Server-side automation and transcription endpoints.

Page automation runs next to the page, never on the server, so
``/web-automation`` only acknowledges the request. Transcription is left to
the client's speech engine.
"""

from fastapi import APIRouter, HTTPException

from heyweb.core.logger import get_logger
from heyweb.schemas.text import WebAutomationRequest, WebAutomationResponse

router = APIRouter(tags=["automation"])
logger = get_logger("heyweb.routes_automation")


@router.post("/web-automation", response_model=WebAutomationResponse)
def web_automation(payload: WebAutomationRequest) -> WebAutomationResponse:
    received = payload.model_dump(exclude_none=True)
    logger.info("web-automation request acknowledged: %s", received)
    return WebAutomationResponse(
        success=True,
        action=payload.action,
        message="Web automation request received; actions run in the page executor.",
        received=received,
    )


@router.post("/transcribe")
def transcribe() -> None:
    raise HTTPException(status_code=501, detail="transcription runs in the client speech engine")
