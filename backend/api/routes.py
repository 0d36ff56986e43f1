"""
API Routes

Defines all HTTP endpoints for the ANiLab Chat Assistant.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from backend.api.schemas import ChatRequest, ChatResponse, ErrorResponse, HealthResponse
from backend.services.chat_service import ChatService, get_chat_service, resolve_session_key


# =============================================================================
# Router Setup
# =============================================================================

router = APIRouter()


# =============================================================================
# Chat Endpoint
# =============================================================================


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        200: {"description": "Assistant reply (also for empty messages and internal failures)"},
        400: {"model": ErrorResponse, "description": "Body is not a valid chat request"},
    },
    summary="Send a chat message",
    description="Send a customer message and receive the assistant reply.",
)
async def chat(
    request: ChatRequest,
    http_request: Request,
    service: Annotated[ChatService, Depends(get_chat_service)],
) -> ChatResponse:
    """
    Process a customer chat message.

    The conversation is keyed by sessionId, or by the client address when
    no sessionId is sent.
    """
    client_host = http_request.client.host if http_request.client else None
    session_key = resolve_session_key(request.session_id, client_host)
    result = await service.chat(request.message, session_key)
    return ChatResponse(reply=result["reply"])


# =============================================================================
# Health Check Endpoints
# =============================================================================


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Catalog size, FAQ availability and server time.",
)
async def health_check(
    service: Annotated[ChatService, Depends(get_chat_service)],
) -> HealthResponse:
    return HealthResponse(**service.health())


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    """Plain liveness probe."""
    return "OK"
