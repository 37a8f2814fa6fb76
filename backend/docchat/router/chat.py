from __future__ import annotations
import logging
from fastapi import APIRouter, HTTPException, status
from docchat.core.ports.generator import GenerationError
from docchat.models.schemas import ChatRequest, ChatResponse, ClearResponse, HistoryResponse, TurnModel

logger = logging.getLogger("docchat.router.chat")

router = APIRouter(prefix="", tags=["chat"])

# Set by main.py at startup
chat_service = None
memory = None
default_session_id = "default"


@router.post("/chat", response_model=ChatResponse)
def chat(payload: ChatRequest):
    if not payload.message.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message must not be empty.")
    if chat_service is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Chat service not ready")

    session_id = payload.session_id or default_session_id
    try:
        result = chat_service.chat(payload.message, session_id=session_id, rag=payload.rag)
    except GenerationError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": e.reason, "message": e.message},
        )

    return ChatResponse(
        reply=result.reply,
        sources=result.sources,
        session_id=result.session_id,
        grounding=result.grounding,
    )


@router.get("/sessions/{session_id}/history", response_model=HistoryResponse)
def history(session_id: str):
    if memory is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Chat service not ready")
    turns = memory.get_history(session_id)
    return HistoryResponse(
        session_id=session_id,
        turns=[TurnModel(role=t.role, content=t.content) for t in turns],
    )


@router.delete("/sessions/{session_id}", response_model=ClearResponse)
def clear(session_id: str):
    if memory is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Chat service not ready")
    cleared = memory.clear(session_id)
    logger.info(f"🧹 Session cleared | session={session_id} | existed={cleared}")
    return ClearResponse(session_id=session_id, cleared=cleared)
