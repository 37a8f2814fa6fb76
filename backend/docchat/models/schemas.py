from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, Field

class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, description="User message")
    session_id: Optional[str] = Field(default=None, description="Conversation id; the configured default when omitted")
    rag: bool = Field(default=False, description="Restrict answers to retrieved document excerpts")

class ChatResponse(BaseModel):
    reply: str
    sources: List[str]
    session_id: str
    grounding: str

class TurnModel(BaseModel):
    role: str
    content: str

class HistoryResponse(BaseModel):
    session_id: str
    turns: List[TurnModel]

class ClearResponse(BaseModel):
    session_id: str
    cleared: bool
