from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List

USER = "user"
ASSISTANT = "assistant"
SYSTEM = "system"


@dataclass(frozen=True)
class Document:
    source: str
    text: str


@dataclass(frozen=True)
class Chunk:
    index: int  # position in the source document
    text: str


@dataclass(frozen=True)
class ScoredChunk:
    chunk: Chunk
    score: int


@dataclass(frozen=True)
class Turn:
    role: str  # "user" | "assistant"
    content: str


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "system" | "user" | "assistant"
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class AssembledPrompt:
    messages: List[ChatMessage]
    sources: List[str] = field(default_factory=list)
    grounding: str = "unconstrained"  # "grounded" | "no_match" | "unconstrained"


@dataclass(frozen=True)
class ChatReply:
    reply: str
    sources: List[str]
    session_id: str
    grounding: str
