from __future__ import annotations
from typing import List
import logging

from docchat.core.entities import AssembledPrompt, ChatMessage, USER, SYSTEM
from docchat.core.ports.memory import IConversationMemory
from docchat.core.services.relevance import RelevanceIndex

logger = logging.getLogger("docchat.prompt")

DEFAULT_SESSION_ID = "default"

GENERIC_PROMPT = "You are a helpful assistant."

GROUNDED_PROMPT = (
    "You are a helpful assistant that answers questions about the company document.\n"
    "Answer ONLY using the information in the excerpts below. Do not use outside knowledge.\n"
    "If the excerpts do not contain the answer, say explicitly that the excerpts do not "
    "contain that information.\n"
    "\n"
    "--- EXCERPTS ---\n"
    "{excerpts}\n"
    "--- END OF EXCERPTS ---"
)

NO_MATCH_PROMPT = (
    "You are a helpful assistant that answers questions about the company document.\n"
    "No relevant information was found in the document for the user's question.\n"
    "Tell the user plainly that no relevant information was found in the document. "
    "Do not answer from general knowledge."
)

GROUNDED = "grounded"
NO_MATCH = "no_match"
UNCONSTRAINED = "unconstrained"


class PromptAssembler:
    """Builds the message list for one request and decides which sources to report."""

    def __init__(self, index: RelevanceIndex, memory: IConversationMemory, top_k: int = 3):
        self.index = index
        self.memory = memory
        self.top_k = top_k

    def _system_message(self, user_message: str, rag_enabled: bool) -> tuple[str, List[str], str]:
        if not rag_enabled:
            return GENERIC_PROMPT, [], UNCONSTRAINED

        hits = self.index.search(user_message, top_k=self.top_k)
        sources = [h.chunk.text for h in hits]
        if sources:
            return GROUNDED_PROMPT.format(excerpts="\n\n".join(sources)), sources, GROUNDED
        return NO_MATCH_PROMPT, [], NO_MATCH

    def build_messages(
        self,
        user_message: str,
        session_id: str = DEFAULT_SESSION_ID,
        rag_enabled: bool = False,
    ) -> AssembledPrompt:
        system, sources, grounding = self._system_message(user_message, rag_enabled)
        history = self.memory.get_history(session_id)

        messages: List[ChatMessage] = [ChatMessage(role=SYSTEM, content=system)]
        messages.extend(ChatMessage(role=t.role, content=t.content) for t in history)
        messages.append(ChatMessage(role=USER, content=user_message))

        logger.debug(
            f"🧩 Prompt built | session={session_id} | mode={grounding} | "
            f"history_turns={len(history)} | sources={len(sources)}"
        )
        return AssembledPrompt(messages=messages, sources=sources, grounding=grounding)
