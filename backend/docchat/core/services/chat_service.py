from __future__ import annotations
import logging

from docchat.core.entities import ChatReply
from docchat.core.ports.generator import GenerationError, IChatGenerator
from docchat.core.ports.memory import IConversationMemory
from docchat.core.services.prompt_assembler import DEFAULT_SESSION_ID, PromptAssembler

logger = logging.getLogger("docchat.chat")


class ChatService:
    """
    One chat exchange: assemble the prompt, call the model, and record the
    turn pair only once the model has answered.
    """

    def __init__(self, assembler: PromptAssembler, generator: IChatGenerator, memory: IConversationMemory):
        self.assembler = assembler
        self.generator = generator
        self.memory = memory

    def chat(self, message: str, session_id: str = DEFAULT_SESSION_ID, rag: bool = False) -> ChatReply:
        prompt = self.assembler.build_messages(message, session_id=session_id, rag_enabled=rag)

        try:
            reply = self.generator.complete(prompt.messages)
        except GenerationError as e:
            logger.error(f"❌ Chat generation failed | session={session_id} | {e}")
            raise

        self.memory.append_turn(session_id, message, reply)
        logger.info(
            f"💬 Chat answered | session={session_id} | mode={prompt.grounding} | sources={len(prompt.sources)}"
        )
        return ChatReply(
            reply=reply,
            sources=list(prompt.sources),
            session_id=session_id,
            grounding=prompt.grounding,
        )
