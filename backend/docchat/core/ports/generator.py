from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List
from docchat.core.entities import ChatMessage


class GenerationError(RuntimeError):
    """Raised when the chat-completion call fails or returns an unusable body."""

    def __init__(self, reason: str, message: str = ""):
        super().__init__(f"{reason}: {message}" if message else reason)
        self.reason = reason
        self.message = message


class IChatGenerator(ABC):
    @abstractmethod
    def complete(self, messages: List[ChatMessage]) -> str:
        ...
