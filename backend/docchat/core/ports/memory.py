from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List
from docchat.core.entities import Turn

class IConversationMemory(ABC):
    @abstractmethod
    def get_history(self, session_id: str) -> List[Turn]: ...
    @abstractmethod
    def append_turn(self, session_id: str, user_content: str, assistant_content: str) -> None: ...
    @abstractmethod
    def clear(self, session_id: str) -> bool: ...
    @abstractmethod
    def session_ids(self) -> List[str]: ...
