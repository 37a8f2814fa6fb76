from __future__ import annotations
from typing import Dict, List, Optional
from threading import Lock
import logging

from docchat.core.entities import Turn, USER, ASSISTANT
from docchat.core.ports.memory import IConversationMemory

logger = logging.getLogger("docchat.memory")


class _Session:
    __slots__ = ("lock", "turns", "detached")

    def __init__(self) -> None:
        self.lock = Lock()
        self.turns: List[Turn] = []
        self.detached = False  # set once the session is cleared


class InMemoryConversationMemory(IConversationMemory):
    """
    Per-session turn history held in process memory.

    With ``max_turns`` unset (or 0) history grows without bound for the life
    of the process. A positive value keeps the most recent turns, trimmed in
    whole user/assistant pairs.
    """

    def __init__(self, max_turns: Optional[int] = None) -> None:
        if max_turns is not None and max_turns < 0:
            raise ValueError(f"max_turns must be >= 0, got {max_turns}")
        # rounded down to whole pairs, never below one pair
        self.max_turns = max(2, max_turns - max_turns % 2) if max_turns else None
        self._lock = Lock()  # guards the session map only
        self._sessions: Dict[str, _Session] = {}

    def _session(self, session_id: str, create: bool) -> Optional[_Session]:
        with self._lock:
            sess = self._sessions.get(session_id)
            if sess is None and create:
                sess = _Session()
                self._sessions[session_id] = sess
            return sess

    def get_history(self, session_id: str) -> List[Turn]:
        sess = self._session(session_id, create=False)
        if sess is None:
            return []
        with sess.lock:
            return list(sess.turns)

    def append_turn(self, session_id: str, user_content: str, assistant_content: str) -> None:
        while True:
            sess = self._session(session_id, create=True)
            with sess.lock:
                # cleared after lookup: retry against a fresh session
                if sess.detached:
                    continue
                sess.turns.append(Turn(role=USER, content=user_content))
                sess.turns.append(Turn(role=ASSISTANT, content=assistant_content))
                if self.max_turns and len(sess.turns) > self.max_turns:
                    del sess.turns[: len(sess.turns) - self.max_turns]
                size = len(sess.turns)
                break
        logger.debug(f"🗂️ Turn appended | session={session_id} | turns={size}")

    def clear(self, session_id: str) -> bool:
        with self._lock:
            sess = self._sessions.pop(session_id, None)
            if sess is None:
                return False
            with sess.lock:
                sess.detached = True
            return True

    def session_ids(self) -> List[str]:
        with self._lock:
            return list(self._sessions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
