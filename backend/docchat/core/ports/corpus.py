from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

class ICorpusSource(ABC):
    @abstractmethod
    def read(self, path: str) -> Optional[str]:
        """Return the extracted plain text, or None when the corpus is not available."""
        ...
