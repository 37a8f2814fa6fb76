from __future__ import annotations
from typing import List, Optional, Tuple
from threading import Lock
import logging

from docchat.core.entities import Chunk, Document
from docchat.core.ports.corpus import ICorpusSource

logger = logging.getLogger("docchat.loader")


def chunk_text(text: str, max_size: int = 800) -> List[Chunk]:
    """
    Greedy word packing: words are appended to a running buffer until the next
    word would push it past ``max_size``. Words are never split or reordered, so
    a single word longer than ``max_size`` becomes a chunk of its own.
    """
    if max_size <= 0:
        raise ValueError(f"max_size must be positive, got {max_size}")

    chunks: List[Chunk] = []
    buf = ""
    for word in text.split():
        candidate = f"{buf} {word}" if buf else word
        if len(candidate) > max_size and buf:
            chunks.append(Chunk(index=len(chunks), text=buf))
            buf = word
        else:
            buf = candidate
    if buf:
        chunks.append(Chunk(index=len(chunks), text=buf))
    return chunks


class DocumentLoader:
    """
    Reads the corpus once and keeps the document and its chunks for the
    lifetime of the loader. A missing corpus is not an error: the loader
    settles into the unavailable state and serves no chunks.
    """

    def __init__(self, source: ICorpusSource, path: str, chunk_size: int = 800):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.source = source
        self.path = path
        self.chunk_size = chunk_size
        self._lock = Lock()
        self._loaded = False
        self._document: Optional[Document] = None
        self._chunks: Tuple[Chunk, ...] = ()

    def load(self) -> Optional[Document]:
        if self._loaded:
            return self._document

        with self._lock:
            if self._loaded:
                return self._document

            try:
                text = self.source.read(self.path)
                if text is None:
                    logger.warning(f"⚠️ Corpus unavailable at {self.path}; retrieval will return no chunks.")
                else:
                    chunks = tuple(chunk_text(text, self.chunk_size))
                    self._document = Document(source=self.path, text=text)
                    self._chunks = chunks
                    logger.info(
                        f"📄 Corpus loaded | source={self.path} | chars={len(text)} | chunks={len(chunks)}"
                    )
            except Exception as e:
                logger.error(f"❌ Corpus load failed for {self.path}; treating it as unavailable: {e}", exc_info=True)
                self._document = None
                self._chunks = ()
            finally:
                self._loaded = True
            return self._document

    def chunks(self) -> Tuple[Chunk, ...]:
        self.load()
        return self._chunks

    @property
    def available(self) -> bool:
        return self.load() is not None

    def status(self) -> dict:
        """Snapshot for readiness probes; does not trigger a load."""
        doc = self._document
        return {
            "loaded": self._loaded,
            "available": doc is not None,
            "source": self.path,
            "characters": len(doc.text) if doc else 0,
            "chunks": len(self._chunks),
        }
