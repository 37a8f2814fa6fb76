from __future__ import annotations
from typing import List, Sequence
import logging

from docchat.core.entities import Chunk, ScoredChunk
from docchat.core.services.document_loader import DocumentLoader

logger = logging.getLogger("docchat.retrieval")

PUNCTUATION = ".,?!;:()\"'"
MIN_TERM_LEN = 4
DEFAULT_TOP_K = 3

_STRIP_TABLE = str.maketrans("", "", PUNCTUATION)


def normalize_query(query: str) -> List[str]:
    """Lower-case, split on whitespace, drop punctuation and keep tokens longer than 3 chars."""
    terms: List[str] = []
    for token in (query or "").lower().split():
        token = token.translate(_STRIP_TABLE)
        if len(token) >= MIN_TERM_LEN:
            terms.append(token)
    return terms


def score_chunk(chunk: Chunk, terms: Sequence[str]) -> int:
    # literal substring counts; terms are never treated as patterns
    text = chunk.text.lower()
    return sum(text.count(term.lower()) for term in terms if term)


def retrieve(terms: Sequence[str], chunks: Sequence[Chunk], top_k: int = DEFAULT_TOP_K) -> List[ScoredChunk]:
    """
    Score every chunk, drop zero scores and return the ``top_k`` best.
    Ties keep document order (``sorted`` is stable).
    """
    if not terms or top_k <= 0:
        return []

    scored = [ScoredChunk(chunk=c, score=score_chunk(c, terms)) for c in chunks]
    hits = [s for s in scored if s.score > 0]
    hits = sorted(hits, key=lambda s: s.score, reverse=True)
    return hits[:top_k]


class RelevanceIndex:
    """Term-frequency retrieval over the chunks held by a DocumentLoader."""

    def __init__(self, loader: DocumentLoader, top_k: int = DEFAULT_TOP_K):
        self.loader = loader
        self.top_k = top_k

    def search(self, query: str, top_k: int | None = None) -> List[ScoredChunk]:
        k = self.top_k if top_k is None else top_k
        terms = normalize_query(query)
        if not terms:
            logger.debug("🔍 Query normalized to zero terms; skipping scoring.")
            return []

        hits = retrieve(terms, self.loader.chunks(), top_k=k)
        top_score = hits[0].score if hits else 0
        logger.info(f"🔍 Retrieved {len(hits)} chunks for {len(terms)} terms (top score={top_score})")
        return hits
