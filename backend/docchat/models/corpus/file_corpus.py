from __future__ import annotations
from typing import List, Optional
from pathlib import Path
import logging

from pypdf import PdfReader

from docchat.core.ports.corpus import ICorpusSource

logger = logging.getLogger("docchat.corpus")


def extract_pdf_text(path: Path) -> str:
    reader = PdfReader(str(path))
    pages: List[str] = []
    for page in reader.pages:
        pages.append(page.extract_text() or "")
    return "\n".join(pages)


class FileCorpusSource(ICorpusSource):
    """
    Reads the corpus from the local filesystem.
    PDFs go through pypdf; anything else is read as UTF-8 text.
    """

    def read(self, path: str) -> Optional[str]:
        p = Path(path)
        if not p.is_file():
            logger.warning(f"⚠️ Corpus file not found: {p}")
            return None

        try:
            if p.suffix.lower() == ".pdf":
                text = extract_pdf_text(p)
            else:
                text = p.read_text(encoding="utf-8", errors="replace")
        except Exception as e:
            # malformed PDFs surface as PyPdfError, ValueError, TypeError, ...
            logger.error(f"❌ Could not read corpus {p}: {type(e).__name__}: {e}")
            return None

        if not text.strip():
            logger.warning(f"⚠️ Corpus {p} contains no extractable text.")
            return None
        return text
