from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pypdf import PdfReader
from pypdf.errors import PyPdfError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedDocument:
    text: str
    source: str  # "text" | "pdf" | "none"
    path: Optional[str] = None


def _read_pdf(path: Path) -> str:
    reader = PdfReader(str(path))
    parts = []
    for page in reader.pages:
        t = page.extract_text() or ""
        if t.strip():
            parts.append(t)
    return "\n".join(parts).strip()


def load_document_text(*, text_path: Optional[str] = None, pdf_path: Optional[str] = None) -> LoadedDocument:
    """
    Load a resume (or any document) as plain text for scoring.
    Precedence:
      1) text_path (.txt)
      2) pdf_path (.pdf)
      3) none
    Best-effort: failures return source='none' and empty text; the engine
    then scores it as an empty resume.
    """
    if text_path:
        p = Path(text_path)
        try:
            return LoadedDocument(text=p.read_text(encoding="utf-8"), source="text", path=str(p))
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("could not read %s: %s", p, e)
            return LoadedDocument(text="", source="none", path=str(p))

    if pdf_path:
        p = Path(pdf_path)
        try:
            text = _read_pdf(p)
        except (OSError, PyPdfError) as e:
            logger.warning("could not extract text from %s: %s", p, e)
            return LoadedDocument(text="", source="none", path=str(p))
        if not text:
            return LoadedDocument(text="", source="none", path=str(p))
        return LoadedDocument(text=text, source="pdf", path=str(p))

    return LoadedDocument(text="", source="none", path=None)
