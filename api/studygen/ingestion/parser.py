from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import fitz

SUPPORTED_EXTS = {".pdf", ".txt", ".md"}


@dataclass(frozen=True)
class ParsedPage:
    page_number: int
    text: str


def parse_pdf_bytes(data: bytes) -> List[ParsedPage]:
    pages: List[ParsedPage] = []
    with fitz.open(stream=data, filetype="pdf") as doc:
        for i in range(doc.page_count):
            text = doc.load_page(i).get_text("text") or ""
            pages.append(ParsedPage(page_number=i + 1, text=text.strip()))
    return pages


def parse_text_bytes(data: bytes) -> List[ParsedPage]:
    text = data.decode("utf-8", errors="replace")
    return [ParsedPage(page_number=1, text=text.strip())]


def parse_file(filename: str, data: bytes) -> Tuple[str, List[ParsedPage]]:
    lower = filename.lower()
    if lower.endswith(".pdf"):
        return "application/pdf", parse_pdf_bytes(data)
    if lower.endswith(".txt"):
        return "text/plain", parse_text_bytes(data)
    if lower.endswith(".md"):
        return "text/markdown", parse_text_bytes(data)
    raise ValueError("Unsupported file type. Allowed: PDF, TXT, MD")


def document_text(pages: List[ParsedPage]) -> str:
    """Page texts joined into one source-content string, blank pages skipped."""
    return "\n\n".join(p.text for p in pages if p.text)
