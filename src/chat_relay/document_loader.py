from __future__ import annotations

from pathlib import Path
from typing import Protocol

import docx
from PyPDF2 import PdfReader


class SourceUnavailable(Exception):
    """Raised when the backing document is missing or cannot be parsed."""


class DocumentLoader(Protocol):
    def extract_text(self) -> str: ...


def _read_docx(path: Path) -> str:
    document = docx.Document(str(path))
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def _read_pdf(path: Path) -> str:
    reader = PdfReader(str(path))
    pages = [page.extract_text() or "" for page in reader.pages]
    return "\n".join(pages)


def _read_plain(path: Path) -> str:
    return path.read_text(encoding="utf-8")


_READERS = {
    ".docx": _read_docx,
    ".pdf": _read_pdf,
}


class FileDocumentLoader:
    """Extract plain text from a document on disk, re-reading it on every call."""

    def __init__(self, path: str | Path):
        """Bind the loader to one document path.

        Args:
            path: Location of a `.docx`, `.pdf` or plain-text document.
        """
        self.path = Path(path)

    def extract_text(self) -> str:
        """Read the document and return its text with line breaks preserved.

        Returns:
            The full extracted text.

        Raises:
            SourceUnavailable: If the file is missing, unreadable or unparsable.
        """
        if not self.path.is_file():
            raise SourceUnavailable(f"Document not found: {self.path}")

        reader = _READERS.get(self.path.suffix.lower(), _read_plain)
        try:
            return reader(self.path)
        except Exception as exc:
            raise SourceUnavailable(f"Could not extract text from {self.path}: {exc}") from exc


class TextDocumentLoader:
    """In-memory document source returning a fixed text."""

    def __init__(self, text: str):
        self.text = text

    def extract_text(self) -> str:
        return self.text
