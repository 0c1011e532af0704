"""Tests for document_loader.py — plain text, docx and pdf extraction."""
from __future__ import annotations

from unittest.mock import MagicMock, patch

import docx
import pytest

from chat_relay.document_loader import FileDocumentLoader, SourceUnavailable, TextDocumentLoader


class TestTextDocumentLoader:
    def test_returns_text_verbatim(self):
        assert TextDocumentLoader("Hours: 9 to 5\n").extract_text() == "Hours: 9 to 5\n"


class TestFileDocumentLoaderPlainText:
    def test_reads_text_file(self, faq_file, faq_text):
        assert FileDocumentLoader(faq_file).extract_text() == faq_text

    def test_accepts_string_path(self, faq_file, faq_text):
        assert FileDocumentLoader(str(faq_file)).extract_text() == faq_text

    def test_unknown_suffix_read_as_text(self, tmp_path):
        path = tmp_path / "faq.data"
        path.write_text("Hours: 9 to 5", encoding="utf-8")
        assert FileDocumentLoader(path).extract_text() == "Hours: 9 to 5"

    def test_rereads_file_on_every_call(self, tmp_path):
        path = tmp_path / "faq.md"
        path.write_text("Hours: 9 to 5", encoding="utf-8")
        loader = FileDocumentLoader(path)
        loader.extract_text()
        path.write_text("Hours: 10 to 6", encoding="utf-8")
        assert loader.extract_text() == "Hours: 10 to 6"

    def test_missing_file_raises_source_unavailable(self, tmp_path):
        with pytest.raises(SourceUnavailable, match="not found"):
            FileDocumentLoader(tmp_path / "nope.txt").extract_text()

    def test_directory_raises_source_unavailable(self, tmp_path):
        with pytest.raises(SourceUnavailable):
            FileDocumentLoader(tmp_path).extract_text()

    def test_undecodable_bytes_raise_source_unavailable(self, tmp_path):
        path = tmp_path / "faq.txt"
        path.write_bytes(b"\xff\xfe\xfa invalid utf-8")
        with pytest.raises(SourceUnavailable):
            FileDocumentLoader(path).extract_text()


class TestFileDocumentLoaderDocx:
    def test_paragraphs_become_lines(self, tmp_path):
        path = tmp_path / "faq.docx"
        document = docx.Document()
        document.add_paragraph("Hours: We are open 9 to 5")
        document.add_paragraph("Location: Downtown")
        document.save(str(path))

        text = FileDocumentLoader(path).extract_text()
        assert text.splitlines() == ["Hours: We are open 9 to 5", "Location: Downtown"]

    def test_corrupt_docx_raises_source_unavailable(self, tmp_path):
        path = tmp_path / "faq.docx"
        path.write_bytes(b"not a zip archive")
        with pytest.raises(SourceUnavailable):
            FileDocumentLoader(path).extract_text()


class TestFileDocumentLoaderPdf:
    @patch("chat_relay.document_loader.PdfReader")
    def test_pages_joined_with_newlines(self, mock_reader_cls, tmp_path):
        path = tmp_path / "faq.pdf"
        path.write_bytes(b"%PDF-1.4")
        pages = [MagicMock(), MagicMock(), MagicMock()]
        pages[0].extract_text.return_value = "Hours: 9 to 5"
        pages[1].extract_text.return_value = None
        pages[2].extract_text.return_value = "Location: Downtown"
        mock_reader_cls.return_value.pages = pages

        text = FileDocumentLoader(path).extract_text()
        assert text == "Hours: 9 to 5\n\nLocation: Downtown"

    @patch("chat_relay.document_loader.PdfReader")
    def test_parser_error_raises_source_unavailable(self, mock_reader_cls, tmp_path):
        path = tmp_path / "faq.pdf"
        path.write_bytes(b"garbage")
        mock_reader_cls.side_effect = ValueError("bad pdf")
        with pytest.raises(SourceUnavailable) as excinfo:
            FileDocumentLoader(path).extract_text()
        assert isinstance(excinfo.value.__cause__, ValueError)
