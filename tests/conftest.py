"""Shared pytest fixtures for chat_relay unit tests."""
from __future__ import annotations

import pytest

from chat_relay.document_loader import TextDocumentLoader
from chat_relay.settings import DocumentSettings, RelaySettings, ServerSettings

FAQ_TEXT = (
    "Contact: Call us at\n"
    "555-1234\n"
    "Hours: We are open 9 to 5\n"
    "Location: Downtown\n"
    "Pricing: $10\n"
)


@pytest.fixture()
def faq_text() -> str:
    return FAQ_TEXT


@pytest.fixture()
def faq_loader() -> TextDocumentLoader:
    return TextDocumentLoader(FAQ_TEXT)


@pytest.fixture()
def faq_file(tmp_path):
    path = tmp_path / "faq.txt"
    path.write_text(FAQ_TEXT, encoding="utf-8")
    return path


@pytest.fixture()
def document_settings(faq_file) -> RelaySettings:
    return RelaySettings(
        server=ServerSettings(mode="document", cors_origin="https://example.test"),
        document=DocumentSettings(path=str(faq_file)),
    )


class FailingLoader:
    """Document source that is always unavailable."""

    def __init__(self, exc: Exception):
        self.exc = exc

    def extract_text(self) -> str:
        raise self.exc


@pytest.fixture()
def failing_loader_factory():
    return FailingLoader
