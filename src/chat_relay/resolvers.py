from __future__ import annotations

from typing import Protocol

import requests

from .document_loader import FileDocumentLoader
from .matching import MatchEngine
from .settings import RelaySettings
from .tracing import get_tracer

MODE_INFERENCE = "inference"
MODE_DOCUMENT = "document"


class ChatResolver(Protocol):
    def resolve(self, message: str) -> str: ...


class ResolverError(Exception):
    """Resolver failure whose message is safe to return to HTTP callers."""


class InferenceError(ResolverError):
    pass


class DocumentResolver:
    """Answer messages from the local question/answer document."""

    def __init__(self, engine: MatchEngine):
        self.engine = engine

    def resolve(self, message: str) -> str:
        return self.engine.resolve(message).reply


class InferenceResolver:
    """Relay messages to a Hugging Face text-generation model."""

    FAILURE_MESSAGE = "Failed to communicate with Hugging Face API"

    def __init__(self, api_url: str, api_key: str, session: requests.Session | None = None):
        """Configure the upstream endpoint.

        Args:
            api_url: Inference API URL of the model.
            api_key: Bearer token sent with every request.
            session: Optional requests session; a fresh one is created when omitted.
        """
        self.api_url = api_url
        self.headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        self.session = session or requests.Session()

    def resolve(self, message: str) -> str:
        """Send one generation request and return the first generated text.

        Raises:
            InferenceError: On transport errors, non-2xx responses or an
                unexpected payload shape.
        """
        try:
            response = self.session.post(self.api_url, json={"inputs": message}, headers=self.headers)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise InferenceError(self.FAILURE_MESSAGE) from exc

        try:
            return str(payload[0]["generated_text"])
        except (IndexError, KeyError, TypeError) as exc:
            raise InferenceError(self.FAILURE_MESSAGE) from exc


def build_resolver(settings: RelaySettings) -> ChatResolver:
    """Select the resolver implementation configured by `settings.server.mode`.

    Args:
        settings: Relay configuration.

    Returns:
        A document-backed or inference-backed resolver.

    Raises:
        ValueError: If the mode is not recognised.
    """
    mode = settings.server.mode
    if mode == MODE_DOCUMENT:
        engine = MatchEngine(
            FileDocumentLoader(settings.document.path),
            tracer=get_tracer("chat-relay.matching"),
        )
        return DocumentResolver(engine)
    if mode == MODE_INFERENCE:
        return InferenceResolver(
            api_url=settings.hugging_face.api_url,
            api_key=settings.hugging_face.api_key,
        )
    raise ValueError(f"Unknown relay mode: {mode!r}")
