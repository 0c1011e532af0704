from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

DEFAULT_HUGGING_FACE_API_URL = (
    "https://api-inference.huggingface.co/models/facebook/blenderbot-400M-distill"
)


@dataclass(slots=True)
class ServerSettings:
    """HTTP server, CORS and resolver selection."""

    mode: str = "inference"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origin: str = "https://civilbrain.ai"
    log_level: str = "INFO"


@dataclass(slots=True)
class HuggingFaceSettings:
    """Remote inference endpoint used in `inference` mode."""

    api_key: str = ""
    api_url: str = DEFAULT_HUGGING_FACE_API_URL


@dataclass(slots=True)
class DocumentSettings:
    """Question/answer document used in `document` mode."""

    path: str = "data/faq.txt"


@dataclass(slots=True)
class TracingSettings:
    endpoint: str | None = None
    service_name: str = "chat-relay"


@dataclass(slots=True)
class RelaySettings:
    """Complete runtime configuration handed to the HTTP layer at startup."""

    server: ServerSettings = field(default_factory=ServerSettings)
    hugging_face: HuggingFaceSettings = field(default_factory=HuggingFaceSettings)
    document: DocumentSettings = field(default_factory=DocumentSettings)
    tracing: TracingSettings = field(default_factory=TracingSettings)


def load_settings() -> RelaySettings:
    """Load environment-backed settings (including a local `.env`) into typed config.

    Returns:
        Relay settings with every field resolved.

    Raises:
        ValueError: If `PORT` is not an integer.
    """
    load_dotenv()
    return RelaySettings(
        server=ServerSettings(
            mode=os.getenv("RELAY_MODE", "inference").strip().lower(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            cors_origin=os.getenv("CORS_ORIGIN", "https://civilbrain.ai"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        ),
        hugging_face=HuggingFaceSettings(
            api_key=os.getenv("HUGGING_FACE_API_KEY", ""),
            api_url=os.getenv("HUGGING_FACE_API_URL", DEFAULT_HUGGING_FACE_API_URL),
        ),
        document=DocumentSettings(
            path=os.getenv("DOCUMENT_PATH", "data/faq.txt"),
        ),
        tracing=TracingSettings(
            endpoint=os.getenv("OTEL_EXPORTER_OTLP_TRACES_ENDPOINT") or None,
            service_name=os.getenv("OTEL_SERVICE_NAME", "chat-relay"),
        ),
    )
