from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .resolvers import ChatResolver, ResolverError, build_resolver
from .settings import RelaySettings, load_settings
from .tracing import configure_tracing, get_tracer, traced_resolver

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Failed to process chat message"


class ChatRequest(BaseModel):
    message: str


class ChatReply(BaseModel):
    reply: str


def create_app(settings: RelaySettings, resolver: ChatResolver | None = None) -> FastAPI:
    """Build the relay application around one chat resolver.

    Args:
        settings: Relay configuration; supplies the CORS origin and, when no
            resolver is given, the resolver mode.
        resolver: Resolver answering `/chat` messages. Built from *settings*
            when omitted.

    Returns:
        A FastAPI app exposing `POST /chat`.
    """
    chat_resolver = traced_resolver(
        resolver or build_resolver(settings),
        get_tracer("chat-relay.api"),
    )

    app = FastAPI(title="chat-relay")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.server.cors_origin],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post("/chat", response_model=ChatReply)
    def chat(request: ChatRequest):
        logger.info("Received message: %s", request.message)
        try:
            reply = chat_resolver.resolve(request.message)
        except ResolverError as exc:
            logger.exception("Resolver failed")
            return JSONResponse(status_code=500, content={"error": str(exc)})
        except Exception:
            logger.exception("Unexpected failure while resolving chat message")
            return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})
        logger.info("Chatbot reply: %s", reply)
        return ChatReply(reply=reply)

    return app


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.server.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if settings.tracing.endpoint:
        configure_tracing(endpoint=settings.tracing.endpoint, service_name=settings.tracing.service_name)

    app = create_app(settings)
    logger.info(
        "Server is running on http://%s:%s (mode=%s)",
        settings.server.host,
        settings.server.port,
        settings.server.mode,
    )
    uvicorn.run(app, host=settings.server.host, port=settings.server.port)


if __name__ == "__main__":
    main()
