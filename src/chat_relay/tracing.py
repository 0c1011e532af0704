"""OpenTelemetry tracing helpers for the chat relay.

Tracing is the relay's structured-logging channel. The match engine and the
resolvers accept a tracer and record their intermediate state as span
attributes and events; with the default no-op tracer nothing is emitted.

Key concepts:
- Span         : a single named, timed unit of work (one chat resolution, one document scan)
- Trace        : a tree of spans that together describe one end-to-end request
- TracerProvider: the entry point that configures how spans are created and exported
- Exporter     : receives completed spans and forwards them to an observability backend

Usage with an OTLP collector:

    from chat_relay.tracing import configure_tracing, get_tracer, traced_resolver

    configure_tracing(
        endpoint="http://localhost:4318/v1/traces",
        service_name="chat-relay",
    )
    resolver = traced_resolver(resolver, get_tracer("chat-relay.api"))
    reply = resolver.resolve("What are your hours?")

Usage without a backend (development / testing):

    configure_tracing()   # uses ConsoleSpanExporter by default
    engine = MatchEngine(loader, tracer=get_tracer("dev"))
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)

if TYPE_CHECKING:
    from .resolvers import ChatResolver

# ---------------------------------------------------------------------------
# Span attribute and event names
# ---------------------------------------------------------------------------

ATTR_INPUT_VALUE = "input.value"
ATTR_OUTPUT_VALUE = "output.value"
ATTR_RESOLVER_KIND = "resolver.kind"
ATTR_MATCH_SCORE = "match.score"
ATTR_MATCH_MATCHED = "match.matched"
ATTR_CANDIDATE_LABEL = "candidate.label"
ATTR_CANDIDATE_SCORE = "candidate.score"

EVENT_CANDIDATE_SCORED = "candidate.scored"
EVENT_CANDIDATE_PROMOTED = "candidate.promoted"

OUTPUT_PREVIEW_CHARS = 500

# ---------------------------------------------------------------------------
# Provider lifecycle helpers
# ---------------------------------------------------------------------------

_provider: TracerProvider | None = None


def configure_tracing(
    endpoint: str | None = None,
    service_name: str = "chat-relay",
    exporter: SpanExporter | None = None,
) -> TracerProvider:
    """Create and register a global TracerProvider.

    Call this once at process start, before any tracer is requested.

    Args:
        endpoint: OTLP HTTP endpoint URL to send traces to
            (e.g. ``http://localhost:4318/v1/traces``). When *None* and no
            custom *exporter* is given, spans are printed to stdout via
            :class:`~opentelemetry.sdk.trace.export.ConsoleSpanExporter`.
        service_name: Label identifying this process in the tracing backend.
        exporter: An already-constructed
            :class:`~opentelemetry.sdk.trace.export.SpanExporter`. Use this for
            testing (e.g. an ``InMemorySpanExporter``). When provided,
            *endpoint* is ignored.

    Returns:
        The configured :class:`~opentelemetry.sdk.trace.TracerProvider`, also
        kept module-wide so :func:`get_tracer` can hand out tracers from it.
    """
    global _provider

    resource = Resource(attributes={SERVICE_NAME: service_name})
    provider = TracerProvider(resource=resource)

    if exporter is not None:
        chosen_exporter: SpanExporter = exporter
    elif endpoint is not None:
        try:
            from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
                OTLPSpanExporter,
            )
        except ImportError as exc:  # pragma: no cover
            raise ImportError(
                "opentelemetry-exporter-otlp-proto-http is required to export "
                "traces to an OTLP endpoint.  Install it with:\n"
                "  pip install 'chat-relay[otlp]'"
            ) from exc
        chosen_exporter = OTLPSpanExporter(endpoint=endpoint)
    else:
        chosen_exporter = ConsoleSpanExporter()

    # SimpleSpanProcessor exports each span as soon as it ends.
    provider.add_span_processor(SimpleSpanProcessor(chosen_exporter))
    trace.set_tracer_provider(provider)
    _provider = provider
    return provider


def get_tracer(name: str) -> trace.Tracer:
    """Return a tracer for *name* from the configured provider.

    If :func:`configure_tracing` has not been called, the global no-op
    provider is used and spans are discarded.
    """
    if _provider is not None:
        return _provider.get_tracer(name)
    return trace.get_tracer(name)


# ---------------------------------------------------------------------------
# Resolver span wrapper
# ---------------------------------------------------------------------------


class TracedResolver:
    """Chat resolver decorator that records every resolution as a span.

    The span is named ``"chat.resolve"`` and records:

    - ``input.value``: the incoming message
    - ``resolver.kind``: class name of the wrapped resolver
    - ``output.value``: the reply (first 500 characters)
    - span status: OK on success, ERROR on exception
    """

    def __init__(self, resolver: ChatResolver, tracer: trace.Tracer):
        self.resolver = resolver
        self.tracer = tracer

    def resolve(self, message: str) -> str:
        with self.tracer.start_as_current_span("chat.resolve") as span:
            span.set_attribute(ATTR_INPUT_VALUE, message)
            span.set_attribute(ATTR_RESOLVER_KIND, type(self.resolver).__name__)
            try:
                reply = self.resolver.resolve(message)
                span.set_attribute(ATTR_OUTPUT_VALUE, reply[:OUTPUT_PREVIEW_CHARS])
                span.set_status(trace.StatusCode.OK)
                return reply
            except Exception as exc:
                span.set_status(trace.StatusCode.ERROR, str(exc))
                span.record_exception(exc)
                raise


def traced_resolver(resolver: ChatResolver, tracer: trace.Tracer) -> TracedResolver:
    """Wrap *resolver* so each ``resolve`` call is recorded as an OTel span.

    Example::

        resolver = traced_resolver(DocumentResolver(engine), get_tracer("chat"))
        reply = resolver.resolve("hours")
    """
    return TracedResolver(resolver, tracer)
