"""OpenTelemetry tracing helpers for the help search engine.

Spans recorded by the engine:

- ``index-build``: one per corpus (re)load, with passage and term counts
- ``search``: one per query, with the query text and result count

Usage during development:

    from guideline_help.engine import HelpEngine
    from guideline_help.tracing import configure_tracing, get_tracer

    configure_tracing()   # prints spans via ConsoleSpanExporter
    engine = HelpEngine(tracer=get_tracer("guideline-help.engine"))
    engine.search("adopt or adapt")

Pass ``endpoint="http://localhost:6006/v1/traces"`` to send spans to an OTLP
collector instead.
"""
from __future__ import annotations

from typing import Callable

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)

from .schema import RetrievalResult

ATTR_INPUT_VALUE = "input.value"
ATTR_RETRIEVAL_DOCUMENTS = "retrieval.documents"
ATTR_MAX_RESULTS = "retrieval.max_results"
ATTR_INDEX_DOCUMENTS = "index.documents"
ATTR_INDEX_TERMS = "index.terms"

_provider: TracerProvider | None = None


def build_exporter(endpoint: str | None = None, exporter: SpanExporter | None = None) -> SpanExporter:
    """Pick the span exporter for the help engine.

    An explicit *exporter* wins, then an OTLP HTTP exporter for *endpoint*;
    with neither, spans are printed by ``ConsoleSpanExporter``.

    Raises:
        ImportError: If *endpoint* is set but the ``otlp`` extra is missing.
    """
    if exporter is not None:
        return exporter
    if endpoint is None:
        return ConsoleSpanExporter()
    try:
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
    except ImportError as exc:  # pragma: no cover
        raise ImportError(
            f"Exporting help-engine spans to {endpoint} needs "
            "opentelemetry-exporter-otlp-proto-http; install the 'otlp' extra: "
            "pip install 'guideline-help[otlp]'"
        ) from exc
    return OTLPSpanExporter(endpoint=endpoint)


def configure_tracing(
    endpoint: str | None = None,
    service_name: str = "guideline-help",
    exporter: SpanExporter | None = None,
    batch: bool = False,
) -> TracerProvider:
    """Install the provider that the engine's tracers are drawn from.

    Args:
        endpoint: OTLP HTTP endpoint URL, see :func:`build_exporter`.
        service_name: Service label shown in the tracing backend.
        exporter: Pre-built span exporter, e.g. ``InMemorySpanExporter`` in tests.
        batch: Queue spans in a ``BatchSpanProcessor`` for a long-running
            console; call ``force_flush()`` before reading them. By default
            each span is exported when it ends.

    Returns:
        The configured provider, also registered as the global OTel provider.
    """
    global _provider

    processor_cls = BatchSpanProcessor if batch else SimpleSpanProcessor
    provider = TracerProvider(resource=Resource(attributes={SERVICE_NAME: service_name}))
    provider.add_span_processor(processor_cls(build_exporter(endpoint, exporter)))
    trace.set_tracer_provider(provider)
    _provider = provider
    return provider


def get_tracer(name: str) -> trace.Tracer:
    """Return a tracer from the configured provider, or the no-op global one."""
    if _provider is not None:
        return _provider.get_tracer(name)
    return trace.get_tracer(name)


def traced_search(
    search_fn: Callable[..., list[RetrievalResult]],
    tracer: trace.Tracer,
) -> Callable[..., list[RetrievalResult]]:
    """Wrap a search callable so every call is recorded as a ``search`` span.

    The span records the query, the requested result limit, the number of
    results returned, and OK/ERROR status. Exceptions are recorded and
    re-raised.
    """

    def _wrapped(query: str, max_results: int | None = None) -> list[RetrievalResult]:
        with tracer.start_as_current_span("search") as span:
            span.set_attribute(ATTR_INPUT_VALUE, query)
            if max_results is not None:
                span.set_attribute(ATTR_MAX_RESULTS, max_results)
            try:
                results = search_fn(query, max_results)
                span.set_attribute(ATTR_RETRIEVAL_DOCUMENTS, len(results))
                span.set_status(trace.StatusCode.OK)
                return results
            except Exception as exc:
                span.set_status(trace.StatusCode.ERROR, str(exc))
                span.record_exception(exc)
                raise

    return _wrapped
