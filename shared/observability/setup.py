import logging
import time
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from prometheus_fastapi_instrumentator import Instrumentator

# OpenTelemetry
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor

from shared.config.settings import Settings


# 1. Structlog Processor: Injects Trace/Span IDs into every log line
def add_otel_ids(logger, log_method, event_dict):
    span = trace.get_current_span()
    if span.is_recording():
        ctx = span.get_span_context()
        event_dict["trace_id"] = trace.format_trace_id(ctx.trace_id)
        event_dict["span_id"] = trace.format_span_id(ctx.span_id)
    return event_dict


# 2. Configure Structlog for JSON output
def configure_logging(level: str = "INFO"):
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_otel_ids,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


# 3. Configure OpenTelemetry Tracing
def configure_tracing(app: FastAPI, service_name: str, otlp_endpoint: str):
    resource = Resource.create({SERVICE_NAME: service_name})
    provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(provider)

    exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
    provider.add_span_processor(BatchSpanProcessor(exporter))

    # Spans for all incoming requests
    FastAPIInstrumentor.instrument_app(app)

    # Child spans for outgoing gateway requests
    HTTPXClientInstrumentor().instrument()


# 4. Configure Prometheus Metrics
def configure_metrics(app: FastAPI):
    # HTTP latency and status codes, exposed at /metrics
    Instrumentator().instrument(app).expose(app, include_in_schema=False)


# 5. One log line per request
def configure_request_logging(app: FastAPI, logger):
    @app.middleware("http")
    async def log_request(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "http request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            latency_ms=round((time.perf_counter() - start) * 1000, 2),
            client_ip=request.client.host if request.client else None,
            user_id=getattr(request.state, "user_id", None),
        )
        return response


# --- THE MASTER SETUP FUNCTION ---
def setup_observability(
    app: FastAPI, service_name: str, settings: Optional[Settings] = None
):
    """
    Bootstraps Logging, Tracing, and Metrics for a FastAPI app and returns
    the service logger.

    The logger is stored on `app.state.logger` for the error boundary and
    should be handed to repositories and use cases by constructor.
    Tracing is only enabled when an OTLP endpoint is configured.
    """
    level = settings.log_level if settings else "INFO"
    configure_logging(level)
    logger = structlog.get_logger(service_name).bind(service=service_name)
    app.state.logger = logger

    if settings and settings.otlp_endpoint:
        configure_tracing(app, service_name, settings.otlp_endpoint)
    if settings is None or settings.metrics_enabled:
        configure_metrics(app)
    configure_request_logging(app, logger)
    return logger
