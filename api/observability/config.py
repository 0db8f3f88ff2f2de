"""
OpenTelemetry Configuration

Sets up distributed tracing and structured logging for the rescue dispatch
API. Structured context is passed to loggers as
``extra={"extra_fields": {...}}`` and rendered as one JSON object per line.
"""

import json
import logging
from datetime import datetime, timezone
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

from config import Settings

SERVICE_NAME = 'rescue-dispatch-api'

_tracer_provider_installed = False


class StructuredFormatter(logging.Formatter):
    """Render log records as JSON with trace correlation."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage()
        }

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            entry["trace_id"] = format(span_context.trace_id, "032x")
            entry["span_id"] = format(span_context.span_id, "016x")

        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            entry.update(extra_fields)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_observability(settings: Settings):
    """Initialize logging and, when enabled, OpenTelemetry tracing."""
    global _tracer_provider_installed

    setup_structured_logging(settings.environment)

    if not settings.otel_enabled or _tracer_provider_installed:
        return

    # Environment-specific sampling
    if settings.environment == 'production':
        sampler = TraceIdRatioBased(0.1)  # 10% sampling in production
    elif settings.environment == 'staging':
        sampler = TraceIdRatioBased(0.5)  # 50% sampling in staging
    else:
        sampler = TraceIdRatioBased(1.0)  # 100% sampling in development

    resource = Resource.create({
        "service.name": SERVICE_NAME,
        "service.version": settings.service_version,
        "deployment.environment": settings.environment
    })

    tracer_provider = TracerProvider(sampler=sampler, resource=resource)

    if settings.otel_exporter_endpoint:
        otlp_exporter = OTLPSpanExporter(endpoint=settings.otel_exporter_endpoint)
        tracer_provider.add_span_processor(
            BatchSpanProcessor(otlp_exporter, max_export_batch_size=512)
        )
    elif settings.environment == 'development':
        tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(tracer_provider)
    _tracer_provider_installed = True


def setup_structured_logging(environment: str):
    """Configure structured JSON logging on the root logger."""
    log_level = {
        'production': logging.WARNING,
        'staging': logging.INFO,
        'development': logging.DEBUG
    }.get(environment, logging.INFO)

    root = logging.getLogger()
    root.setLevel(log_level)

    # Replace a previously installed structured handler instead of stacking them
    for handler in list(root.handlers):
        if isinstance(handler.formatter, StructuredFormatter):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)

    if environment == 'production':
        # Production: Reduce noise, focus on errors and business events
        logging.getLogger('urllib3').setLevel(logging.WARNING)
        logging.getLogger('twilio').setLevel(logging.WARNING)
        logging.getLogger('pymongo').setLevel(logging.WARNING)
