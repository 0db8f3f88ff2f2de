"""
Observability Middleware

Instruments the Flask app with OpenTelemetry and writes one structured log
line per request, correlated to the active trace.
"""

import time
import logging
from flask import Flask, request, g
from opentelemetry import trace
from opentelemetry.instrumentation.flask import FlaskInstrumentor

logger = logging.getLogger(__name__)


def _log_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


def add_observability_middleware(app: Flask):
    """Add OpenTelemetry instrumentation and request logging to the app."""
    FlaskInstrumentor().instrument_app(app)

    @app.before_request
    def start_request_timer():
        g.request_started = time.perf_counter()
        g.trace_id = None

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            g.trace_id = format(span_context.trace_id, "032x")

    @app.after_request
    def log_request(response):
        started = g.get('request_started', time.perf_counter())
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        span = trace.get_current_span()
        if span.is_recording():
            span.set_attributes({
                "http.status_code": response.status_code,
                "http.duration_ms": duration_ms,
                "rescue.endpoint": request.endpoint or ""
            })

        logger.log(
            _log_level(response.status_code),
            "HTTP request completed",
            extra={
                "extra_fields": {
                    "method": request.method,
                    "path": request.path,
                    "endpoint": request.endpoint,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                    "trace_id": g.get('trace_id')
                }
            }
        )

        # Lets clients quote the trace when reporting a failed dispatch
        if g.get('trace_id'):
            response.headers['X-Trace-Id'] = g.trace_id

        return response
