"""
Request tracing and access logging for the API.

Every request runs inside a Flask server span. The access line records the
endpoint that served it, so complaint and activity traffic can be told apart
without parsing paths.
"""

import time
import logging
from flask import Flask, request, g
from opentelemetry import trace
from opentelemetry.instrumentation.flask import FlaskInstrumentor

logger = logging.getLogger(__name__)


def _trace_id() -> str:
    """Hex trace id of the active span, or an empty string when not tracing."""
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return ""
    return format(span_context.trace_id, "032x")


def add_observability_middleware(app: Flask):
    """Instrument the app and log one line per request."""
    FlaskInstrumentor().instrument_app(app)

    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def log_request(response):
        elapsed_ms = round((time.perf_counter() - g.get('request_started', time.perf_counter())) * 1000, 2)
        endpoint = request.endpoint or "unmatched"

        span = trace.get_current_span()
        if span.is_recording():
            span.set_attribute("seva_mitra.endpoint", endpoint)
            span.set_attribute("seva_mitra.duration_ms", elapsed_ms)

        trace_id = _trace_id()
        if trace_id:
            response.headers['X-Trace-Id'] = trace_id

        logger.info(
            f"{request.method} {request.full_path.rstrip('?')} -> {response.status_code} ({endpoint}, {elapsed_ms}ms)",
            extra={
                "endpoint": endpoint,
                "status_code": response.status_code,
                "duration_ms": elapsed_ms,
                "trace_id": trace_id or None
            }
        )
        return response
