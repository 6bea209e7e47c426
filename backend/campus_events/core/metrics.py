"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Admission control metrics
admission_requests = Counter(
    'admission_requests_total',
    'Registration admission decisions',
    ['result']  # admitted, already-registered, event-not-found, capacity-exceeded
)

admission_latency = Histogram(
    'admission_latency_seconds',
    'Time spent deciding one admission, lock wait included',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
)

admission_gate_fallbacks = Counter(
    'admission_gate_fallbacks_total',
    'Admissions serialized in-process because the shared lock backend was unreachable'
)

# Notification metrics
notifications_emitted = Counter(
    'notifications_emitted_total',
    'Side-effect notification inserts',
    ['outcome']  # emitted, failed
)

# Data access metrics
store_failures = Counter(
    'store_failures_total',
    'Data access failures',
    ['kind']  # not-found, constraint-violation, unavailable
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_admission(result: str):
    """Record admission decision. Result: admitted or a rejection reason."""
    admission_requests.labels(result=result).inc()


def record_notification(emitted: bool):
    outcome = "emitted" if emitted else "failed"
    notifications_emitted.labels(outcome=outcome).inc()


def record_store_failure(kind: str):
    store_failures.labels(kind=kind).inc()
