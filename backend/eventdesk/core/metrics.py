"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Entity operation metrics
entity_operations = Counter(
    'entity_operations_total',
    'Entity service operations',
    ['entity', 'operation', 'result']  # success, invalid, not_found, blocked, conflict
)

validation_errors = Counter(
    'validation_errors_total',
    'Field-level validation errors',
    ['entity', 'field']
)

# Database metrics
db_operations = Counter(
    'db_operations_total',
    'Total database operations',
    ['operation']  # read, write, rollback
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


def record_entity_operation(entity: str, operation: str, result: str = "success"):
    """Record a service operation outcome."""
    entity_operations.labels(entity=entity, operation=operation, result=result).inc()


def record_validation_errors(entity: str, fields):
    """Record one validation error per offending field."""
    for field in fields:
        validation_errors.labels(entity=entity, field=field).inc()


def record_db_operation(operation: str):
    """Record database operation. Operation: read, write, rollback"""
    db_operations.labels(operation=operation).inc()
