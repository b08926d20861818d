"""
Monitoring and observability utilities with Sentry and Prometheus integration
"""

import os
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from prometheus_client import CollectorRegistry, Counter, Histogram, Gauge

from utils.config import Config

registry = CollectorRegistry()

# Prometheus metrics
REQUEST_COUNT = Counter(
    'site_requests_total',
    'Total number of requests',
    ['method', 'endpoint', 'status_code'],
    registry=registry
)

REQUEST_DURATION = Histogram(
    'site_request_duration_seconds',
    'Request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

CONTENT_OPERATIONS = Counter(
    'site_content_operations_total',
    'Content backend operations',
    ['backend', 'operation', 'status'],
    registry=registry
)

CONTENT_OPERATION_DURATION = Histogram(
    'site_content_operation_duration_seconds',
    'Content backend operation duration in seconds',
    ['backend', 'operation'],
    registry=registry
)

CONTENT_ROLLBACKS = Counter(
    'site_content_rollbacks_total',
    'Optimistic updates reverted after a failed write',
    ['section'],
    registry=registry
)

STORE_READY = Gauge(
    'site_content_store_ready',
    'Whether the content store finished its initial load',
    registry=registry
)


def init_sentry(config: Config) -> bool:
    """Initialize Sentry for error tracking"""
    sentry_dsn = config.sentry_dsn
    if config.environment != "production" or not sentry_dsn:
        return False
    sentry_sdk.init(
        dsn=sentry_dsn,
        integrations=[FastApiIntegration()],
        traces_sample_rate=0.1,
        environment=config.environment,
        release=os.getenv("APP_VERSION", "unknown"),
    )
    return True


def track_request_metrics(method: str, endpoint: str, status_code: int, duration: float):
    """Track request metrics"""
    REQUEST_COUNT.labels(method=method, endpoint=endpoint, status_code=status_code).inc()
    REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration)


def track_content_operation(backend: str, operation: str, status: str, duration: float):
    """Track a fetch/persist call against a content backend"""
    CONTENT_OPERATIONS.labels(backend=backend, operation=operation, status=status).inc()
    CONTENT_OPERATION_DURATION.labels(backend=backend, operation=operation).observe(duration)


def track_rollback(section: str):
    """Track an optimistic update that had to be reverted"""
    CONTENT_ROLLBACKS.labels(section=section).inc()
