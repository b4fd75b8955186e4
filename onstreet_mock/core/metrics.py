"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry, generate_latest

registry = CollectorRegistry()

request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

cache_hits = Counter(
    'quote_cache_hits_total',
    'Total rate quote cache hits',
    ['zone_id'],
    registry=registry
)

cache_misses = Counter(
    'quote_cache_misses_total',
    'Total rate quote cache misses',
    ['zone_id'],
    registry=registry
)

tickets_paid = Counter(
    'tickets_paid_total',
    'Total pay-ticket requests by outcome',
    ['outcome'],
    registry=registry
)

ticket_validations = Counter(
    'ticket_validations_total',
    'Total validate-ticket lookups by outcome',
    ['valid'],
    registry=registry
)

rate_limit_exceeded = Counter(
    'rate_limit_exceeded_total',
    'Total rate limit exceeded events',
    registry=registry
)

webhook_deliveries = Counter(
    'webhook_deliveries_total',
    'Total ticket notification delivery attempts',
    ['status', 'retry_count'],
    registry=registry
)

webhook_duration = Histogram(
    'webhook_delivery_duration_seconds',
    'Ticket notification delivery duration in seconds',
    ['status'],
    registry=registry
)

redis_connected = Gauge(
    'redis_connected',
    'Redis connection status (1=connected, 0=disconnected)',
    registry=registry
)


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    return generate_latest(registry).decode('utf-8')
