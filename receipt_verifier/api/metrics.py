"""Prometheus metrics for API service.

Exposes key metrics for monitoring:
- Request counts by endpoint and status
- Request duration histograms
- Receipt retrieval, extraction and verification outcomes

Based on Prometheus best practices:
https://prometheus.io/docs/practices/naming/
"""

from prometheus_client import Counter, Histogram, generate_latest
from prometheus_client.openmetrics.exposition import CONTENT_TYPE_LATEST

# Request metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# Receipt retrieval metrics
receipt_fetch_total = Counter(
    "receipt_fetch_total",
    "Total receipt retrieval attempts",
    ["status"],  # success, failed
)

# Extraction metrics
receipt_extractions_total = Counter(
    "receipt_extractions_total",
    "Total receipt extractions",
    ["strategy", "status"],  # success, malformed
)

receipt_extraction_duration_seconds = Histogram(
    "receipt_extraction_duration_seconds",
    "Receipt extraction duration in seconds",
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
)

# Verification metrics
receipt_verifications_total = Counter(
    "receipt_verifications_total",
    "Total receipt verifications",
    ["result"],  # verified, rejected
)


def get_metrics() -> tuple[bytes, str]:
    """Generate Prometheus metrics in text format.

    Returns:
        Tuple of (metrics bytes, content type)
    """
    return generate_latest(), CONTENT_TYPE_LATEST
