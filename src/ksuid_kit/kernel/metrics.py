"""
Prometheus metrics collection for KSUID Kit.

Counts generated identifiers and the failure paths a service operator cares
about: entropy outages and rejected input.
"""

from prometheus_client import Counter, start_http_server

# ============================================================================
# Generation Metrics
# ============================================================================

ksuids_generated_total = Counter(
    "ksuid_generated_total",
    "Total number of KSUIDs generated from an entropy source",
)

entropy_failures_total = Counter(
    "ksuid_entropy_failures_total",
    "Total number of failed reads from the entropy source",
)

# ============================================================================
# Parsing Metrics
# ============================================================================

parse_failures_total = Counter(
    "ksuid_parse_failures_total",
    "Total number of rejected KSUID inputs",
    ["reason"],  # reason: size, character, range
)

# ============================================================================
# Helper Functions
# ============================================================================


def start_metrics_server(port: int = 9090) -> None:
    """
    Start Prometheus metrics HTTP server.

    Args:
        port: Port to listen on (default: 9090)
    """
    start_http_server(port)
