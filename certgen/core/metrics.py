"""Application metrics using the Prometheus client library.

All metrics live here so there is a single inventory of everything the
service measures.  Other modules import specific metrics and
increment/observe them at the point of action.

Counters only go up (issued certificates, verifications).  Gauges go up
and down (in-flight requests).  Histograms bucket observations so
Prometheus can compute percentiles; PDF rendering is by far the slowest
step of issuance, so it gets its own histogram.

Prometheus pulls these from GET /metrics.  Under Lambda each execution
environment keeps its own registry, so the HTTP surface is the one to
scrape.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by the MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    # Verification is a single key lookup (tens of ms); issuance launches
    # a browser and uploads to S3 (seconds), hence the long tail.
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Certificate metrics
# ---------------------------------------------------------------------------

CERTIFICATES_ISSUED = Counter(
    "certificates_issued_total",
    "Issuance requests that produced a PDF",
    ["outcome"],  # "created" (new record) or "existing" (record kept as-is)
)

CERTIFICATE_VERIFICATIONS = Counter(
    "certificate_verifications_total",
    "Verification lookups by result",
    ["result"],  # "valid" or "invalid"
)

PDF_RENDER_DURATION = Histogram(
    "pdf_render_duration_seconds",
    "Time spent launching Chromium and printing the certificate PDF",
    buckets=[0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0],
)
