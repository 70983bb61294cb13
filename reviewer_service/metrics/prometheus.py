# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics: single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "reviewer_requests_total",
    "Total HTTP requests to the reviewer service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "reviewer_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "reviewer_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
PRS_CREATED = Counter(
    "prs_created_total",
    "Total pull requests created",
)
PRS_MERGED = Counter(
    "prs_merged_total",
    "Total pull requests transitioned to MERGED",
)
REVIEWERS_ASSIGNED = Histogram(
    "reviewers_assigned",
    "Reviewers picked per created pull request",
    buckets=[0, 1, 2],
)
REVIEWER_REASSIGNMENTS = Counter(
    "reviewer_reassignments_total",
    "Reviewer reassignment attempts by outcome",
    ["outcome"],
)
TEAMS_CREATED = Counter(
    "teams_created_total",
    "Total teams created",
)
