"""Prometheus metric definitions shared by the app and the services"""

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "codemaster_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)
REQUEST_LATENCY = Histogram(
    "codemaster_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)
POINTS_AWARDED = Counter(
    "codemaster_points_awarded_total",
    "Points credited to users",
    ["reason"],
)
SOLVE_CREDITS = Counter(
    "codemaster_solve_credits_total",
    "Solve-credit attempts by outcome",
    ["outcome"],
)
STORE_PURCHASES = Counter(
    "codemaster_store_purchases_total",
    "Store purchase attempts by outcome",
    ["outcome"],
)
SUBMISSIONS = Counter(
    "codemaster_submissions_total",
    "Submissions by verdict",
    ["verdict"],
)
