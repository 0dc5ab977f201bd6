from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "maps_proxy_requests_total",
    "Total number of requests",
    ["method", "endpoint", "status_code"]
)

REQUEST_LATENCY = Histogram(
    "maps_proxy_request_duration_seconds",
    "Request latency",
    ["method", "endpoint", "status_code"]
)

UPSTREAM_REQUEST_COUNT = Counter(
    "maps_proxy_upstream_requests_total",
    "Calls made to the maps provider and the facility store",
    ["operation", "outcome"]
)
