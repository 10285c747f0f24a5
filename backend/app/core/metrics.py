"""Central Prometheus metrics registry.

All application metrics are defined here to keep naming and labels consistent.
"""

from prometheus_client import Counter, Histogram, Info

# Application info
app_info = Info("weaviate_dashboard_app", "Weaviate dashboard application info")

# --- HTTP ---
http_requests_total = Counter(
    "weaviate_dashboard_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)
http_request_duration_seconds = Histogram(
    "weaviate_dashboard_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)

# --- Weaviate ---
weaviate_requests_total = Counter(
    "weaviate_dashboard_weaviate_requests_total",
    "Total outbound requests to Weaviate",
    ["operation", "status"],
)
weaviate_request_duration_seconds = Histogram(
    "weaviate_dashboard_weaviate_request_duration_seconds",
    "Outbound Weaviate request duration in seconds",
    ["operation"],
)
aggregate_count_failures_total = Counter(
    "weaviate_dashboard_aggregate_count_failures_total",
    "Aggregate count queries that failed and were reported as zero",
)
collection_rows_returned = Histogram(
    "weaviate_dashboard_collection_rows_returned",
    "Number of rows returned for a collection data request",
    buckets=[0, 1, 10, 100, 1000, 5000, 10000],
)
collections_deleted_total = Counter(
    "weaviate_dashboard_collections_deleted_total",
    "Collections deleted through the dashboard",
)
