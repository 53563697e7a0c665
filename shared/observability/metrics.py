from prometheus_client import Counter, Histogram

# Business Metrics
ecomm_login_total = Counter(
    "ecomm_login_total",
    "Login attempts",
    ["outcome"]  # Labels: 'success', 'rejected', 'disabled'
)

ecomm_tokens_issued_total = Counter(
    "ecomm_tokens_issued_total",
    "Signed tokens issued",
    ["type"]  # Labels: 'access', 'refresh'
)

ecomm_orders_created_total = Counter(
    "ecomm_orders_created_total",
    "Orders created"
)

ecomm_order_total_amount = Histogram(
    "ecomm_order_total_amount",
    "Computed order totals",
    buckets=(5, 10, 25, 50, 100, 250, 500, 1000, 2500, 5000, 10000)
)

ecomm_order_status_updates_total = Counter(
    "ecomm_order_status_updates_total",
    "Order status updates",
    ["status"]  # Labels: target status
)

ecomm_gateway_upstream_errors_total = Counter(
    "ecomm_gateway_upstream_errors_total",
    "Gateway requests that could not reach their upstream",
    ["service"]
)
