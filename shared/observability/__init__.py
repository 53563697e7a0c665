from .setup import setup_observability
from .metrics import (
    ecomm_login_total,
    ecomm_tokens_issued_total,
    ecomm_orders_created_total,
    ecomm_order_total_amount,
    ecomm_order_status_updates_total,
    ecomm_gateway_upstream_errors_total
)
