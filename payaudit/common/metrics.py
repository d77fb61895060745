"""Prometheus metric definitions for payment transactions and audit writes."""

from prometheus_client import Counter, Histogram, generate_latest
from starlette.responses import Response


payment_transactions_total = Counter(
    "payment_transactions_total",
    "Total payment transactions by outcome",
    ["transaction_type", "outcome"],
)
payment_transaction_seconds = Histogram(
    "payment_transaction_seconds",
    "Payment backend call duration seconds including audit bracketing",
    ["transaction_type"],
)
payment_logs_written_total = Counter(
    "payment_logs_written_total",
    "Total payment audit logs written",
    ["log_type"],
)
payment_response_items_total = Counter(
    "payment_response_items_total",
    "Total payment response items persisted",
    ["transaction_type"],
)


def metrics_response() -> Response:
    """Expose all registered Prometheus metrics in text format."""

    return Response(content=generate_latest(), media_type="text/plain")
