"""Structured JSON logging with per-transaction context fields."""

import logging
import sys
from contextvars import ContextVar

from pythonjsonlogger.json import JsonFormatter

from payaudit.common.config import settings


trace_id_ctx: ContextVar[str] = ContextVar("trace_id", default="")
transaction_type_ctx: ContextVar[str] = ContextVar("transaction_type", default="")
payment_reference_ctx: ContextVar[str] = ContextVar("payment_reference", default="")


class ContextFilter(logging.Filter):
    """Inject service and correlation identifiers into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = settings.service_name
        record.trace_id = trace_id_ctx.get()
        record.transaction_type = transaction_type_ctx.get()
        record.payment_reference = payment_reference_ctx.get()
        return True


def configure_logging() -> None:
    """Configure root logger once per process."""

    handler = logging.StreamHandler(sys.stdout)
    context_filter = ContextFilter()
    handler.addFilter(context_filter)
    formatter = JsonFormatter(
        "%(asctime)s %(levelname)s %(service_name)s %(trace_id)s "
        "%(transaction_type)s %(payment_reference)s %(message)s"
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(settings.log_level)
    root.addFilter(context_filter)


logger = logging.getLogger("payaudit")
