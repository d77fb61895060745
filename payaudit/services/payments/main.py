"""HTTP surface for the persisted payment audit trail."""

from uuid import uuid4

from fastapi import FastAPI, Header, HTTPException

from payaudit.common.config import settings
from payaudit.common.db import SessionLocal
from payaudit.common.logging import configure_logging, trace_id_ctx
from payaudit.common.metrics import metrics_response
from payaudit.common.startup import log_startup_config
from payaudit.common.tracing import instrument_app, setup_tracing
from payaudit.services.payments.schemas import PaymentLogResponse, PaymentResponseItemResponse
from payaudit.services.payments.store import PaymentInfoStore

configure_logging()
setup_tracing(settings.service_name)
log_startup_config(
    settings.service_name,
    ["SERVICE_NAME", "DATABASE_DSN", "PAYMENT_MODULE", "LOG_LEVEL"],
)
store = PaymentInfoStore(SessionLocal)

app = FastAPI(title="Payment Audit")
instrument_app(app)


def _require_payment_info(reference_number: str) -> None:
    if store.find_payment_info(reference_number) is None:
        raise HTTPException(status_code=404, detail="payment info not found")


@app.get("/payment-infos/{reference_number}/logs", response_model=list[PaymentLogResponse])
def get_payment_logs(reference_number: str, x_trace_id: str | None = Header(default=None)):
    """START/FINISHED logs for one payment info, oldest first."""

    trace_id_ctx.set(x_trace_id or str(uuid4()))
    _require_payment_info(reference_number)
    return [PaymentLogResponse.model_validate(log) for log in store.read_logs(reference_number)]


@app.get(
    "/payment-infos/{reference_number}/response-items",
    response_model=list[PaymentResponseItemResponse],
)
def get_payment_response_items(reference_number: str, x_trace_id: str | None = Header(default=None)):
    """Enriched response items for one payment info, oldest first."""

    trace_id_ctx.set(x_trace_id or str(uuid4()))
    _require_payment_info(reference_number)
    return [
        PaymentResponseItemResponse.model_validate(item)
        for item in store.read_response_items(reference_number)
    ]


@app.get("/metrics")
def metrics():
    """Prometheus scrape endpoint."""

    return metrics_response()


@app.get("/health")
def health():
    """Container health probe endpoint."""

    return {"ok": True}
