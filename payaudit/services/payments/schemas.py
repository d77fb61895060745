"""API response schemas for the payment audit trail."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict


class PaymentLogResponse(BaseModel):
    """One START/FINISHED audit log."""

    model_config = ConfigDict(from_attributes=True)

    log_id: int
    log_type: str
    transaction_type: str
    transaction_timestamp: datetime
    transaction_success: bool
    user_name: str
    exception_message: str | None = None
    customer_id: str | None = None
    payment_info_reference_number: str | None = None
    amount_paid: Decimal | None = None


class PaymentResponseItemResponse(BaseModel):
    """Enriched outcome of one payment module call."""

    model_config = ConfigDict(from_attributes=True)

    response_item_id: int
    transaction_type: str | None = None
    user_name: str | None = None
    transaction_id: str | None = None
    authorization_code: str | None = None
    processor_response_code: str | None = None
    processor_response_text: str | None = None
    avs_code: str | None = None
    transaction_success: bool
    transaction_timestamp: datetime | None = None
    amount_paid: Decimal | None = None
    remaining_balance: Decimal | None = None
    currency: str | None = None
    additional_fields: dict[str, Any] | None = None
    customer_id: str | None = None
    payment_info_reference_number: str | None = None
