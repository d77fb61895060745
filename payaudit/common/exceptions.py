"""Payment failure types raised by payment modules.

PaymentException
└── PaymentProcessorException (carries the declined/failed response item)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from payaudit.services.payments.models import PaymentResponseItem


class PaymentException(Exception):
    """Generic transactional failure from a payment module.

    `response_item` is always None here; only processor failures carry
    detail about the failed attempt. The orchestrator reads it instead of
    type-testing.
    """

    @property
    def response_item(self) -> PaymentResponseItem | None:
        return None


class PaymentProcessorException(PaymentException):
    """Processor-level failure, e.g. a gateway decline with response detail."""

    def __init__(self, message: str | None, response_item: PaymentResponseItem) -> None:
        if message is None:
            super().__init__()
        else:
            super().__init__(message)
        self._response_item = response_item

    @property
    def response_item(self) -> PaymentResponseItem:
        return self._response_item
