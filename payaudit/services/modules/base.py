"""Interface every payment module implements.

Transactional methods return a response item describing the processor outcome
or raise `PaymentException`. A declined attempt raises
`PaymentProcessorException` carrying its response item.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from payaudit.common.types import PaymentInfoType

if TYPE_CHECKING:
    from payaudit.services.payments.context import PaymentContext
    from payaudit.services.payments.models import PaymentResponseItem


class PaymentModule(Protocol):
    name: str

    def authorize(self, payment_context: PaymentContext) -> PaymentResponseItem: ...

    def authorize_and_debit(self, payment_context: PaymentContext) -> PaymentResponseItem: ...

    def balance(self, payment_context: PaymentContext) -> PaymentResponseItem: ...

    def credit(self, payment_context: PaymentContext) -> PaymentResponseItem: ...

    def debit(self, payment_context: PaymentContext) -> PaymentResponseItem: ...

    def void_payment(self, payment_context: PaymentContext) -> PaymentResponseItem: ...

    def is_valid_candidate(self, payment_info_type: PaymentInfoType) -> bool:
        """Whether this module can process the given instrument type."""
