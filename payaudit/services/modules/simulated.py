"""Development payment module that simulates processor outcomes.

Reference numbers starting with `force-decline` are always declined and
`force-timeout` always times out. Other transactions draw an outcome from the
configured weights.
"""

import random
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from payaudit.common.exceptions import PaymentException, PaymentProcessorException
from payaudit.common.logging import logger
from payaudit.common.types import PaymentInfoType
from payaudit.services.payments.context import PaymentContext
from payaudit.services.payments.models import PaymentResponseItem

DEFAULT_VALID_CANDIDATES = frozenset({PaymentInfoType.CREDIT_CARD, PaymentInfoType.GIFT_CARD})


class SimulatedPaymentModule:
    name = "simulated"

    def __init__(
        self,
        decline_weight: float = 0.0,
        timeout_weight: float = 0.0,
        valid_candidates=DEFAULT_VALID_CANDIDATES,
        currency: str = "USD",
        rng: random.Random | None = None,
    ) -> None:
        if decline_weight < 0 or timeout_weight < 0 or decline_weight + timeout_weight > 1:
            raise ValueError("outcome weights must be non-negative and sum to at most 1")
        self.decline_weight = decline_weight
        self.timeout_weight = timeout_weight
        self.valid_candidates = frozenset(valid_candidates)
        self.currency = currency
        self.rng = rng or random.Random()

    def authorize(self, payment_context: PaymentContext) -> PaymentResponseItem:
        return self._process(payment_context, "authorize")

    def authorize_and_debit(self, payment_context: PaymentContext) -> PaymentResponseItem:
        return self._process(payment_context, "authorize_and_debit")

    def balance(self, payment_context: PaymentContext) -> PaymentResponseItem:
        return self._process(payment_context, "balance", requires_amount=False)

    def credit(self, payment_context: PaymentContext) -> PaymentResponseItem:
        return self._process(payment_context, "credit")

    def debit(self, payment_context: PaymentContext) -> PaymentResponseItem:
        return self._process(payment_context, "debit")

    def void_payment(self, payment_context: PaymentContext) -> PaymentResponseItem:
        return self._process(payment_context, "void_payment", requires_amount=False)

    def is_valid_candidate(self, payment_info_type: PaymentInfoType) -> bool:
        return payment_info_type in self.valid_candidates

    def _outcome(self, payment_context: PaymentContext) -> str:
        info = payment_context.payment_info
        reference = info.reference_number.lower() if info is not None else ""
        if reference.startswith("force-timeout"):
            return "TIMEOUT"
        if reference.startswith("force-decline"):
            return "DECLINE"
        return self.rng.choices(
            population=["SUCCESS", "DECLINE", "TIMEOUT"],
            weights=[1 - self.decline_weight - self.timeout_weight, self.decline_weight, self.timeout_weight],
            k=1,
        )[0]

    def _process(
        self, payment_context: PaymentContext, operation: str, requires_amount: bool = True
    ) -> PaymentResponseItem:
        amount = payment_context.amount()
        if requires_amount and (amount is None or amount <= 0):
            raise PaymentException(f"invalid transaction amount for {operation}: {amount}")

        outcome = self._outcome(payment_context)
        if outcome == "TIMEOUT":
            logger.warning("simulated processor timeout operation=%s", operation)
            raise PaymentException(f"payment processor timed out during {operation}")

        response = PaymentResponseItem(
            transaction_id=f"sim_{uuid4().hex}",
            transaction_timestamp=datetime.now(timezone.utc),
            currency=self.currency,
            additional_fields={"module": self.name, "operation": operation},
        )
        if outcome == "DECLINE":
            response.transaction_success = False
            response.processor_response_code = "05"
            response.processor_response_text = "DECLINED"
            raise PaymentProcessorException(f"payment declined during {operation}", response)

        response.transaction_success = True
        response.processor_response_code = "00"
        response.processor_response_text = "APPROVED"
        if operation in ("authorize", "authorize_and_debit"):
            response.authorization_code = uuid4().hex[:6].upper()
            response.avs_code = "Y"
        if operation == "balance":
            info = payment_context.payment_info
            response.remaining_balance = info.amount if info is not None else Decimal("0")
        else:
            response.amount_paid = amount
        return response
