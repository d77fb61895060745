"""Request-scoped descriptor handed to the orchestrator and payment modules."""

from dataclasses import dataclass
from decimal import Decimal

from payaudit.services.payments.models import PaymentInfo


@dataclass
class PaymentContext:
    user_name: str
    payment_info: PaymentInfo | None = None
    transaction_amount: Decimal | None = None

    def amount(self) -> Decimal | None:
        """Amount to transact: explicit amount first, then the payment info amount."""

        if self.transaction_amount is not None:
            return self.transaction_amount
        if self.payment_info is not None:
            return self.payment_info.amount
        return None
