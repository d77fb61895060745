"""Enumerations shared by the orchestrator, store and payment modules."""

from enum import Enum


class TransactionType(str, Enum):
    """Kind of payment operation executed against a payment module."""

    AUTHORIZE = "AUTHORIZE"
    AUTHORIZEANDDEBIT = "AUTHORIZEANDDEBIT"
    BALANCE = "BALANCE"
    CREDIT = "CREDIT"
    DEBIT = "DEBIT"
    VOIDPAYMENT = "VOIDPAYMENT"


class PaymentLogEventType(str, Enum):
    """Position of an audit log within the transaction bracket."""

    START = "START"
    FINISHED = "FINISHED"


class PaymentInfoType(str, Enum):
    """Payment instrument kinds a module may accept."""

    CREDIT_CARD = "CREDIT_CARD"
    BANK_ACCOUNT = "BANK_ACCOUNT"
    GIFT_CARD = "GIFT_CARD"
    ELECTRONIC_CHECK = "ELECTRONIC_CHECK"
    ACCOUNT = "ACCOUNT"
