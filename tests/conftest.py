"""Shared fixtures: in-memory database, payment infos and recording fakes."""

import os

os.environ.setdefault("DATABASE_DSN", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("OTEL_SDK_DISABLED", "true")

from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy.orm import sessionmaker

from payaudit.common.db import Base, make_engine
from payaudit.services.payments.models import Customer, Order, PaymentInfo, PaymentLog


class RecordingStore:
    """Store fake that records every persistence request in order."""

    def __init__(self) -> None:
        self.saved: list[tuple[str, object]] = []

    def create_log(self) -> PaymentLog:
        return PaymentLog()

    def save_payment_info(self, payment_info):
        self.saved.append(("payment_info", payment_info))
        return payment_info

    def save_log(self, log):
        self.saved.append(("log", log))
        return log

    def save_response_item(self, response_item):
        self.saved.append(("response_item", response_item))
        return response_item

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.saved]

    def standalone(self, kind: str) -> list:
        return [obj for saved_kind, obj in self.saved if saved_kind == kind]


class StubModule:
    """Payment module fake returning a fixed response or raising a fixed error."""

    name = "stub"

    def __init__(self, response=None, error=None, valid=True, on_call=None) -> None:
        self.response = response
        self.error = error
        self.valid = valid
        self.on_call = on_call
        self.calls: list[tuple[str, object]] = []

    def _call(self, operation, payment_context):
        self.calls.append((operation, payment_context))
        if self.on_call is not None:
            self.on_call(payment_context)
        if self.error is not None:
            raise self.error
        return self.response

    def authorize(self, payment_context):
        return self._call("authorize", payment_context)

    def authorize_and_debit(self, payment_context):
        return self._call("authorize_and_debit", payment_context)

    def balance(self, payment_context):
        return self._call("balance", payment_context)

    def credit(self, payment_context):
        return self._call("credit", payment_context)

    def debit(self, payment_context):
        return self._call("debit", payment_context)

    def void_payment(self, payment_context):
        return self._call("void_payment", payment_context)

    def is_valid_candidate(self, payment_info_type):
        self.calls.append(("is_valid_candidate", payment_info_type))
        return self.valid


def make_payment_info(reference_number="R1", amount="50.00", customer_id="C1") -> PaymentInfo:
    customer = Customer(customer_id=customer_id, username=f"user-{customer_id}")
    order = Order(order_id=str(uuid4()), order_number=f"O-{reference_number}", customer=customer)
    return PaymentInfo(
        payment_info_id=str(uuid4()),
        reference_number=reference_number,
        amount=Decimal(amount),
        payment_info_type="CREDIT_CARD",
        order=order,
    )


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def payment_info():
    return make_payment_info()


@pytest.fixture
def session_factory():
    engine = make_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    engine.dispose()
