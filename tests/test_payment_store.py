"""Integration tests for the SQLAlchemy-backed ledger store."""

from decimal import Decimal

import pytest
from sqlalchemy import select

from conftest import StubModule, make_payment_info
from payaudit.common.exceptions import PaymentException, PaymentProcessorException
from payaudit.services.modules.simulated import SimulatedPaymentModule
from payaudit.services.payments.context import PaymentContext
from payaudit.services.payments.models import PaymentInfo, PaymentLog, PaymentResponseItem
from payaudit.services.payments.service import PaymentService
from payaudit.services.payments.store import PaymentInfoStore


def test_authorize_scenario_persists_audit_trail_on_payment_info(session_factory):
    """Authorizing R1 for alice stores two logs and one response item on the payment info."""

    store = PaymentInfoStore(session_factory)
    info = store.save_payment_info(make_payment_info("R1", "50.00", customer_id="C1"))
    service = PaymentService(StubModule(response=PaymentResponseItem(transaction_success=True)), store)

    service.authorize(PaymentContext(user_name="alice", payment_info=info))

    reloaded = store.find_payment_info("R1")
    assert [log.log_type for log in reloaded.payment_logs] == ["START", "FINISHED"]
    for log in reloaded.payment_logs:
        assert log.transaction_success is True
        assert log.customer_id == "C1"
        assert log.payment_info_reference_number == "R1"
        assert log.amount_paid == Decimal("50.00")
        assert log.transaction_type == "AUTHORIZE"
    (item,) = reloaded.payment_response_items
    assert item.transaction_type == "AUTHORIZE"
    assert item.customer_id == "C1"
    assert item.payment_info_reference_number == "R1"
    assert item.user_name == "alice"


def test_logs_accumulate_across_transactions(session_factory):
    """Consecutive transactions on one payment info append to the same trail."""

    store = PaymentInfoStore(session_factory)
    info = store.save_payment_info(make_payment_info("R2", "20.00", customer_id="C2"))
    service = PaymentService(SimulatedPaymentModule(), store)
    context = PaymentContext(user_name="alice", payment_info=info)

    service.authorize(context)
    service.debit(context)

    logs = store.read_logs("R2")
    assert [(log.transaction_type, log.log_type) for log in logs] == [
        ("AUTHORIZE", "START"),
        ("AUTHORIZE", "FINISHED"),
        ("DEBIT", "START"),
        ("DEBIT", "FINISHED"),
    ]
    assert [item.transaction_type for item in store.read_response_items("R2")] == ["AUTHORIZE", "DEBIT"]


def test_declined_transaction_is_persisted_with_response(session_factory):
    """A processor decline is stored with its response detail."""

    store = PaymentInfoStore(session_factory)
    info = store.save_payment_info(make_payment_info("force-decline-7", "15.00", customer_id="C3"))
    service = PaymentService(SimulatedPaymentModule(), store)

    with pytest.raises(PaymentProcessorException):
        service.debit(PaymentContext(user_name="bob", payment_info=info))

    logs = store.read_logs("force-decline-7")
    assert logs[-1].transaction_success is False
    assert logs[-1].exception_message == "payment declined during debit"
    (item,) = store.read_response_items("force-decline-7")
    assert item.transaction_success is False
    assert item.processor_response_code == "05"
    assert item.customer_id == "C3"


def test_timeout_is_logged_without_response(session_factory):
    """A timeout leaves an unsuccessful FINISHED log and no response item."""

    store = PaymentInfoStore(session_factory)
    info = store.save_payment_info(make_payment_info("force-timeout-1", "15.00", customer_id="C4"))
    service = PaymentService(SimulatedPaymentModule(), store)

    with pytest.raises(PaymentException):
        service.credit(PaymentContext(user_name="bob", payment_info=info))

    assert [log.transaction_success for log in store.read_logs("force-timeout-1")] == [True, False]
    assert store.read_response_items("force-timeout-1") == []


def test_standalone_records_without_payment_info(session_factory):
    """Transactions without a payment info persist standalone rows."""

    store = PaymentInfoStore(session_factory)
    service = PaymentService(SimulatedPaymentModule(), store)

    service.balance(PaymentContext(user_name="carol"))

    with session_factory() as db:
        logs = db.execute(select(PaymentLog)).scalars().all()
        items = db.execute(select(PaymentResponseItem)).scalars().all()
    assert [log.log_type for log in logs] == ["START", "FINISHED"]
    assert all(log.payment_info_id is None and log.customer_id is None for log in logs)
    (item,) = items
    assert item.transaction_type == "BALANCE"
    assert item.user_name == "carol"
    assert item.payment_info_id is None
    assert item.remaining_balance == Decimal("0")


def test_find_payment_info_unknown_reference(session_factory):
    """Looking up a missing reference returns None."""

    assert PaymentInfoStore(session_factory).find_payment_info("missing") is None


def test_create_log_returns_fresh_unsaved_log(session_factory):
    """Each created log is a new, unsaved instance."""

    store = PaymentInfoStore(session_factory)
    first, second = store.create_log(), store.create_log()
    assert first is not second
    assert first.log_id is None


def test_saved_payment_info_collections_usable_after_session_closes(session_factory):
    """A saved payment info can still be read and appended to once detached."""

    store = PaymentInfoStore(session_factory)
    info = store.save_payment_info(make_payment_info("R-DETACHED", "12.00", customer_id="C5"))

    assert info.payment_logs == []
    assert info.payment_response_items == []
    assert info.order.customer.customer_id == "C5"


def test_unsaved_payment_info_is_persisted_by_first_transaction(session_factory):
    """A payment info never saved before is stored with its trail on first use."""

    store = PaymentInfoStore(session_factory)
    info = make_payment_info("R-NEW", "9.99", customer_id="C6")
    service = PaymentService(SimulatedPaymentModule(), store)

    service.authorize(PaymentContext(user_name="alice", payment_info=info))

    assert [log.log_type for log in info.payment_logs] == ["START", "FINISHED"]
    reloaded = store.find_payment_info("R-NEW")
    assert [log.log_type for log in reloaded.payment_logs] == ["START", "FINISHED"]
    (item,) = reloaded.payment_response_items
    assert item.transaction_type == "AUTHORIZE"
    assert item.customer_id == "C6"


def test_session_bound_payment_info_is_written_through_its_session(session_factory):
    """A payment info loaded in the caller's open session is audited through that session."""

    store = PaymentInfoStore(session_factory)
    store.save_payment_info(make_payment_info("R-BOUND", "40.00", customer_id="C7"))
    service = PaymentService(SimulatedPaymentModule(), store)

    with session_factory() as db:
        info = db.execute(select(PaymentInfo).where(PaymentInfo.reference_number == "R-BOUND")).scalar_one()
        response = service.authorize(PaymentContext(user_name="alice", payment_info=info))
        assert len(info.payment_logs) == 2
        assert response.payment_info is info

    logs = store.read_logs("R-BOUND")
    assert [(log.log_type, log.transaction_success) for log in logs] == [("START", True), ("FINISHED", True)]
    (item,) = store.read_response_items("R-BOUND")
    assert item.user_name == "alice"
    assert item.customer_id == "C7"
