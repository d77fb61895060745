"""Payment transaction orchestration.

Every transaction is bracketed by a START and a FINISHED audit log. The
response item, including one recovered from a processor failure, is enriched
and persisted before the call returns or the failure is re-raised.
"""

import time
from datetime import datetime, timezone
from typing import Callable

from payaudit.common.exceptions import PaymentException
from payaudit.common.logging import logger, payment_reference_ctx, transaction_type_ctx
from payaudit.common.metrics import (
    payment_logs_written_total,
    payment_response_items_total,
    payment_transaction_seconds,
    payment_transactions_total,
)
from payaudit.common.tracing import get_tracer
from payaudit.common.types import PaymentInfoType, PaymentLogEventType, TransactionType
from payaudit.services.modules.base import PaymentModule
from payaudit.services.modules.registry import get_payment_module
from payaudit.services.payments.context import PaymentContext
from payaudit.services.payments.models import EXCEPTION_MESSAGE_LENGTH, PaymentResponseItem
from payaudit.services.payments.store import PaymentInfoStore

tracer = get_tracer(__name__)


def truncate_exception_message(message: str) -> str:
    """Cut messages that would overflow the exception column to 254 characters."""

    if len(message) >= EXCEPTION_MESSAGE_LENGTH:
        return message[: EXCEPTION_MESSAGE_LENGTH - 1]
    return message


def describe_exception(exc: BaseException | None) -> str | None:
    """Message stored on a FINISHED log: the failure message, else its class name."""

    if exc is None:
        return None
    message = str(exc)
    if message:
        return truncate_exception_message(message)
    cls = type(exc)
    return f"{cls.__module__}.{cls.__qualname__}"


class PaymentService:
    """Runs payment module transactions with guaranteed audit bracketing."""

    def __init__(self, payment_module: PaymentModule, store: PaymentInfoStore) -> None:
        self.payment_module = payment_module
        self.store = store

    def authorize(self, payment_context: PaymentContext) -> PaymentResponseItem:
        return self._execute(TransactionType.AUTHORIZE, self.payment_module.authorize, payment_context)

    def authorize_and_debit(self, payment_context: PaymentContext) -> PaymentResponseItem:
        return self._execute(
            TransactionType.AUTHORIZEANDDEBIT, self.payment_module.authorize_and_debit, payment_context
        )

    def balance(self, payment_context: PaymentContext) -> PaymentResponseItem:
        return self._execute(TransactionType.BALANCE, self.payment_module.balance, payment_context)

    def credit(self, payment_context: PaymentContext) -> PaymentResponseItem:
        return self._execute(TransactionType.CREDIT, self.payment_module.credit, payment_context)

    def debit(self, payment_context: PaymentContext) -> PaymentResponseItem:
        return self._execute(TransactionType.DEBIT, self.payment_module.debit, payment_context)

    def void_payment(self, payment_context: PaymentContext) -> PaymentResponseItem:
        return self._execute(TransactionType.VOIDPAYMENT, self.payment_module.void_payment, payment_context)

    def is_valid_candidate(self, payment_info_type: PaymentInfoType) -> bool:
        return self.payment_module.is_valid_candidate(payment_info_type)

    def _execute(
        self,
        transaction_type: TransactionType,
        call: Callable[[PaymentContext], PaymentResponseItem],
        payment_context: PaymentContext,
    ) -> PaymentResponseItem:
        """Run one module call between START and FINISHED logs.

        Failures are re-raised unchanged once the response item and the
        FINISHED log have been persisted.
        """

        info = payment_context.payment_info
        type_token = transaction_type_ctx.set(transaction_type.value)
        reference_token = payment_reference_ctx.set(info.reference_number if info is not None else "")
        started = time.perf_counter()
        response: PaymentResponseItem | None = None
        failure: BaseException | None = None
        succeeded = False
        try:
            with tracer.start_as_current_span(f"payment.{transaction_type.value.lower()}") as span:
                span.set_attribute("payment.user_name", payment_context.user_name)
                if info is not None:
                    span.set_attribute("payment.reference_number", info.reference_number)

                self._log_start_event(payment_context, transaction_type)
                try:
                    response = call(payment_context)
                except PaymentException as exc:
                    response = exc.response_item
                    failure = exc
                    logger.warning(
                        "payment_transaction_failed transaction_type=%s processor_response=%s error=%s",
                        transaction_type.value,
                        response is not None,
                        exc,
                    )
                    raise
                except Exception as exc:
                    failure = exc
                    logger.exception("payment_transaction_error transaction_type=%s", transaction_type.value)
                    raise
                finally:
                    try:
                        self._log_response_item(payment_context, response, transaction_type)
                    finally:
                        self._log_finish_event(payment_context, transaction_type, failure)
                succeeded = True
        finally:
            payment_transaction_seconds.labels(transaction_type=transaction_type.value).observe(
                time.perf_counter() - started
            )
            payment_transactions_total.labels(
                transaction_type=transaction_type.value,
                outcome="success" if succeeded else "failure",
            ).inc()
            transaction_type_ctx.reset(type_token)
            payment_reference_ctx.reset(reference_token)

        logger.info("payment_transaction_succeeded transaction_type=%s", transaction_type.value)
        return response

    def _log_response_item(
        self,
        payment_context: PaymentContext,
        response: PaymentResponseItem | None,
        transaction_type: TransactionType,
    ) -> None:
        if response is None:
            return
        response.transaction_type = transaction_type.value
        response.user_name = payment_context.user_name
        info = payment_context.payment_info
        if info is not None:
            response.customer = info.order.customer
            response.payment_info_reference_number = info.reference_number
            # back_populates links response.payment_info
            info.payment_response_items.append(response)
            self.store.save_payment_info(info)
        else:
            self.store.save_response_item(response)
        payment_response_items_total.labels(transaction_type=transaction_type.value).inc()

    def _log_start_event(self, payment_context: PaymentContext, transaction_type: TransactionType) -> None:
        self._write_log(payment_context, transaction_type, PaymentLogEventType.START, None)

    def _log_finish_event(
        self,
        payment_context: PaymentContext,
        transaction_type: TransactionType,
        failure: BaseException | None,
    ) -> None:
        self._write_log(payment_context, transaction_type, PaymentLogEventType.FINISHED, failure)

    def _write_log(
        self,
        payment_context: PaymentContext,
        transaction_type: TransactionType,
        log_type: PaymentLogEventType,
        failure: BaseException | None,
    ) -> None:
        log = self.store.create_log()
        log.log_type = log_type.value
        log.transaction_timestamp = datetime.now(timezone.utc)
        log.transaction_success = failure is None
        log.transaction_type = transaction_type.value
        log.user_name = payment_context.user_name
        log.exception_message = describe_exception(failure)

        info = payment_context.payment_info
        if info is not None:
            log.customer = info.order.customer
            log.payment_info_reference_number = info.reference_number
            log.amount_paid = info.amount
            info.payment_logs.append(log)
            self.store.save_payment_info(info)
        else:
            self.store.save_log(log)
        payment_logs_written_total.labels(log_type=log_type.value).inc()
        logger.info(
            "payment_log_written log_type=%s transaction_type=%s success=%s",
            log_type.value,
            transaction_type.value,
            log.transaction_success,
        )


def build_payment_service(session_factory, module_name: str | None = None) -> PaymentService:
    """Wire the configured payment module to a session-backed store."""

    return PaymentService(get_payment_module(module_name), PaymentInfoStore(session_factory))
