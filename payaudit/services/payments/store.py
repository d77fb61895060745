"""Ledger store: persistence of payment infos and their audit trail."""

from sqlalchemy import select
from sqlalchemy.orm import object_session

from payaudit.services.payments.models import PaymentInfo, PaymentLog, PaymentResponseItem


class PaymentInfoStore:
    """Persists payment infos, standalone logs and standalone response items.

    An entity already bound to an open session (e.g. one the checkout workflow
    loaded itself) is written and committed through that session. Anything
    else is written in a session of its own and refreshed before the session
    closes, so its collections stay usable once detached. The session factory
    must be configured with `expire_on_commit=False`.
    """

    def __init__(self, session_factory) -> None:
        self.session_factory = session_factory

    def create_log(self) -> PaymentLog:
        return PaymentLog()

    def _save(self, entity):
        owner = object_session(entity)
        if owner is not None:
            owner.add(entity)
            owner.commit()
            return entity
        with self.session_factory() as db:
            db.add(entity)
            db.commit()
            db.refresh(entity)
            if isinstance(entity, PaymentInfo):
                # load while attached; appends happen after the session closes
                entity.payment_logs
                entity.payment_response_items
        return entity

    def save_payment_info(self, payment_info: PaymentInfo) -> PaymentInfo:
        """Persist a payment info together with any appended logs/response items."""

        return self._save(payment_info)

    def save_log(self, log: PaymentLog) -> PaymentLog:
        return self._save(log)

    def save_response_item(self, response_item: PaymentResponseItem) -> PaymentResponseItem:
        return self._save(response_item)

    def find_payment_info(self, reference_number: str) -> PaymentInfo | None:
        with self.session_factory() as db:
            return db.execute(
                select(PaymentInfo).where(PaymentInfo.reference_number == reference_number)
            ).scalar_one_or_none()

    def read_logs(self, reference_number: str) -> list[PaymentLog]:
        """Return all logs recorded for a reference number, oldest first."""

        with self.session_factory() as db:
            return list(
                db.execute(
                    select(PaymentLog)
                    .where(PaymentLog.payment_info_reference_number == reference_number)
                    .order_by(PaymentLog.log_id)
                ).scalars()
            )

    def read_response_items(self, reference_number: str) -> list[PaymentResponseItem]:
        """Return all response items recorded for a reference number, oldest first."""

        with self.session_factory() as db:
            return list(
                db.execute(
                    select(PaymentResponseItem)
                    .where(PaymentResponseItem.payment_info_reference_number == reference_number)
                    .order_by(PaymentResponseItem.response_item_id)
                ).scalars()
            )
