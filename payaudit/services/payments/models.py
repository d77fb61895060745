"""Payment database models.

Customers and orders carry only what the orchestrator reads. Payment infos own
their audit logs and response items; both may also exist standalone when a
transaction runs without a stored payment info.
"""

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Numeric, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payaudit.common.db import Base

# Exception messages are stored in a 255-wide column.
EXCEPTION_MESSAGE_LENGTH = 255

AdditionalFields = JSON().with_variant(JSONB(), "postgresql")


class Customer(Base):
    """Owner of orders, referenced by every audit row tied to a payment info."""

    __tablename__ = "customers"

    customer_id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid4()))
    username: Mapped[str] = mapped_column(String, unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class Order(Base):
    """Order a payment info pays for."""

    __tablename__ = "orders"

    order_id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid4()))
    order_number: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    customer_id: Mapped[str] = mapped_column(ForeignKey("customers.customer_id"), index=True)
    customer: Mapped[Customer] = relationship(lazy="joined")


class PaymentInfo(Base):
    """One payment instrument/attempt against an order."""

    __tablename__ = "payment_infos"

    payment_info_id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid4()))
    order_id: Mapped[str] = mapped_column(ForeignKey("orders.order_id"), index=True)
    reference_number: Mapped[str] = mapped_column(String, unique=True, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(19, 5))
    payment_info_type: Mapped[str] = mapped_column(String, default="CREDIT_CARD")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    order: Mapped[Order] = relationship(lazy="joined")
    payment_logs: Mapped[list["PaymentLog"]] = relationship(
        back_populates="payment_info",
        order_by="PaymentLog.log_id",
        lazy="selectin",
        cascade="all, delete-orphan",
    )
    payment_response_items: Mapped[list["PaymentResponseItem"]] = relationship(
        back_populates="payment_info",
        order_by="PaymentResponseItem.response_item_id",
        lazy="selectin",
        cascade="all, delete-orphan",
    )


class PaymentLog(Base):
    """Immutable START/FINISHED audit entry for one transaction."""

    __tablename__ = "payment_logs"

    log_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    log_type: Mapped[str] = mapped_column(String, index=True)
    transaction_type: Mapped[str] = mapped_column(String, index=True)
    transaction_timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    transaction_success: Mapped[bool] = mapped_column(Boolean, default=True)
    user_name: Mapped[str] = mapped_column(String)
    exception_message: Mapped[str | None] = mapped_column(String(EXCEPTION_MESSAGE_LENGTH), nullable=True)
    customer_id: Mapped[str | None] = mapped_column(ForeignKey("customers.customer_id"), nullable=True)
    payment_info_reference_number: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    amount_paid: Mapped[Decimal | None] = mapped_column(Numeric(19, 5), nullable=True)
    payment_info_id: Mapped[str | None] = mapped_column(
        ForeignKey("payment_infos.payment_info_id"), nullable=True, index=True
    )

    customer: Mapped[Customer | None] = relationship(lazy="joined")
    payment_info: Mapped[PaymentInfo | None] = relationship(back_populates="payment_logs")


class PaymentResponseItem(Base):
    """Outcome of one payment module call, successful or declined."""

    __tablename__ = "payment_response_items"

    response_item_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    transaction_type: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    user_name: Mapped[str | None] = mapped_column(String, nullable=True)
    transaction_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    authorization_code: Mapped[str | None] = mapped_column(String, nullable=True)
    processor_response_code: Mapped[str | None] = mapped_column(String, nullable=True)
    processor_response_text: Mapped[str | None] = mapped_column(String, nullable=True)
    avs_code: Mapped[str | None] = mapped_column(String, nullable=True)
    transaction_success: Mapped[bool] = mapped_column(Boolean, default=False)
    transaction_timestamp: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    amount_paid: Mapped[Decimal | None] = mapped_column(Numeric(19, 5), nullable=True)
    remaining_balance: Mapped[Decimal | None] = mapped_column(Numeric(19, 5), nullable=True)
    currency: Mapped[str | None] = mapped_column(String(3), nullable=True)
    additional_fields: Mapped[dict] = mapped_column(AdditionalFields, default=dict)
    customer_id: Mapped[str | None] = mapped_column(ForeignKey("customers.customer_id"), nullable=True)
    payment_info_reference_number: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    payment_info_id: Mapped[str | None] = mapped_column(
        ForeignKey("payment_infos.payment_info_id"), nullable=True, index=True
    )

    customer: Mapped[Customer | None] = relationship(lazy="joined")
    payment_info: Mapped[PaymentInfo | None] = relationship(back_populates="payment_response_items")
