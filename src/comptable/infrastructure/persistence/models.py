"""
SQLAlchemy models for Comptable persistence.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    DECIMAL,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all models."""


class AccountModel(Base):
    """Account database model - login identity and points balance."""

    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("current >= 0", name="ck_accounts_current_non_negative"),
        CheckConstraint("withdrawn >= 0", name="ck_accounts_withdrawn_non_negative"),
    )

    login: Mapped[str] = mapped_column(String(255), primary_key=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    current: Mapped[Decimal] = mapped_column(
        DECIMAL(18, 2), nullable=False, default=Decimal("0")
    )
    withdrawn: Mapped[Decimal] = mapped_column(
        DECIMAL(18, 2), nullable=False, default=Decimal("0")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    # Relationships
    orders: Mapped[list["OrderModel"]] = relationship(
        "OrderModel",
        back_populates="account",
        lazy="select",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    withdrawals: Mapped[list["WithdrawalModel"]] = relationship(
        "WithdrawalModel",
        back_populates="account",
        lazy="select",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class OrderModel(Base):
    """Order database model."""

    __tablename__ = "orders"
    __table_args__ = (
        Index("ix_orders_owner_uploaded_at", "owner", "uploaded_at"),
        Index("ix_orders_status", "status"),
    )

    number: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("accounts.login", ondelete="CASCADE"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    accrual: Mapped[Decimal | None] = mapped_column(DECIMAL(18, 2))
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    # Relationships
    account: Mapped["AccountModel"] = relationship(
        "AccountModel", back_populates="orders"
    )


class WithdrawalModel(Base):
    """Withdrawal database model."""

    __tablename__ = "withdrawals"
    __table_args__ = (
        Index("ix_withdrawals_owner_processed_at", "owner", "processed_at"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    owner: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("accounts.login", ondelete="CASCADE"),
        nullable=False,
    )
    order_number: Mapped[str] = mapped_column(String(64), nullable=False)
    amount: Mapped[Decimal] = mapped_column(DECIMAL(18, 2), nullable=False)
    processed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    # Relationships
    account: Mapped["AccountModel"] = relationship(
        "AccountModel", back_populates="withdrawals"
    )
