"""SQLAlchemy ORM models for ledger events."""

from decimal import Decimal

from sqlalchemy import BigInteger, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class RemittanceEventModel(Base):
    """Persisted remittance ledger event."""

    __tablename__ = "remittance_events"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    worker_id: Mapped[str] = mapped_column(String(255), nullable=False)
    receiver_id: Mapped[str] = mapped_column(String(255), nullable=False)
    corridor: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(20, 8), nullable=False)
    fee: Mapped[Decimal] = mapped_column(Numeric(20, 8), nullable=False)
    net_amount: Mapped[Decimal] = mapped_column(Numeric(20, 8), nullable=False)
    currency: Mapped[str] = mapped_column(String(16), nullable=False)
    transaction_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    topic: Mapped[str] = mapped_column(String(64), nullable=False)

    __table_args__ = (
        Index("ix_remittance_events_worker_ts", "worker_id", "timestamp"),
    )


class LoanDisbursementEventModel(Base):
    """Persisted loan disbursement ledger event."""

    __tablename__ = "loan_disbursement_events"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    worker_id: Mapped[str] = mapped_column(String(255), nullable=False)
    credit_agent_id: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(20, 8), nullable=False)
    interest_rate: Mapped[Decimal] = mapped_column(Numeric(10, 6), nullable=False)
    tenure_months: Mapped[int] = mapped_column(Integer, nullable=False)
    funding_account: Mapped[str] = mapped_column(String(255), nullable=False)
    transaction_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    corridor: Mapped[str] = mapped_column(String(100), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_loan_disbursement_events_worker_ts", "worker_id", "timestamp"),
    )
