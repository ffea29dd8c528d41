"""SQLAlchemy ORM model definitions."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Boolean,
    Integer,
    Text,
    JSON,
    Numeric,
    Index,
    Enum as SqlEnum,
)

from cryptotax.core.timezone import now_utc, to_utc
from cryptotax.repositories.sqlalchemy.database import Base
from cryptotax.domain.models.enums import (
    TransactionType,
    ExchangeType,
    ProcessingStatus,
    AccountingMethod,
)


def to_db_datetime(dt: Optional[datetime]) -> Optional[datetime]:
    """Normalize to naive UTC for storage."""
    if dt is None:
        return None
    return to_utc(dt).replace(tzinfo=None)


def from_db_datetime(dt: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a stored naive datetime."""
    if dt is None:
        return None
    return to_utc(dt)


def _utcnow_naive() -> datetime:
    return now_utc().replace(tzinfo=None)


class TransactionORM(Base):
    """SQLAlchemy model for Transaction."""

    __tablename__ = "transactions"
    __table_args__ = (Index("ix_transactions_user_timestamp", "user_id", "timestamp"),)

    id = Column(String(36), primary_key=True)
    user_id = Column(String(128), nullable=False)
    timestamp = Column(DateTime, nullable=False)
    type = Column(SqlEnum(TransactionType), nullable=False)
    symbol = Column(String(20), nullable=False)
    amount = Column(Numeric(precision=28, scale=12), nullable=False)
    price = Column(Numeric(precision=28, scale=10), default=Decimal("0"))
    fee = Column(Numeric(precision=28, scale=10), default=Decimal("0"))
    fee_currency = Column(String(20), nullable=True)
    total_value = Column(Numeric(precision=28, scale=10), default=Decimal("0"))
    exchange = Column(SqlEnum(ExchangeType), nullable=False, default=ExchangeType.MANUAL)
    notes = Column(Text, nullable=True)
    processed = Column(Boolean, default=False)
    created_at = Column(DateTime, nullable=False, default=_utcnow_naive)
    updated_at = Column(DateTime, nullable=False, default=_utcnow_naive, onupdate=_utcnow_naive)


class PortfolioORM(Base):
    """SQLAlchemy model for the cached UserPortfolio snapshot."""

    __tablename__ = "portfolios"

    user_id = Column(String(128), primary_key=True)
    holdings = Column(JSON, nullable=False, default=list)
    total_value = Column(Numeric(precision=28, scale=10), default=Decimal("0"))
    total_invested = Column(Numeric(precision=28, scale=10), default=Decimal("0"))
    total_gains = Column(Numeric(precision=28, scale=10), default=Decimal("0"))
    total_gains_percent = Column(Numeric(precision=28, scale=10), default=Decimal("0"))
    last_updated = Column(DateTime, nullable=False)


class ProcessingJobORM(Base):
    """SQLAlchemy model for ProcessingJob."""

    __tablename__ = "processing_jobs"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(128), nullable=False, index=True)
    file_name = Column(String(512), nullable=False)
    original_name = Column(String(255), nullable=False)
    file_type = Column(String(255), nullable=False, default="")
    status = Column(SqlEnum(ProcessingStatus), nullable=False, default=ProcessingStatus.PENDING)
    progress = Column(Integer, nullable=False, default=0)
    exchange_type = Column(String(50), nullable=False, default="auto")
    sheet_name = Column(String(255), nullable=True)
    total_transactions = Column(Integer, nullable=True)
    processed_transactions = Column(Integer, nullable=True)
    errors = Column(JSON, nullable=False, default=list)
    warnings = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=_utcnow_naive)
    completed_at = Column(DateTime, nullable=True)


class TaxCalculationORM(Base):
    """SQLAlchemy model for TaxCalculation."""

    __tablename__ = "tax_calculations"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(128), nullable=False, index=True)
    tax_year = Column(Integer, nullable=False)
    method = Column(SqlEnum(AccountingMethod), nullable=False)
    short_term_gains = Column(Numeric(precision=28, scale=10), default=Decimal("0"))
    long_term_gains = Column(Numeric(precision=28, scale=10), default=Decimal("0"))
    total_gains = Column(Numeric(precision=28, scale=10), default=Decimal("0"))
    total_tax_liability = Column(Numeric(precision=28, scale=10), default=Decimal("0"))
    transactions = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=_utcnow_naive)
