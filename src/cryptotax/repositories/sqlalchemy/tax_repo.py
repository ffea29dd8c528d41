"""SQLAlchemy implementation of TaxCalculationRepository."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from cryptotax.core.timezone import now_utc
from cryptotax.domain.models import TaxCalculation, TaxTerm, TaxTransaction, TransactionType
from cryptotax.repositories.sqlalchemy.database import store_operation
from cryptotax.repositories.sqlalchemy.orm_models import (
    TaxCalculationORM,
    to_db_datetime,
    from_db_datetime,
)


class SqlAlchemyTaxCalculationRepository:
    """SQLAlchemy-backed store for tax calculations."""

    def __init__(self, db: Session):
        self._db = db

    @store_operation("save_tax_calculation")
    def save(self, calculation: TaxCalculation) -> TaxCalculation:
        """Persist a calculation as a new record."""
        orm_calc = TaxCalculationORM(
            id=calculation.id or str(uuid.uuid4()),
            user_id=calculation.user_id,
            tax_year=calculation.tax_year,
            method=calculation.method,
            short_term_gains=calculation.short_term_gains,
            long_term_gains=calculation.long_term_gains,
            total_gains=calculation.total_gains,
            total_tax_liability=calculation.total_tax_liability,
            transactions=[self._tax_txn_to_json(t) for t in calculation.transactions],
            created_at=to_db_datetime(calculation.created_at or now_utc()),
        )
        self._db.add(orm_calc)
        self._db.commit()
        self._db.refresh(orm_calc)
        return self._to_domain(orm_calc)

    @staticmethod
    def _tax_txn_to_json(txn: TaxTransaction) -> dict[str, Any]:
        return {
            "transaction_id": txn.transaction_id,
            "symbol": txn.symbol,
            "type": txn.type.value,
            "date": txn.date.isoformat(),
            "amount": str(txn.amount),
            "cost_basis": str(txn.cost_basis),
            "sale_price": str(txn.sale_price),
            "gain_loss": str(txn.gain_loss),
            "holding_period_days": txn.holding_period_days,
            "tax_type": txn.tax_type.value,
        }

    @staticmethod
    def _tax_txn_from_json(data: dict[str, Any]) -> TaxTransaction:
        return TaxTransaction(
            transaction_id=data["transaction_id"],
            symbol=data["symbol"],
            type=TransactionType(data["type"]),
            date=datetime.fromisoformat(data["date"]),
            amount=Decimal(data["amount"]),
            cost_basis=Decimal(data["cost_basis"]),
            sale_price=Decimal(data["sale_price"]),
            gain_loss=Decimal(data["gain_loss"]),
            holding_period_days=int(data["holding_period_days"]),
            tax_type=TaxTerm(data["tax_type"]),
        )

    @classmethod
    def _to_domain(cls, orm: TaxCalculationORM) -> TaxCalculation:
        """Convert ORM model to domain model."""
        return TaxCalculation(
            id=orm.id,
            user_id=orm.user_id,
            tax_year=orm.tax_year,
            method=orm.method,
            short_term_gains=Decimal(str(orm.short_term_gains or 0)),
            long_term_gains=Decimal(str(orm.long_term_gains or 0)),
            total_gains=Decimal(str(orm.total_gains or 0)),
            total_tax_liability=Decimal(str(orm.total_tax_liability or 0)),
            transactions=[cls._tax_txn_from_json(t) for t in orm.transactions or []],
            created_at=from_db_datetime(orm.created_at),
        )
