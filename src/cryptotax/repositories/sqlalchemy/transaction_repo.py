"""SQLAlchemy implementation of TransactionRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from cryptotax.domain.models import Transaction
from cryptotax.repositories.sqlalchemy.database import store_operation
from cryptotax.repositories.sqlalchemy.orm_models import (
    TransactionORM,
    to_db_datetime,
    from_db_datetime,
)


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed transaction store."""

    def __init__(self, db: Session):
        self._db = db

    @store_operation("create_transaction")
    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        orm_txn = self._to_orm(transaction)
        self._db.add(orm_txn)
        self._db.commit()
        self._db.refresh(orm_txn)
        return self._to_domain(orm_txn)

    @store_operation("create_transactions")
    def create_many(self, transactions: list[Transaction]) -> list[str]:
        """Persist a batch of transactions in a single commit."""
        orm_txns = [self._to_orm(t) for t in transactions]
        self._db.add_all(orm_txns)
        self._db.commit()
        return [t.id for t in orm_txns]

    @store_operation("get_transaction")
    def get_by_id(self, transaction_id: str) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        orm_txn = self._db.query(TransactionORM).filter(
            TransactionORM.id == transaction_id
        ).first()
        return self._to_domain(orm_txn) if orm_txn else None

    @store_operation("list_user_transactions")
    def list_by_user(self, user_id: str, limit: Optional[int] = None) -> list[Transaction]:
        """List a user's transactions, newest first."""
        query = (
            self._db.query(TransactionORM)
            .filter(TransactionORM.user_id == user_id)
            .order_by(TransactionORM.timestamp.desc(), TransactionORM.id)
        )
        if limit:
            query = query.limit(limit)
        return [self._to_domain(t) for t in query.all()]

    @store_operation("find_duplicate_transactions")
    def find_duplicates(self, user_id: str, transactions: list[Transaction]) -> list[str]:
        """Return duplicate keys of candidates already stored for the user."""
        if not transactions:
            return []
        existing = {t.duplicate_key for t in self.list_by_user(user_id)}
        return [t.duplicate_key for t in transactions if t.duplicate_key in existing]

    @staticmethod
    def _to_orm(txn: Transaction) -> TransactionORM:
        """Convert domain model to ORM model."""
        orm_txn = TransactionORM(
            id=txn.id,
            user_id=txn.user_id,
            timestamp=to_db_datetime(txn.timestamp),
            type=txn.type,
            symbol=txn.symbol.upper(),
            amount=txn.amount,
            price=txn.price,
            fee=txn.fee,
            fee_currency=txn.fee_currency,
            total_value=txn.total_value,
            exchange=txn.exchange,
            notes=txn.notes,
            processed=txn.processed,
        )
        # Leave audit columns unset so their defaults apply
        if txn.created_at is not None:
            orm_txn.created_at = to_db_datetime(txn.created_at)
        if txn.updated_at is not None:
            orm_txn.updated_at = to_db_datetime(txn.updated_at)
        return orm_txn

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            id=orm.id,
            user_id=orm.user_id,
            timestamp=from_db_datetime(orm.timestamp),
            type=orm.type,
            symbol=orm.symbol,
            amount=Decimal(str(orm.amount)),
            price=Decimal(str(orm.price)) if orm.price is not None else Decimal("0"),
            fee=Decimal(str(orm.fee)) if orm.fee is not None else Decimal("0"),
            total_value=Decimal(str(orm.total_value)) if orm.total_value is not None else Decimal("0"),
            exchange=orm.exchange,
            processed=bool(orm.processed),
            fee_currency=orm.fee_currency,
            notes=orm.notes,
            created_at=from_db_datetime(orm.created_at),
            updated_at=from_db_datetime(orm.updated_at),
        )
