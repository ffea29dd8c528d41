"""Transaction service for reading and importing a user's transactions."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from cryptotax.core.exceptions import ValidationError
from cryptotax.core.timezone import to_utc
from cryptotax.domain.models import ExchangeType, Transaction, TransactionType
from cryptotax.repositories.protocols import TransactionRepository

logger = logging.getLogger(__name__)


@dataclass
class TransactionCreate:
    """Input data for importing a transaction."""

    timestamp: datetime
    type: TransactionType
    symbol: str
    amount: Decimal
    price: Decimal = Decimal("0")
    fee: Decimal = Decimal("0")
    total_value: Optional[Decimal] = None
    exchange: ExchangeType = ExchangeType.MANUAL
    fee_currency: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class ImportSummary:
    """Outcome of an import batch."""

    imported: int = 0
    duplicates: int = 0
    transaction_ids: list[str] = field(default_factory=list)
    duplicate_keys: list[str] = field(default_factory=list)


class TransactionService:
    """Reads the user's transaction list and imports parsed batches."""

    def __init__(self, transaction_repo: TransactionRepository):
        self._transaction_repo = transaction_repo

    def list_transactions(self, user_id: str, limit: Optional[int] = None) -> list[Transaction]:
        """Return the user's transactions, newest first."""
        if limit is not None and limit < 1:
            raise ValidationError("limit must be a positive integer")
        return self._transaction_repo.list_by_user(user_id, limit=limit)

    def import_transactions(self, user_id: str, items: list[TransactionCreate]) -> ImportSummary:
        """
        Store a batch for the user, skipping ones already in the store.

        Duplicates are matched on symbol, type, amount and timestamp, both
        against the store and within the batch itself.
        """
        candidates = [self._build(user_id, item) for item in items]
        if not candidates:
            return ImportSummary()

        existing = set(self._transaction_repo.find_duplicates(user_id, candidates))
        summary = ImportSummary()
        to_store: list[Transaction] = []
        for txn in candidates:
            key = txn.duplicate_key
            if key in existing:
                summary.duplicate_keys.append(key)
                continue
            existing.add(key)
            to_store.append(txn)

        if to_store:
            summary.transaction_ids = self._transaction_repo.create_many(to_store)
        summary.imported = len(summary.transaction_ids)
        summary.duplicates = len(summary.duplicate_keys)

        logger.info(
            "Imported %d transactions for %s, skipped %d duplicates",
            summary.imported,
            user_id,
            summary.duplicates,
        )
        return summary

    @staticmethod
    def _build(user_id: str, item: TransactionCreate) -> Transaction:
        if not item.symbol or not item.symbol.strip():
            raise ValidationError("Transaction symbol is required")
        if item.amount == Decimal("0"):
            raise ValidationError("Transaction amount must be non-zero")

        total_value = item.total_value
        if total_value is None:
            total_value = abs(item.amount) * item.price

        return Transaction(
            id=str(uuid.uuid4()),
            user_id=user_id,
            timestamp=to_utc(item.timestamp),
            type=item.type,
            symbol=item.symbol.strip().upper(),
            amount=item.amount,
            price=item.price,
            fee=item.fee,
            total_value=total_value,
            exchange=item.exchange,
            processed=True,
            fee_currency=item.fee_currency,
            notes=item.notes,
        )
