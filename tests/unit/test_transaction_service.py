"""
Unit tests for TransactionService.

Tests cover:
- Listing newest first with a limit
- Importing batches with duplicate detection
- Input validation
"""

from decimal import Decimal

import pytest

from cryptotax.core.exceptions import ValidationError
from cryptotax.domain.models import TransactionType
from cryptotax.services import TransactionCreate

from tests.conftest import utc_datetime


def _buy(symbol: str = "BTC", amount: str = "1", price: str = "100", day: int = 1) -> TransactionCreate:
    return TransactionCreate(
        timestamp=utc_datetime(2024, 1, day),
        type=TransactionType.BUY,
        symbol=symbol,
        amount=Decimal(amount),
        price=Decimal(price),
    )


class TestListTransactions:
    """Tests for listing."""

    def test_newest_first_with_limit(self, transaction_service, transaction_factory):
        """
        GIVEN three transactions on different days
        WHEN I list with limit=2
        THEN the two newest are returned, newest first
        """
        for day in (1, 3, 2):
            transaction_factory(TransactionType.BUY, "BTC", Decimal("1"), Decimal("1"), utc_datetime(2024, 1, day))

        txns = transaction_service.list_transactions("user-1", limit=2)

        assert [t.timestamp.day for t in txns] == [3, 2]

    def test_other_users_transactions_excluded(self, transaction_service, transaction_factory):
        transaction_factory(TransactionType.BUY, "BTC", Decimal("1"), user_id="user-2")

        assert transaction_service.list_transactions("user-1") == []

    def test_non_positive_limit_rejected(self, transaction_service):
        with pytest.raises(ValidationError):
            transaction_service.list_transactions("user-1", limit=0)


class TestImportTransactions:
    """Tests for batch import."""

    def test_import_stores_normalized_transactions(self, transaction_service, transaction_repo):
        """
        GIVEN a batch with a lowercase symbol and no total value
        WHEN I import it
        THEN the symbol is upper-cased and total value is amount x price
        """
        summary = transaction_service.import_transactions("user-1", [_buy(symbol=" eth ", amount="2", price="1500")])

        assert summary.imported == 1
        stored = transaction_repo.get_by_id(summary.transaction_ids[0])
        assert stored.symbol == "ETH"
        assert stored.total_value == Decimal("3000")
        assert stored.processed is True

    def test_reimport_skips_duplicates(self, transaction_service):
        """
        GIVEN a batch already imported
        WHEN I import it again with one new row
        THEN only the new row is stored
        """
        transaction_service.import_transactions("user-1", [_buy(day=1), _buy(day=2)])

        summary = transaction_service.import_transactions("user-1", [_buy(day=1), _buy(day=2), _buy(day=3)])

        assert summary.imported == 1
        assert summary.duplicates == 2
        assert len(transaction_service.list_transactions("user-1")) == 3

    def test_duplicates_within_batch_skipped(self, transaction_service):
        summary = transaction_service.import_transactions("user-1", [_buy(), _buy()])

        assert summary.imported == 1
        assert summary.duplicates == 1

    def test_empty_batch(self, transaction_service):
        summary = transaction_service.import_transactions("user-1", [])

        assert summary.imported == 0
        assert summary.transaction_ids == []

    @pytest.mark.parametrize("item", [_buy(symbol=" "), _buy(amount="0")])
    def test_invalid_rows_rejected(self, transaction_service, item):
        with pytest.raises(ValidationError):
            transaction_service.import_transactions("user-1", [item])
