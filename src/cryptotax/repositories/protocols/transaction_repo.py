"""Transaction repository protocol."""

from typing import Protocol, Optional

from cryptotax.domain.models import Transaction


class TransactionRepository(Protocol):
    """Interface for transaction store access."""

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        ...

    def create_many(self, transactions: list[Transaction]) -> list[str]:
        """Persist a batch of transactions atomically; returns their ids."""
        ...

    def get_by_id(self, transaction_id: str) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        ...

    def list_by_user(self, user_id: str, limit: Optional[int] = None) -> list[Transaction]:
        """List a user's transactions, newest first."""
        ...

    def find_duplicates(self, user_id: str, transactions: list[Transaction]) -> list[str]:
        """Return duplicate keys of candidates that already exist for the user."""
        ...
