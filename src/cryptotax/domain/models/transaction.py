"""Transaction domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from cryptotax.core.timezone import to_utc
from cryptotax.domain.models.enums import TransactionType, ExchangeType


@dataclass(frozen=True)
class Transaction:
    """
    A single user transaction (source of truth).

    Created by the ingestion pipeline and read-only everywhere else.
    ``amount`` is in units of ``symbol``; ``price``, ``fee`` and
    ``total_value`` are in USD.
    """

    id: str
    user_id: str
    timestamp: datetime
    type: TransactionType
    symbol: str
    amount: Decimal
    price: Decimal = field(default_factory=lambda: Decimal("0"))
    fee: Decimal = field(default_factory=lambda: Decimal("0"))
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
    exchange: ExchangeType = ExchangeType.MANUAL
    processed: bool = False
    fee_currency: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        # frozen dataclass: coerce through object.__setattr__
        if isinstance(self.type, str) and not isinstance(self.type, TransactionType):
            object.__setattr__(self, "type", TransactionType(self.type))
        if isinstance(self.exchange, str) and not isinstance(self.exchange, ExchangeType):
            object.__setattr__(self, "exchange", ExchangeType(self.exchange))

    @property
    def duplicate_key(self) -> str:
        """Key used to detect re-imported transactions."""
        amount = format(self.amount.normalize(), "f")
        return f"{self.symbol.upper()} {self.type.value} {amount} on {to_utc(self.timestamp).isoformat()}"
