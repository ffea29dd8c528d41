"""Tax calculation models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from cryptotax.domain.models.enums import AccountingMethod, TaxTerm, TransactionType


@dataclass
class TaxTransaction:
    """One disposal matched against one acquisition lot."""

    transaction_id: str
    symbol: str
    type: TransactionType
    date: datetime
    amount: Decimal
    cost_basis: Decimal
    sale_price: Decimal
    gain_loss: Decimal
    holding_period_days: int
    tax_type: TaxTerm


@dataclass
class TaxCalculation:
    """Realized gains and estimated liability for one tax year."""

    user_id: str
    tax_year: int
    method: AccountingMethod
    short_term_gains: Decimal = field(default_factory=lambda: Decimal("0"))
    long_term_gains: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gains: Decimal = field(default_factory=lambda: Decimal("0"))
    total_tax_liability: Decimal = field(default_factory=lambda: Decimal("0"))
    transactions: list[TaxTransaction] = field(default_factory=list)
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if isinstance(self.method, str):
            self.method = AccountingMethod(self.method)
