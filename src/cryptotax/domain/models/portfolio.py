"""Derived portfolio models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Holding:
    """Aggregated position in one asset, derived from its transaction history."""

    symbol: str
    name: str
    amount: Decimal
    average_cost_basis: Decimal
    total_invested: Decimal
    current_price: Decimal = field(default_factory=lambda: Decimal("0"))
    current_value: Decimal = field(default_factory=lambda: Decimal("0"))
    gain_loss: Decimal = field(default_factory=lambda: Decimal("0"))
    gain_loss_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    allocation: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class UserPortfolio:
    """
    Snapshot of a user's portfolio.

    IMPORTANT: Never edit directly; always recompute from transactions.
    """

    user_id: str
    holdings: list[Holding] = field(default_factory=list)
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_invested: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gains: Decimal = field(default_factory=lambda: Decimal("0"))
    total_gains_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    last_updated: Optional[datetime] = None
