"""View models for the overview dashboard and portfolio metrics."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from cryptotax.domain.models import Holding, Transaction

NO_ACTIVITY = "N/A"


@dataclass
class MonthlyActivity:
    """Transaction count and value for one calendar month."""

    month: str
    year: int
    month_number: int
    transactions: int = 0
    value: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class PerformanceMetrics:
    """Return and transaction-size statistics."""

    total_return: Decimal = field(default_factory=lambda: Decimal("0"))
    total_return_percentage: Decimal = field(default_factory=lambda: Decimal("0"))
    avg_transaction_value: Decimal = field(default_factory=lambda: Decimal("0"))
    largest_transaction: Decimal = field(default_factory=lambda: Decimal("0"))
    smallest_transaction: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class AssetDistributionItem:
    """Share of portfolio value held in one asset."""

    symbol: str
    percentage: Decimal
    value: Decimal
    amount: Decimal


@dataclass
class PortfolioSection:
    """Portfolio totals and holdings as shown on the overview."""

    total_value: Decimal
    total_invested: Decimal
    unrealized_gains: Decimal
    realized_gains: Decimal
    total_gains: Decimal
    gain_percentage: Decimal
    holdings: list[Holding] = field(default_factory=list)
    holdings_count: int = 0


@dataclass
class TransactionSummary:
    """Counts over the user's transactions."""

    total: int = 0
    this_year: int = 0
    taxable_events: int = 0
    by_type: dict[str, int] = field(default_factory=dict)
    recent_transactions: list[Transaction] = field(default_factory=list)


@dataclass
class TaxSummary:
    """Flat-rate tax estimate on realized gains."""

    year: int
    estimated_liability: Decimal
    realized_gains: Decimal
    unrealized_gains: Decimal
    total_gains: Decimal
    taxable_events: int
    status: str


@dataclass
class InsightsSummary:
    """Headline numbers for the insights panel."""

    total_transactions: int
    total_value: Decimal
    total_invested: Decimal
    profit_loss: Decimal
    profit_loss_percentage: Decimal


@dataclass
class Insights:
    """Derived insights over transactions and holdings."""

    performance: PerformanceMetrics
    monthly_activity: list[MonthlyActivity]
    most_active_month: str
    asset_distribution: list[AssetDistributionItem]
    summary: InsightsSummary


@dataclass
class Overview:
    """Read-only composite view; computed per request, never persisted."""

    portfolio: PortfolioSection
    transactions: TransactionSummary
    tax: TaxSummary
    insights: Insights
    last_updated: datetime


@dataclass
class PerformerView:
    """Holding with the best or worst gain percentage."""

    symbol: str
    return_percent: Decimal


@dataclass
class PortfolioMetrics:
    """Summary statistics over current holdings."""

    total_return: Decimal = field(default_factory=lambda: Decimal("0"))
    total_return_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    best_performer: Optional[PerformerView] = None
    worst_performer: Optional[PerformerView] = None
    volatility: Decimal = field(default_factory=lambda: Decimal("0"))
