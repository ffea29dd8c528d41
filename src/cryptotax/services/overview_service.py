"""Overview service: tax estimate, activity and performance over a user's transactions."""

import logging
from collections import Counter
from datetime import datetime
from decimal import Decimal
from typing import Callable

from cryptotax.core.timezone import now_utc, to_reporting_tz
from cryptotax.domain.models import (
    TAXABLE_TYPES,
    Transaction,
    TransactionType,
    UserPortfolio,
)
from cryptotax.domain.views import (
    NO_ACTIVITY,
    AssetDistributionItem,
    Insights,
    InsightsSummary,
    MonthlyActivity,
    Overview,
    PerformanceMetrics,
    PortfolioSection,
    TaxSummary,
    TransactionSummary,
)
from cryptotax.repositories.protocols import TransactionRepository
from cryptotax.services.portfolio_calculator import PortfolioCalculator

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
MAX_MONTHLY_BUCKETS = 12
RECENT_TRANSACTIONS = 5

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def realized_gains(transactions: list[Transaction]) -> Decimal:
    """Sum of sale proceeds minus amount x price over sell transactions."""
    return sum(
        (t.total_value - t.amount * t.price for t in transactions if t.type == TransactionType.SELL),
        ZERO,
    )


def transactions_by_type(transactions: list[Transaction]) -> dict[str, int]:
    """Histogram of transaction counts keyed by type value."""
    return dict(Counter(t.type.value for t in transactions))


def monthly_activity(transactions: list[Transaction], tz_name: str = "UTC") -> list[MonthlyActivity]:
    """
    Bucket transactions by calendar month.

    Buckets are labelled "Mon YYYY", ordered oldest first and capped to the
    most recent twelve months that have activity.
    """
    buckets: dict[tuple[int, int], MonthlyActivity] = {}
    for txn in transactions:
        local = to_reporting_tz(txn.timestamp, tz_name)
        key = (local.year, local.month)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = MonthlyActivity(
                month=f"{MONTH_NAMES[local.month - 1][:3]} {local.year}",
                year=local.year,
                month_number=local.month,
            )
            buckets[key] = bucket
        bucket.transactions += 1
        bucket.value += txn.total_value

    ordered = [buckets[key] for key in sorted(buckets)]
    return ordered[-MAX_MONTHLY_BUCKETS:]


def most_active_month(transactions: list[Transaction], tz_name: str = "UTC") -> str:
    """Return the "Month YYYY" label with the most transactions, or N/A."""
    if not transactions:
        return NO_ACTIVITY

    counts: dict[str, int] = {}
    for txn in transactions:
        local = to_reporting_tz(txn.timestamp, tz_name)
        label = f"{MONTH_NAMES[local.month - 1]} {local.year}"
        counts[label] = counts.get(label, 0) + 1

    # max() keeps the first maximum, so ties go to the month seen first
    return max(counts, key=lambda label: counts[label])


def performance(transactions: list[Transaction], portfolio: UserPortfolio) -> PerformanceMetrics:
    total_return = portfolio.total_gains
    total_return_percentage = (
        total_return / portfolio.total_invested * HUNDRED if portfolio.total_invested > ZERO else ZERO
    )
    if not transactions:
        return PerformanceMetrics(
            total_return=total_return,
            total_return_percentage=total_return_percentage,
        )

    values = [t.total_value for t in transactions]
    return PerformanceMetrics(
        total_return=total_return,
        total_return_percentage=total_return_percentage,
        avg_transaction_value=sum(values, ZERO) / len(values),
        largest_transaction=max(values),
        smallest_transaction=min(values),
    )


def summarize(
    transactions: list[Transaction],
    portfolio: UserPortfolio,
    now: datetime,
    tax_rate: Decimal = Decimal("0.15"),
    tz_name: str = "UTC",
) -> Overview:
    """
    Build the overview from transactions (newest first) and a portfolio.

    Pure function of its inputs; an empty list yields zero-valued sections.
    """
    current_year = to_reporting_tz(now, tz_name).year
    taxable_events = sum(1 for t in transactions if t.type in TAXABLE_TYPES)

    realized = realized_gains(transactions)
    unrealized = portfolio.total_value - portfolio.total_invested
    total_gains = portfolio.total_gains
    # Only realized gains are taxed
    liability = max(ZERO, realized * tax_rate)

    perf = performance(transactions, portfolio)
    by_type = transactions_by_type(transactions)

    portfolio_section = PortfolioSection(
        total_value=portfolio.total_value,
        total_invested=portfolio.total_invested,
        unrealized_gains=unrealized,
        realized_gains=realized,
        total_gains=total_gains,
        gain_percentage=perf.total_return_percentage,
        holdings=list(portfolio.holdings),
        holdings_count=len(portfolio.holdings),
    )

    transaction_summary = TransactionSummary(
        total=len(transactions),
        this_year=sum(
            1 for t in transactions if to_reporting_tz(t.timestamp, tz_name).year == current_year
        ),
        taxable_events=taxable_events,
        by_type=by_type,
        recent_transactions=transactions[:RECENT_TRANSACTIONS],
    )

    tax = TaxSummary(
        year=current_year,
        estimated_liability=liability,
        realized_gains=realized,
        unrealized_gains=unrealized,
        total_gains=total_gains,
        taxable_events=taxable_events,
        status="Tax Due" if liability > ZERO else "No Tax Due",
    )

    distribution = [
        AssetDistributionItem(
            symbol=h.symbol,
            percentage=(
                h.current_value / portfolio.total_value * HUNDRED
                if portfolio.total_value > ZERO
                else ZERO
            ),
            value=h.current_value,
            amount=h.amount,
        )
        for h in portfolio.holdings
    ]

    insights = Insights(
        performance=perf,
        monthly_activity=monthly_activity(transactions, tz_name),
        most_active_month=most_active_month(transactions, tz_name),
        asset_distribution=distribution,
        summary=InsightsSummary(
            total_transactions=len(transactions),
            total_value=portfolio.total_value,
            total_invested=portfolio.total_invested,
            profit_loss=total_gains,
            profit_loss_percentage=perf.total_return_percentage,
        ),
    )

    return Overview(
        portfolio=portfolio_section,
        transactions=transaction_summary,
        tax=tax,
        insights=insights,
        last_updated=now,
    )


class OverviewService:
    """Service for the dashboard overview."""

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        portfolio_calculator: PortfolioCalculator,
        tax_rate: Decimal = Decimal("0.15"),
        reporting_timezone: str = "UTC",
        clock: Callable[[], datetime] = now_utc,
    ):
        self._transaction_repo = transaction_repo
        self._calculator = portfolio_calculator
        self._tax_rate = tax_rate
        self._tz_name = reporting_timezone
        self._clock = clock

    def build_overview(self, user_id: str) -> Overview:
        """Fetch transactions once, recompute the portfolio and summarize."""
        transactions = self._transaction_repo.list_by_user(user_id)
        portfolio = self._calculator.build_portfolio(user_id, transactions)
        overview = summarize(
            transactions,
            portfolio,
            now=self._clock(),
            tax_rate=self._tax_rate,
            tz_name=self._tz_name,
        )
        logger.info(
            "Overview for %s: %d transactions, realized=%s, liability=%s",
            user_id,
            len(transactions),
            overview.tax.realized_gains,
            overview.tax.estimated_liability,
        )
        return overview
