"""Pydantic schemas for the overview endpoint."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from cryptotax.api.schemas.portfolio import HoldingResponse
from cryptotax.api.schemas.transaction import TransactionResponse


class _FromAttributes(BaseModel):
    model_config = {"from_attributes": True}


class PortfolioSectionResponse(_FromAttributes):
    total_value: float
    total_invested: float
    unrealized_gains: float
    realized_gains: float
    total_gains: float
    gain_percentage: float
    holdings: list[HoldingResponse]
    holdings_count: int


class TransactionSummaryResponse(_FromAttributes):
    total: int
    this_year: int
    taxable_events: int
    by_type: dict[str, int]
    recent_transactions: list[TransactionResponse]


class TaxSummaryResponse(_FromAttributes):
    year: int
    estimated_liability: float
    realized_gains: float
    unrealized_gains: float
    total_gains: float
    taxable_events: int
    status: str


class PerformanceResponse(_FromAttributes):
    total_return: float
    total_return_percentage: float
    avg_transaction_value: float
    largest_transaction: float
    smallest_transaction: float


class MonthlyActivityResponse(_FromAttributes):
    """Activity in one month; ``month`` is labelled like "Mar 2024"."""

    month: str
    year: int
    month_number: int
    transactions: int
    value: float


class AssetDistributionResponse(_FromAttributes):
    symbol: str
    percentage: float
    value: float
    amount: float


class InsightsSummaryResponse(_FromAttributes):
    total_transactions: int
    total_value: float
    total_invested: float
    profit_loss: float
    profit_loss_percentage: float


class InsightsResponse(_FromAttributes):
    performance: PerformanceResponse
    monthly_activity: list[MonthlyActivityResponse]
    most_active_month: str
    asset_distribution: list[AssetDistributionResponse]
    summary: InsightsSummaryResponse


class OverviewResponse(_FromAttributes):
    """Dashboard overview computed per request."""

    portfolio: PortfolioSectionResponse
    transactions: TransactionSummaryResponse
    tax: TaxSummaryResponse
    insights: InsightsResponse
    last_updated: Optional[datetime] = None


class OverviewEnvelope(BaseModel):
    """Response for GET /api/overview."""

    success: bool = True
    overview: OverviewResponse
