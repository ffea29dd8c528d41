"""View models for service outputs."""

from cryptotax.domain.views.prices import CoinPrice
from cryptotax.domain.views.overview import (
    NO_ACTIVITY,
    MonthlyActivity,
    PerformanceMetrics,
    AssetDistributionItem,
    PortfolioSection,
    TransactionSummary,
    TaxSummary,
    InsightsSummary,
    Insights,
    Overview,
    PerformerView,
    PortfolioMetrics,
)

__all__ = [
    "CoinPrice",
    "NO_ACTIVITY",
    "MonthlyActivity",
    "PerformanceMetrics",
    "AssetDistributionItem",
    "PortfolioSection",
    "TransactionSummary",
    "TaxSummary",
    "InsightsSummary",
    "Insights",
    "Overview",
    "PerformerView",
    "PortfolioMetrics",
]
