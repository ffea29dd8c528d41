"""Portfolio endpoints: cached snapshot, forced recalculation and metrics."""

from fastapi import APIRouter, Depends, Query

from cryptotax.api.deps import get_current_user, get_portfolio_calculator
from cryptotax.api.schemas import (
    PortfolioResponse,
    PortfolioEnvelope,
    PortfolioRecalculatedEnvelope,
    PortfolioMetricsResponse,
    PortfolioMetricsEnvelope,
)
from cryptotax.services import PortfolioCalculator

router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])


@router.get("", response_model=PortfolioEnvelope)
def get_portfolio(
    recalculate: bool = Query(False, description="Ignore the cached snapshot and recompute"),
    user_id: str = Depends(get_current_user),
    calculator: PortfolioCalculator = Depends(get_portfolio_calculator),
) -> PortfolioEnvelope:
    """Get the user's portfolio, served from the snapshot while it is fresh."""
    portfolio = calculator.get_portfolio(user_id, force_recalculate=recalculate)
    return PortfolioEnvelope(portfolio=PortfolioResponse.model_validate(portfolio))


@router.post("", response_model=PortfolioRecalculatedEnvelope)
def recalculate_portfolio(
    user_id: str = Depends(get_current_user),
    calculator: PortfolioCalculator = Depends(get_portfolio_calculator),
) -> PortfolioRecalculatedEnvelope:
    """Force a recalculation from the transaction store."""
    portfolio = calculator.calculate_user_portfolio(user_id)
    return PortfolioRecalculatedEnvelope(portfolio=PortfolioResponse.model_validate(portfolio))


@router.get("/metrics", response_model=PortfolioMetricsEnvelope)
def get_portfolio_metrics(
    user_id: str = Depends(get_current_user),
    calculator: PortfolioCalculator = Depends(get_portfolio_calculator),
) -> PortfolioMetricsEnvelope:
    """Best and worst performers and volatility across current holdings."""
    metrics = calculator.get_portfolio_metrics(user_id)
    return PortfolioMetricsEnvelope(metrics=PortfolioMetricsResponse.model_validate(metrics))
