"""Pydantic schemas for portfolio endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class HoldingResponse(BaseModel):
    """A single holding with current valuation."""

    model_config = {"from_attributes": True}

    symbol: str
    name: str
    amount: float
    average_cost_basis: float
    total_invested: float
    current_price: float
    current_value: float
    gain_loss: float
    gain_loss_percent: float
    allocation: float


class PortfolioResponse(BaseModel):
    """Portfolio snapshot: holdings sorted by value, plus totals."""

    model_config = {"from_attributes": True}

    user_id: str
    holdings: list[HoldingResponse]
    total_value: float
    total_invested: float
    total_gains: float
    total_gains_percent: float
    last_updated: Optional[datetime] = None


class PortfolioEnvelope(BaseModel):
    """Response for GET /api/portfolio."""

    success: bool = True
    portfolio: PortfolioResponse


class PortfolioRecalculatedEnvelope(BaseModel):
    """Response for POST /api/portfolio."""

    success: bool = True
    message: str = "Portfolio recalculated successfully"
    portfolio: PortfolioResponse


class PerformerResponse(BaseModel):
    model_config = {"from_attributes": True}

    symbol: str
    return_percent: float


class PortfolioMetricsResponse(BaseModel):
    """Return, best/worst performer and volatility across holdings."""

    model_config = {"from_attributes": True}

    total_return: float
    total_return_percent: float
    best_performer: Optional[PerformerResponse] = None
    worst_performer: Optional[PerformerResponse] = None
    volatility: float


class PortfolioMetricsEnvelope(BaseModel):
    """Response for GET /api/portfolio/metrics."""

    success: bool = True
    metrics: PortfolioMetricsResponse
