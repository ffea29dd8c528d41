"""Pydantic schemas for tax endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from cryptotax.domain.models.enums import AccountingMethod, TaxTerm, TransactionType


class TaxTransactionResponse(BaseModel):
    """One disposal slice matched against an acquisition lot."""

    model_config = {"from_attributes": True}

    transaction_id: str
    symbol: str
    type: TransactionType
    date: datetime
    amount: float
    cost_basis: float
    sale_price: float
    gain_loss: float
    holding_period_days: int
    tax_type: TaxTerm


class TaxCalculationResponse(BaseModel):
    """Realized gains by term and the estimated liability."""

    model_config = {"from_attributes": True}

    id: Optional[str] = None
    user_id: str
    tax_year: int
    method: AccountingMethod
    short_term_gains: float
    long_term_gains: float
    total_gains: float
    total_tax_liability: float
    transactions: list[TaxTransactionResponse]
    created_at: Optional[datetime] = None


class TaxCalculationEnvelope(BaseModel):
    """Response for GET /api/tax/{year}."""

    success: bool = True
    calculation: TaxCalculationResponse
