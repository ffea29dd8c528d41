"""Pydantic schemas for transaction endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from cryptotax.domain.models.enums import ExchangeType, TransactionType


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    model_config = {"from_attributes": True}

    id: str
    user_id: str
    timestamp: datetime
    type: TransactionType
    symbol: str
    amount: float
    price: float
    fee: float
    fee_currency: Optional[str] = None
    total_value: float
    exchange: ExchangeType
    notes: Optional[str] = None
    processed: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TransactionListResponse(BaseModel):
    """Response schema for listing transactions, newest first."""

    success: bool = True
    transactions: list[TransactionResponse]
    count: int
