"""Pydantic schemas for upload endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from cryptotax.domain.models.enums import ExchangeType, ProcessingStatus, TransactionType


class UploadAcceptedResponse(BaseModel):
    """Response for an accepted upload (202)."""

    success: bool = True
    job_id: str
    message: str


class ProcessingJobResponse(BaseModel):
    """Response schema for a processing job."""

    model_config = {"from_attributes": True}

    id: str
    user_id: str
    file_name: str
    original_name: str
    file_type: str
    status: ProcessingStatus
    progress: int
    exchange_type: str
    sheet_name: Optional[str] = None
    total_transactions: Optional[int] = None
    processed_transactions: Optional[int] = None
    errors: list[str]
    warnings: list[str]
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class ProcessingJobEnvelope(BaseModel):
    """Response for GET /api/upload/transactions."""

    success: bool = True
    job: ProcessingJobResponse


class ParsedTransaction(BaseModel):
    """One transaction row produced by the ingestion pipeline."""

    timestamp: datetime
    type: TransactionType
    symbol: str = Field(..., min_length=1, max_length=20)
    amount: Decimal
    price: Decimal = Decimal("0")
    fee: Decimal = Decimal("0")
    total_value: Optional[Decimal] = None
    exchange: ExchangeType = ExchangeType.MANUAL
    fee_currency: Optional[str] = None
    notes: Optional[str] = None


class IngestionResultsRequest(BaseModel):
    """Parsed rows and diagnostics for one processing job."""

    transactions: list[ParsedTransaction] = Field(default_factory=list)
    total_rows: Optional[int] = Field(None, ge=0)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class IngestionSummary(BaseModel):
    """Counts reported once a job's rows are imported."""

    total_rows: int
    saved_transactions: int
    duplicates_skipped: int
    errors: int
    warnings: int


class IngestionResultsResponse(BaseModel):
    """Response for POST /api/upload/jobs/{job_id}/results."""

    success: bool = True
    job_id: str
    message: str = "File processed successfully"
    results: IngestionSummary
    job: ProcessingJobResponse
