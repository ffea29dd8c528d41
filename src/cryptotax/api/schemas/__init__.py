"""Pydantic schemas for API request/response."""

from pydantic import BaseModel

from cryptotax.api.schemas.portfolio import (
    HoldingResponse,
    PortfolioResponse,
    PortfolioEnvelope,
    PortfolioRecalculatedEnvelope,
    PerformerResponse,
    PortfolioMetricsResponse,
    PortfolioMetricsEnvelope,
)
from cryptotax.api.schemas.transaction import (
    TransactionResponse,
    TransactionListResponse,
)
from cryptotax.api.schemas.overview import (
    OverviewResponse,
    OverviewEnvelope,
)
from cryptotax.api.schemas.upload import (
    UploadAcceptedResponse,
    ProcessingJobResponse,
    ProcessingJobEnvelope,
    ParsedTransaction,
    IngestionResultsRequest,
    IngestionSummary,
    IngestionResultsResponse,
)
from cryptotax.api.schemas.tax import (
    TaxTransactionResponse,
    TaxCalculationResponse,
    TaxCalculationEnvelope,
)


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str
    details: str


__all__ = [
    "HoldingResponse",
    "PortfolioResponse",
    "PortfolioEnvelope",
    "PortfolioRecalculatedEnvelope",
    "PerformerResponse",
    "PortfolioMetricsResponse",
    "PortfolioMetricsEnvelope",
    "TransactionResponse",
    "TransactionListResponse",
    "OverviewResponse",
    "OverviewEnvelope",
    "UploadAcceptedResponse",
    "ProcessingJobResponse",
    "ProcessingJobEnvelope",
    "ParsedTransaction",
    "IngestionResultsRequest",
    "IngestionSummary",
    "IngestionResultsResponse",
    "TaxTransactionResponse",
    "TaxCalculationResponse",
    "TaxCalculationEnvelope",
    "ErrorResponse",
]
