"""Service layer - business logic orchestration."""

from cryptotax.services.market_data_service import MarketDataService
from cryptotax.services.portfolio_calculator import PortfolioCalculator
from cryptotax.services.overview_service import OverviewService
from cryptotax.services.transaction_service import (
    TransactionService,
    TransactionCreate,
    ImportSummary,
)
from cryptotax.services.upload_service import UploadService
from cryptotax.services.upload_validator import validate_file, FileValidationResult

__all__ = [
    "MarketDataService",
    "PortfolioCalculator",
    "OverviewService",
    "TransactionService",
    "TransactionCreate",
    "ImportSummary",
    "UploadService",
    "validate_file",
    "FileValidationResult",
]
