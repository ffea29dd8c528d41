"""Dependency injection for FastAPI."""

from decimal import Decimal
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from cryptotax.config.settings import get_settings
from cryptotax.core.auth import authenticate
from cryptotax.repositories.sqlalchemy.database import get_db
from cryptotax.repositories.sqlalchemy import (
    SqlAlchemyTransactionRepository,
    SqlAlchemyPortfolioRepository,
    SqlAlchemyProcessingJobRepository,
    SqlAlchemyTaxCalculationRepository,
)
from cryptotax.providers import CoinGeckoPriceProvider, PriceProvider, StubPriceProvider
from cryptotax.services import (
    MarketDataService,
    PortfolioCalculator,
    OverviewService,
    TransactionService,
    UploadService,
)

# Shared across requests so the price cache survives between calls
_market_data_service: Optional[MarketDataService] = None


def get_current_user(authorization: Optional[str] = Header(default=None)) -> str:
    """Resolve the user id from the bearer token."""
    return authenticate(authorization, secret=get_settings().auth_token_secret)


def get_transaction_repo(db: Session = Depends(get_db)) -> SqlAlchemyTransactionRepository:
    """Provide TransactionRepository instance."""
    return SqlAlchemyTransactionRepository(db)


def get_portfolio_repo(db: Session = Depends(get_db)) -> SqlAlchemyPortfolioRepository:
    """Provide PortfolioRepository instance."""
    return SqlAlchemyPortfolioRepository(db)


def get_job_repo(db: Session = Depends(get_db)) -> SqlAlchemyProcessingJobRepository:
    """Provide ProcessingJobRepository instance."""
    return SqlAlchemyProcessingJobRepository(db)


def get_tax_repo(db: Session = Depends(get_db)) -> SqlAlchemyTaxCalculationRepository:
    """Provide TaxCalculationRepository instance."""
    return SqlAlchemyTaxCalculationRepository(db)


def get_price_provider() -> PriceProvider:
    """Provide the configured price provider (stub for offline operation)."""
    settings = get_settings()
    if settings.price_provider == "coingecko":
        return CoinGeckoPriceProvider(
            base_url=settings.coingecko_base_url,
            timeout_seconds=settings.coingecko_timeout_seconds,
        )
    return StubPriceProvider()


def get_market_data_service() -> MarketDataService:
    """Provide the process-wide MarketDataService instance."""
    global _market_data_service
    if _market_data_service is None:
        _market_data_service = MarketDataService(
            provider=get_price_provider(),
            cache_ttl_seconds=get_settings().market_data_cache_ttl_seconds,
        )
    return _market_data_service


def reset_market_data_service() -> None:
    """Drop the shared MarketDataService (for reconfiguration)."""
    global _market_data_service
    _market_data_service = None


def get_portfolio_calculator(
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
    portfolio_repo: SqlAlchemyPortfolioRepository = Depends(get_portfolio_repo),
    tax_repo: SqlAlchemyTaxCalculationRepository = Depends(get_tax_repo),
    market_data_service: MarketDataService = Depends(get_market_data_service),
) -> PortfolioCalculator:
    """Provide PortfolioCalculator instance."""
    settings = get_settings()
    return PortfolioCalculator(
        transaction_repo=transaction_repo,
        portfolio_repo=portfolio_repo,
        market_data_service=market_data_service,
        tax_repo=tax_repo,
        cache_ttl_seconds=settings.portfolio_cache_ttl_seconds,
        reporting_timezone=settings.reporting_timezone,
    )


def get_overview_service(
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
    portfolio_calculator: PortfolioCalculator = Depends(get_portfolio_calculator),
) -> OverviewService:
    """Provide OverviewService instance."""
    settings = get_settings()
    return OverviewService(
        transaction_repo=transaction_repo,
        portfolio_calculator=portfolio_calculator,
        tax_rate=Decimal(str(settings.overview_tax_rate)),
        reporting_timezone=settings.reporting_timezone,
    )


def get_transaction_service(
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
) -> TransactionService:
    """Provide TransactionService instance."""
    return TransactionService(transaction_repo=transaction_repo)


def get_upload_service(
    job_repo: SqlAlchemyProcessingJobRepository = Depends(get_job_repo),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> UploadService:
    """Provide UploadService instance."""
    return UploadService(
        job_repo=job_repo,
        transaction_service=transaction_service,
        upload_dir=get_settings().get_upload_dir(),
    )
