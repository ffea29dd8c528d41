"""Repository protocol definitions (interfaces)."""

from cryptotax.repositories.protocols.transaction_repo import TransactionRepository
from cryptotax.repositories.protocols.portfolio_repo import PortfolioRepository
from cryptotax.repositories.protocols.job_repo import ProcessingJobRepository
from cryptotax.repositories.protocols.tax_repo import TaxCalculationRepository

__all__ = [
    "TransactionRepository",
    "PortfolioRepository",
    "ProcessingJobRepository",
    "TaxCalculationRepository",
]
