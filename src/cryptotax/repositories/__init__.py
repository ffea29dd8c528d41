"""Repository layer - data access abstractions and implementations."""

from cryptotax.repositories.protocols import (
    TransactionRepository,
    PortfolioRepository,
    ProcessingJobRepository,
    TaxCalculationRepository,
)

__all__ = [
    "TransactionRepository",
    "PortfolioRepository",
    "ProcessingJobRepository",
    "TaxCalculationRepository",
]
