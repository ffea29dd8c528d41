"""Domain layer - pure business models with no external dependencies."""

from cryptotax.domain.models import (
    Transaction,
    Holding,
    UserPortfolio,
    ProcessingJob,
    TaxCalculation,
    TaxTransaction,
    TransactionType,
    ExchangeType,
    ProcessingStatus,
    AccountingMethod,
    TaxTerm,
)

__all__ = [
    "Transaction",
    "Holding",
    "UserPortfolio",
    "ProcessingJob",
    "TaxCalculation",
    "TaxTransaction",
    "TransactionType",
    "ExchangeType",
    "ProcessingStatus",
    "AccountingMethod",
    "TaxTerm",
]
