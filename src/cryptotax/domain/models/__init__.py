"""Domain models package."""

from cryptotax.domain.models.enums import (
    TransactionType,
    ExchangeType,
    ProcessingStatus,
    AccountingMethod,
    TaxTerm,
    INCOME_TYPES,
    TAXABLE_TYPES,
)
from cryptotax.domain.models.transaction import Transaction
from cryptotax.domain.models.portfolio import Holding, UserPortfolio
from cryptotax.domain.models.job import ProcessingJob
from cryptotax.domain.models.tax import TaxCalculation, TaxTransaction

__all__ = [
    "TransactionType",
    "ExchangeType",
    "ProcessingStatus",
    "AccountingMethod",
    "TaxTerm",
    "INCOME_TYPES",
    "TAXABLE_TYPES",
    "Transaction",
    "Holding",
    "UserPortfolio",
    "ProcessingJob",
    "TaxCalculation",
    "TaxTransaction",
]
