"""SQLAlchemy repository implementations."""

from cryptotax.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    reset_database,
    store_operation,
    Base,
)
from cryptotax.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from cryptotax.repositories.sqlalchemy.portfolio_repo import SqlAlchemyPortfolioRepository
from cryptotax.repositories.sqlalchemy.job_repo import SqlAlchemyProcessingJobRepository
from cryptotax.repositories.sqlalchemy.tax_repo import SqlAlchemyTaxCalculationRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "reset_database",
    "store_operation",
    "Base",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyPortfolioRepository",
    "SqlAlchemyProcessingJobRepository",
    "SqlAlchemyTaxCalculationRepository",
]
