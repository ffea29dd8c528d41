"""
Pytest configuration and fixtures for crypto tax API tests.

This module provides:
- In-memory SQLite database fixtures
- Factory helpers for transactions and bearer tokens
- Deterministic and failing price providers
- Time helpers for UTC timestamps
- Service and repository fixtures
"""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

import jwt
import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from cryptotax.main import app
from cryptotax.api.deps import get_market_data_service
from cryptotax.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from cryptotax.repositories.sqlalchemy import orm_models  # noqa: F401
from cryptotax.repositories.sqlalchemy import (
    SqlAlchemyTransactionRepository,
    SqlAlchemyPortfolioRepository,
    SqlAlchemyProcessingJobRepository,
    SqlAlchemyTaxCalculationRepository,
)
from cryptotax.services import (
    MarketDataService,
    PortfolioCalculator,
    OverviewService,
    TransactionService,
    UploadService,
)
from cryptotax.domain.models import Transaction, TransactionType, ExchangeType
from cryptotax.domain.views import CoinPrice
from cryptotax.core.exceptions import UpstreamError
from cryptotax.core.timezone import UTC
from cryptotax.config.settings import Settings, set_settings, reset_settings


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 12,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a UTC-aware datetime."""
    return UTC.localize(datetime(year, month, day, hour, minute, second))


class MutableClock:
    """Clock that tests can move forward."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return utc_datetime(2024, 6, 15, 14, 30, 0)


@pytest.fixture
def clock(fixed_now) -> MutableClock:
    """Provide a controllable clock starting at fixed_now."""
    return MutableClock(fixed_now)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def transaction_repo(test_session) -> SqlAlchemyTransactionRepository:
    """Provide test TransactionRepository."""
    return SqlAlchemyTransactionRepository(test_session)


@pytest.fixture
def portfolio_repo(test_session) -> SqlAlchemyPortfolioRepository:
    """Provide test PortfolioRepository."""
    return SqlAlchemyPortfolioRepository(test_session)


@pytest.fixture
def job_repo(test_session) -> SqlAlchemyProcessingJobRepository:
    """Provide test ProcessingJobRepository."""
    return SqlAlchemyProcessingJobRepository(test_session)


@pytest.fixture
def tax_repo(test_session) -> SqlAlchemyTaxCalculationRepository:
    """Provide test TaxCalculationRepository."""
    return SqlAlchemyTaxCalculationRepository(test_session)


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicPriceProvider:
    """
    Deterministic price provider for testing.

    Provides fixed prices with no randomness and counts calls.
    """

    FIXED_PRICES = {
        "BTC": (Decimal("50000"), Decimal("2.5")),
        "ETH": (Decimal("3000"), Decimal("-1.5")),
        "SOL": (Decimal("100"), Decimal("4.0")),
        "ADA": (Decimal("0.50"), Decimal("0.0")),
    }

    def __init__(self, as_of: Optional[datetime] = None):
        self._as_of = as_of or utc_datetime(2024, 6, 15, 14, 0, 0)
        self.calls: list[list[str]] = []

    def get_current_prices(self, symbols: list[str]) -> dict[str, CoinPrice]:
        """Return deterministic prices for requested symbols."""
        self.calls.append(list(symbols))
        result = {}
        for symbol in symbols:
            upper_symbol = symbol.upper()
            if upper_symbol in self.FIXED_PRICES:
                price, change = self.FIXED_PRICES[upper_symbol]
                result[upper_symbol] = CoinPrice(
                    symbol=upper_symbol,
                    price=price,
                    change_24h=change,
                    last_updated=self._as_of,
                )
        return result


class FailingPriceProvider:
    """Price provider that always raises an upstream error."""

    def __init__(self):
        self.calls = 0

    def get_current_prices(self, symbols: list[str]) -> dict[str, CoinPrice]:
        self.calls += 1
        raise UpstreamError("TestProvider", "Network unavailable")


@pytest.fixture
def deterministic_provider(fixed_now) -> DeterministicPriceProvider:
    """Provide deterministic price provider."""
    return DeterministicPriceProvider(as_of=fixed_now)


@pytest.fixture
def failing_provider() -> FailingPriceProvider:
    """Provide a price provider that always fails."""
    return FailingPriceProvider()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def market_data_service(deterministic_provider, clock) -> MarketDataService:
    """Provide test MarketDataService with deterministic provider."""
    return MarketDataService(
        provider=deterministic_provider,
        cache_ttl_seconds=60,
        clock=clock,
    )


@pytest.fixture
def portfolio_calculator(
    transaction_repo,
    portfolio_repo,
    tax_repo,
    market_data_service,
    clock,
) -> PortfolioCalculator:
    """Provide test PortfolioCalculator."""
    return PortfolioCalculator(
        transaction_repo=transaction_repo,
        portfolio_repo=portfolio_repo,
        market_data_service=market_data_service,
        tax_repo=tax_repo,
        cache_ttl_seconds=300,
        clock=clock,
    )


@pytest.fixture
def overview_service(transaction_repo, portfolio_calculator, clock) -> OverviewService:
    """Provide test OverviewService."""
    return OverviewService(
        transaction_repo=transaction_repo,
        portfolio_calculator=portfolio_calculator,
        tax_rate=Decimal("0.15"),
        clock=clock,
    )


@pytest.fixture
def transaction_service(transaction_repo) -> TransactionService:
    """Provide test TransactionService."""
    return TransactionService(transaction_repo=transaction_repo)


@pytest.fixture
def upload_service(job_repo, transaction_service, tmp_path, clock) -> UploadService:
    """Provide test UploadService writing into a temp directory."""
    return UploadService(
        job_repo=job_repo,
        transaction_service=transaction_service,
        upload_dir=tmp_path / "uploads",
        clock=clock,
    )


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


def make_transaction(
    txn_type: TransactionType,
    symbol: str,
    amount: Decimal,
    price: Decimal = Decimal("0"),
    timestamp: Optional[datetime] = None,
    fee: Decimal = Decimal("0"),
    total_value: Optional[Decimal] = None,
    user_id: str = "user-1",
    txn_id: Optional[str] = None,
) -> Transaction:
    """Build a Transaction without persisting it."""
    if total_value is None:
        total_value = abs(amount) * price
    return Transaction(
        id=txn_id or str(uuid.uuid4()),
        user_id=user_id,
        timestamp=timestamp or utc_datetime(2024, 1, 15),
        type=txn_type,
        symbol=symbol,
        amount=amount,
        price=price,
        fee=fee,
        total_value=total_value,
        exchange=ExchangeType.MANUAL,
        processed=True,
    )


@pytest.fixture
def transaction_factory(transaction_repo) -> Callable[..., Transaction]:
    """Factory for creating and persisting test transactions."""

    def _create_transaction(
        txn_type: TransactionType,
        symbol: str,
        amount: Decimal,
        price: Decimal = Decimal("0"),
        timestamp: Optional[datetime] = None,
        fee: Decimal = Decimal("0"),
        total_value: Optional[Decimal] = None,
        user_id: str = "user-1",
    ) -> Transaction:
        txn = make_transaction(
            txn_type=txn_type,
            symbol=symbol,
            amount=amount,
            price=price,
            timestamp=timestamp,
            fee=fee,
            total_value=total_value,
            user_id=user_id,
        )
        return transaction_repo.create(txn)

    return _create_transaction


# Signing key of the upstream identity provider, unknown to the API
ISSUER_SECRET = "identity-provider-signing-key-for-tests"
TEST_SECRET = "shared-hs256-secret-configured-for-tests"


def make_token(
    user_id: Optional[str] = "user-1",
    secret: Optional[str] = None,
    claim: str = "user_id",
    extra_claims: Optional[dict] = None,
) -> str:
    """
    Build an HS256 JWT for tests.

    Signed with ``secret`` when given, otherwise with the issuer's own key.
    """
    claims = dict(extra_claims or {})
    if user_id is not None:
        claims[claim] = user_id
    return jwt.encode(claims, secret or ISSUER_SECRET, algorithm="HS256")


def auth_headers(user_id: str = "user-1", secret: Optional[str] = None) -> dict[str, str]:
    """Authorization header for the given user."""
    return {"Authorization": f"Bearer {make_token(user_id, secret=secret)}"}


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    """Settings pointing data and uploads at a temp directory."""
    settings = Settings(
        data_dir=tmp_path,
        database_url="sqlite:///:memory:",
        upload_dir=tmp_path / "uploads",
        auth_token_secret=None,
    )
    set_settings(settings)
    reset_database()
    yield settings
    reset_database()
    reset_settings()


@pytest.fixture
def client(test_engine, api_settings, deterministic_provider) -> TestClient:
    """Provide FastAPI test client with test database and deterministic prices."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    market_data_service = MarketDataService(provider=deterministic_provider, cache_ttl_seconds=60)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_market_data_service] = lambda: market_data_service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def api_transaction_factory(test_engine) -> Callable[..., Transaction]:
    """Persist transactions into the engine the API client reads from."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def _create(*args, **kwargs) -> Transaction:
        session = TestSessionLocal()
        try:
            return SqlAlchemyTransactionRepository(session).create(make_transaction(*args, **kwargs))
        finally:
            session.close()

    return _create


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
