"""SQLAlchemy implementation of PortfolioRepository."""

from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.orm import Session

from cryptotax.domain.models import Holding, UserPortfolio
from cryptotax.repositories.sqlalchemy.database import store_operation
from cryptotax.repositories.sqlalchemy.orm_models import (
    PortfolioORM,
    to_db_datetime,
    from_db_datetime,
)

_HOLDING_DECIMAL_FIELDS = (
    "amount",
    "average_cost_basis",
    "total_invested",
    "current_price",
    "current_value",
    "gain_loss",
    "gain_loss_percent",
    "allocation",
)


class SqlAlchemyPortfolioRepository:
    """SQLAlchemy-backed store for portfolio snapshots."""

    def __init__(self, db: Session):
        self._db = db

    @store_operation("get_portfolio")
    def get(self, user_id: str) -> Optional[UserPortfolio]:
        """Get the stored snapshot for a user, if any."""
        orm_portfolio = self._db.query(PortfolioORM).filter(
            PortfolioORM.user_id == user_id
        ).first()
        return self._to_domain(orm_portfolio) if orm_portfolio else None

    @store_operation("save_portfolio")
    def save(self, portfolio: UserPortfolio) -> UserPortfolio:
        """Insert or replace the snapshot for a user."""
        orm_portfolio = self._db.query(PortfolioORM).filter(
            PortfolioORM.user_id == portfolio.user_id
        ).first()
        if orm_portfolio is None:
            orm_portfolio = PortfolioORM(user_id=portfolio.user_id)
            self._db.add(orm_portfolio)

        orm_portfolio.holdings = [self._holding_to_json(h) for h in portfolio.holdings]
        orm_portfolio.total_value = portfolio.total_value
        orm_portfolio.total_invested = portfolio.total_invested
        orm_portfolio.total_gains = portfolio.total_gains
        orm_portfolio.total_gains_percent = portfolio.total_gains_percent
        orm_portfolio.last_updated = to_db_datetime(portfolio.last_updated)

        self._db.commit()
        self._db.refresh(orm_portfolio)
        return self._to_domain(orm_portfolio)

    @staticmethod
    def _holding_to_json(holding: Holding) -> dict[str, Any]:
        data: dict[str, Any] = {"symbol": holding.symbol, "name": holding.name}
        for name in _HOLDING_DECIMAL_FIELDS:
            data[name] = str(getattr(holding, name))
        return data

    @staticmethod
    def _holding_from_json(data: dict[str, Any]) -> Holding:
        values = {name: Decimal(data.get(name, "0")) for name in _HOLDING_DECIMAL_FIELDS}
        return Holding(symbol=data["symbol"], name=data.get("name", data["symbol"]), **values)

    @classmethod
    def _to_domain(cls, orm: PortfolioORM) -> UserPortfolio:
        """Convert ORM model to domain model."""
        return UserPortfolio(
            user_id=orm.user_id,
            holdings=[cls._holding_from_json(h) for h in orm.holdings or []],
            total_value=Decimal(str(orm.total_value or 0)),
            total_invested=Decimal(str(orm.total_invested or 0)),
            total_gains=Decimal(str(orm.total_gains or 0)),
            total_gains_percent=Decimal(str(orm.total_gains_percent or 0)),
            last_updated=from_db_datetime(orm.last_updated),
        )
