"""Tax liability endpoint."""

from fastapi import APIRouter, Depends, Path, Query

from cryptotax.api.deps import get_current_user, get_portfolio_calculator
from cryptotax.api.schemas import TaxCalculationResponse, TaxCalculationEnvelope
from cryptotax.domain.models import AccountingMethod
from cryptotax.services import PortfolioCalculator

router = APIRouter(prefix="/api/tax", tags=["tax"])


@router.get("/{year}", response_model=TaxCalculationEnvelope)
def get_tax_liability(
    year: int = Path(..., ge=2009, le=2100, description="Tax year"),
    method: AccountingMethod = Query(AccountingMethod.FIFO, description="Lot matching method"),
    user_id: str = Depends(get_current_user),
    calculator: PortfolioCalculator = Depends(get_portfolio_calculator),
) -> TaxCalculationEnvelope:
    """Match the year's disposals against acquisition lots and estimate tax."""
    calculation = calculator.calculate_tax_liability(user_id, year, method)
    return TaxCalculationEnvelope(calculation=TaxCalculationResponse.model_validate(calculation))
