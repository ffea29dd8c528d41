"""Overview endpoint for the dashboard."""

from fastapi import APIRouter, Depends

from cryptotax.api.deps import get_current_user, get_overview_service
from cryptotax.api.schemas import OverviewResponse, OverviewEnvelope
from cryptotax.services import OverviewService

router = APIRouter(prefix="/api/overview", tags=["overview"])


@router.get("", response_model=OverviewEnvelope)
def get_overview(
    user_id: str = Depends(get_current_user),
    service: OverviewService = Depends(get_overview_service),
) -> OverviewEnvelope:
    """Portfolio, transaction summary, tax estimate and insights in one call."""
    overview = service.build_overview(user_id)
    return OverviewEnvelope(overview=OverviewResponse.model_validate(overview))
