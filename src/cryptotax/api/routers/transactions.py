"""Transaction listing endpoint."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from cryptotax.api.deps import get_current_user, get_transaction_service
from cryptotax.api.schemas import TransactionResponse, TransactionListResponse
from cryptotax.services import TransactionService

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of transactions"),
    user_id: str = Depends(get_current_user),
    service: TransactionService = Depends(get_transaction_service),
) -> TransactionListResponse:
    """List the user's transactions, newest first."""
    transactions = service.list_transactions(user_id, limit=limit)
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        count=len(transactions),
    )
