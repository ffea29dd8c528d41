"""API routers package."""

from cryptotax.api.routers.portfolio import router as portfolio_router
from cryptotax.api.routers.overview import router as overview_router
from cryptotax.api.routers.transactions import router as transactions_router
from cryptotax.api.routers.upload import router as upload_router
from cryptotax.api.routers.tax import router as tax_router

__all__ = [
    "portfolio_router",
    "overview_router",
    "transactions_router",
    "upload_router",
    "tax_router",
]
