"""Portfolio snapshot repository protocol."""

from typing import Protocol, Optional

from cryptotax.domain.models import UserPortfolio


class PortfolioRepository(Protocol):
    """Interface for cached portfolio snapshots."""

    def get(self, user_id: str) -> Optional[UserPortfolio]:
        """Get the stored snapshot for a user, if any."""
        ...

    def save(self, portfolio: UserPortfolio) -> UserPortfolio:
        """Replace the stored snapshot for ``portfolio.user_id``."""
        ...
