"""Tax calculation repository protocol."""

from typing import Protocol

from cryptotax.domain.models import TaxCalculation


class TaxCalculationRepository(Protocol):
    """Interface for saved tax calculations."""

    def save(self, calculation: TaxCalculation) -> TaxCalculation:
        """Persist a calculation; assigns ``id`` and ``created_at``."""
        ...
