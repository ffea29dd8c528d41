"""Upload processing job model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from cryptotax.domain.models.enums import ProcessingStatus


@dataclass
class ProcessingJob:
    """
    Tracks an uploaded file through the ingestion pipeline.

    ``file_name`` is the stored name; ``original_name`` is what the user uploaded.
    """

    id: str
    user_id: str
    file_name: str
    original_name: str
    file_type: str
    status: ProcessingStatus = ProcessingStatus.PENDING
    progress: int = 0
    exchange_type: str = "auto"
    sheet_name: Optional[str] = None
    total_transactions: Optional[int] = None
    processed_transactions: Optional[int] = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if isinstance(self.status, str):
            self.status = ProcessingStatus(self.status)
