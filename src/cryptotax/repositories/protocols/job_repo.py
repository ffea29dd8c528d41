"""Processing job repository protocol."""

from typing import Protocol, Optional

from cryptotax.domain.models import ProcessingJob


class ProcessingJobRepository(Protocol):
    """Interface for upload processing jobs."""

    def create(self, job: ProcessingJob) -> ProcessingJob:
        """Persist a new job."""
        ...

    def get_by_id(self, job_id: str) -> Optional[ProcessingJob]:
        """Retrieve job by ID."""
        ...

    def update(self, job: ProcessingJob) -> ProcessingJob:
        """Update an existing job."""
        ...
