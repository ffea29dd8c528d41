"""SQLAlchemy implementation of ProcessingJobRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from cryptotax.core.exceptions import NotFoundError
from cryptotax.domain.models import ProcessingJob
from cryptotax.repositories.sqlalchemy.database import store_operation
from cryptotax.repositories.sqlalchemy.orm_models import (
    ProcessingJobORM,
    to_db_datetime,
    from_db_datetime,
)


class SqlAlchemyProcessingJobRepository:
    """SQLAlchemy-backed processing job repository."""

    def __init__(self, db: Session):
        self._db = db

    @store_operation("create_processing_job")
    def create(self, job: ProcessingJob) -> ProcessingJob:
        """Persist a new job."""
        orm_job = ProcessingJobORM(
            id=job.id,
            user_id=job.user_id,
            file_name=job.file_name,
            original_name=job.original_name,
            file_type=job.file_type,
        )
        self._apply(orm_job, job)
        if job.created_at is not None:
            orm_job.created_at = to_db_datetime(job.created_at)
        self._db.add(orm_job)
        self._db.commit()
        self._db.refresh(orm_job)
        return self._to_domain(orm_job)

    @store_operation("get_processing_job")
    def get_by_id(self, job_id: str) -> Optional[ProcessingJob]:
        """Retrieve job by ID."""
        orm_job = self._db.query(ProcessingJobORM).filter(
            ProcessingJobORM.id == job_id
        ).first()
        return self._to_domain(orm_job) if orm_job else None

    @store_operation("update_processing_job")
    def update(self, job: ProcessingJob) -> ProcessingJob:
        """Update status, progress and results of an existing job."""
        orm_job = self._db.query(ProcessingJobORM).filter(
            ProcessingJobORM.id == job.id
        ).first()
        if not orm_job:
            raise NotFoundError("Processing job", job.id)
        self._apply(orm_job, job)
        self._db.commit()
        self._db.refresh(orm_job)
        return self._to_domain(orm_job)

    @staticmethod
    def _apply(orm: ProcessingJobORM, job: ProcessingJob) -> None:
        orm.status = job.status
        orm.progress = job.progress
        orm.exchange_type = job.exchange_type
        orm.sheet_name = job.sheet_name
        orm.total_transactions = job.total_transactions
        orm.processed_transactions = job.processed_transactions
        orm.errors = list(job.errors)
        orm.warnings = list(job.warnings)
        orm.completed_at = to_db_datetime(job.completed_at)

    @staticmethod
    def _to_domain(orm: ProcessingJobORM) -> ProcessingJob:
        """Convert ORM model to domain model."""
        return ProcessingJob(
            id=orm.id,
            user_id=orm.user_id,
            file_name=orm.file_name,
            original_name=orm.original_name,
            file_type=orm.file_type,
            status=orm.status,
            progress=orm.progress,
            exchange_type=orm.exchange_type,
            sheet_name=orm.sheet_name,
            total_transactions=orm.total_transactions,
            processed_transactions=orm.processed_transactions,
            errors=list(orm.errors or []),
            warnings=list(orm.warnings or []),
            created_at=from_db_datetime(orm.created_at),
            completed_at=from_db_datetime(orm.completed_at),
        )
