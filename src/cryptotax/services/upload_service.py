"""Upload service: accepts transaction files and tracks their processing jobs."""

import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Callable, Optional

from cryptotax.core.exceptions import AppError, NotFoundError, ValidationError
from cryptotax.core.timezone import now_utc
from cryptotax.domain.models import ProcessingJob, ProcessingStatus
from cryptotax.repositories.protocols import ProcessingJobRepository
from cryptotax.services.transaction_service import (
    ImportSummary,
    TransactionCreate,
    TransactionService,
)
from cryptotax.services.upload_validator import FileTypeSpec, size_limit_error, validate_file

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024

FINISHED_STATUSES = frozenset(
    {ProcessingStatus.COMPLETED, ProcessingStatus.FAILED, ProcessingStatus.CANCELLED}
)


class UploadService:
    """
    Validates uploaded files, stores them and queues a pending job.

    Parsing is left to the ingestion pipeline that picks up pending jobs.
    The pipeline reports parsed rows back through ``record_results``, which
    imports them and closes the job.
    """

    def __init__(
        self,
        job_repo: ProcessingJobRepository,
        transaction_service: TransactionService,
        upload_dir: Path,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._job_repo = job_repo
        self._transaction_service = transaction_service
        self._upload_dir = Path(upload_dir)
        self._clock = clock

    def accept_upload(
        self,
        user_id: str,
        filename: Optional[str],
        content_type: Optional[str],
        stream: BinaryIO,
        size: Optional[int] = None,
        exchange_type: str = "auto",
        sheet_name: Optional[str] = None,
    ) -> ProcessingJob:
        """
        Validate and store an uploaded file, then create a pending job.

        When ``size`` is known an oversize file is rejected before anything
        is read. Otherwise the stream is copied in chunks and the copy is
        abandoned as soon as it passes the type's ceiling.

        Raises:
            ValidationError: if no file was given or the file is rejected
        """
        if not filename:
            raise ValidationError("No file provided")

        # Drop any client-supplied directory components
        original_name = Path(filename).name
        validation = validate_file(original_name, size or 0, content_type)
        if not validation.is_valid:
            raise ValidationError(validation.error or "File validation failed")

        now = self._clock()
        job_id = str(uuid.uuid4())
        stored_name = f"{int(now.timestamp() * 1000)}-{job_id}-{original_name}"
        target = self._upload_dir / stored_name
        self._upload_dir.mkdir(parents=True, exist_ok=True)
        written = self._store(stream, target, validation.file_type)

        job = ProcessingJob(
            id=job_id,
            user_id=user_id,
            file_name=stored_name,
            original_name=original_name,
            file_type=validation.file_type.extension,
            status=ProcessingStatus.PENDING,
            exchange_type=exchange_type or "auto",
            sheet_name=sheet_name or None,
            created_at=now,
        )
        try:
            job = self._job_repo.create(job)
        except Exception:
            target.unlink(missing_ok=True)
            logger.warning("Removed %s after job creation failed", stored_name)
            raise

        logger.info(
            "Queued upload %s for %s as job %s (%d bytes)",
            original_name,
            user_id,
            job.id,
            written,
        )
        return job

    def get_job(self, user_id: str, job_id: str) -> ProcessingJob:
        """Get a job owned by the user; other users' jobs are reported as missing."""
        job = self._job_repo.get_by_id(job_id)
        if job is None or job.user_id != user_id:
            raise NotFoundError("Processing job", job_id)
        return job

    def record_results(
        self,
        user_id: str,
        job_id: str,
        items: list[TransactionCreate],
        total_rows: Optional[int] = None,
        errors: Optional[list[str]] = None,
        warnings: Optional[list[str]] = None,
    ) -> tuple[ProcessingJob, ImportSummary]:
        """
        Import the rows parsed from a job's file and close the job.

        Rows already in the store are skipped. The job is marked failed when
        no rows were parsed or the import is rejected, and completed otherwise.

        Raises:
            NotFoundError: if the job does not exist or belongs to another user
            ValidationError: if the job is already finished or has no rows
        """
        job = self.get_job(user_id, job_id)
        if job.status in FINISHED_STATUSES:
            raise ValidationError(f"Processing job {job_id} is already {job.status.value}")

        job.total_transactions = total_rows if total_rows is not None else len(items)
        job.errors = list(errors or [])
        job.warnings = list(warnings or [])

        if not items:
            self._finish(job, ProcessingStatus.FAILED)
            raise ValidationError("File processing failed - no valid transactions found")

        try:
            summary = self._transaction_service.import_transactions(user_id, items)
        except AppError as exc:
            job.errors.append(exc.message)
            self._finish(job, ProcessingStatus.FAILED)
            raise

        job.processed_transactions = summary.imported
        job = self._finish(job, ProcessingStatus.COMPLETED)
        return job, summary

    def _finish(self, job: ProcessingJob, status: ProcessingStatus) -> ProcessingJob:
        job.status = status
        job.progress = 100
        job.completed_at = self._clock()
        logger.info("Processing job %s %s", job.id, status.value)
        return self._job_repo.update(job)

    @staticmethod
    def _store(stream: BinaryIO, target: Path, file_type: FileTypeSpec) -> int:
        """Copy the upload to ``target``; returns the byte count."""
        written = 0
        try:
            with target.open("wb") as out:
                while True:
                    chunk = stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > file_type.max_size:
                        raise ValidationError(size_limit_error(file_type))
                    out.write(chunk)
        except Exception:
            target.unlink(missing_ok=True)
            raise
        return written
