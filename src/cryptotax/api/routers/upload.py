"""Upload endpoints: accept transaction files, report job status and record parsed rows."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from cryptotax.api.deps import get_current_user, get_upload_service
from cryptotax.api.schemas import (
    UploadAcceptedResponse,
    ProcessingJobResponse,
    ProcessingJobEnvelope,
    IngestionResultsRequest,
    IngestionSummary,
    IngestionResultsResponse,
)
from cryptotax.core.exceptions import ValidationError
from cryptotax.services import TransactionCreate, UploadService

router = APIRouter(prefix="/api/upload", tags=["upload"])


@router.post("/transactions", response_model=UploadAcceptedResponse, status_code=202)
def upload_transactions(
    file: Optional[UploadFile] = File(default=None),
    exchange_type: str = Form(default="auto"),
    sheet_name: Optional[str] = Form(default=None),
    user_id: str = Depends(get_current_user),
    service: UploadService = Depends(get_upload_service),
) -> UploadAcceptedResponse:
    """
    Accept a CSV, Excel or PDF transaction export for processing.

    The file is validated and stored, and a pending job is created for the
    ingestion pipeline. Poll GET /api/upload/transactions?job_id= for status.
    """
    if file is None:
        raise ValidationError("No file provided")

    job = service.accept_upload(
        user_id=user_id,
        filename=file.filename,
        content_type=file.content_type,
        stream=file.file,
        size=file.size,
        exchange_type=exchange_type,
        sheet_name=sheet_name,
    )
    return UploadAcceptedResponse(
        job_id=job.id,
        message=f"File {job.original_name} accepted for processing",
    )


@router.get("/transactions", response_model=ProcessingJobEnvelope)
def get_upload_status(
    job_id: Optional[str] = Query(None, description="Processing job ID"),
    user_id: str = Depends(get_current_user),
    service: UploadService = Depends(get_upload_service),
) -> ProcessingJobEnvelope:
    """Get the status of one of the user's processing jobs."""
    if not job_id:
        raise ValidationError("Job ID required")
    job = service.get_job(user_id, job_id)
    return ProcessingJobEnvelope(job=ProcessingJobResponse.model_validate(job))


@router.post("/jobs/{job_id}/results", response_model=IngestionResultsResponse)
def record_job_results(
    job_id: str,
    request: IngestionResultsRequest,
    user_id: str = Depends(get_current_user),
    service: UploadService = Depends(get_upload_service),
) -> IngestionResultsResponse:
    """
    Import the rows the ingestion pipeline parsed from a job's file.

    Transactions already stored for the user are skipped as duplicates.
    The job is completed, or failed when no rows were parsed.
    """
    items = [TransactionCreate(**row.model_dump()) for row in request.transactions]
    job, summary = service.record_results(
        user_id,
        job_id,
        items,
        total_rows=request.total_rows,
        errors=request.errors,
        warnings=request.warnings,
    )
    return IngestionResultsResponse(
        job_id=job.id,
        results=IngestionSummary(
            total_rows=job.total_transactions or 0,
            saved_transactions=summary.imported,
            duplicates_skipped=summary.duplicates,
            errors=len(job.errors),
            warnings=len(job.warnings),
        ),
        job=ProcessingJobResponse.model_validate(job),
    )
