"""Tool: Create or update a job record."""

import logging
from datetime import datetime

from schemas.entities import Job, JobCreate, JobStatus, JobUpdate
from schemas.workflow import StepResult
from storage import Storage
from storage.repositories import as_fields

logger = logging.getLogger(__name__)


def _stamp_dates(fields: dict, previous: Job | None, now: datetime) -> dict:
    """Completion date once completed or delivered; delivery date once delivered.

    Dates already present on the fields or on the previous record are kept.
    """
    status = fields.get("status")
    if status is None or not JobStatus(status).is_finished:
        return fields

    if not fields.get("completion_date") and not (previous and previous.completion_date):
        fields["completion_date"] = now
    if status == JobStatus.DELIVERED:
        if not fields.get("delivery_date") and not (previous and previous.delivery_date):
            fields["delivery_date"] = now
    return fields


def save_job_record(
    storage: Storage,
    data: JobCreate | JobUpdate,
    job_id: str | None,
    previous: Job | None,
    now: datetime,
) -> tuple[StepResult, Job | None]:
    """Add a new job, or apply a partial update to an existing one."""
    logger.info(f"Saving job {job_id or '(new)'}...")

    try:
        if job_id is None:
            job = storage.jobs.add(_stamp_dates(as_fields(data), None, now))
        else:
            fields = _stamp_dates(as_fields(data, partial=True), previous, now)
            job = storage.jobs.update(job_id, fields)
            if job is None:
                return StepResult(
                    step="save_job_record",
                    success=False,
                    message=f"Job {job_id} not found",
                ), None

        logger.info(f"Job saved: ID={job.id} status={job.status.value}")
        return StepResult(
            step="save_job_record",
            success=True,
            message=f"Job saved for {job.client_name} (ID: {job.id})",
            data={"job_id": job.id, "status": job.status.value},
        ), job

    except Exception as e:
        logger.error(f"Failed to save job: {str(e)}")
        return StepResult(
            step="save_job_record",
            success=False,
            message=f"Failed to save job: {str(e)}",
        ), None
