"""Job API routes. Saving a job runs the job workflow."""

import logging
from fastapi import APIRouter, Depends, HTTPException

from schemas.entities import Job, JobCreate, JobUpdate
from schemas.workflow import WorkflowResult
from storage import Storage, get_storage
from workflow.orchestrator import save_job

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.get("", response_model=list[Job])
def list_jobs(storage: Storage = Depends(get_storage)):
    """Get all jobs."""
    return storage.jobs.get_all()


@router.post("", response_model=WorkflowResult, status_code=201)
def create_job(data: JobCreate, storage: Storage = Depends(get_storage)):
    result = save_job(storage, data)
    if result.job is None:
        raise HTTPException(status_code=500, detail=result.summary)
    return result


@router.patch("/{job_id}", response_model=WorkflowResult)
def update_job(job_id: str, data: JobUpdate, storage: Storage = Depends(get_storage)):
    result = save_job(storage, data, job_id=job_id)
    if result.job is None:
        raise HTTPException(status_code=404, detail=result.summary)
    return result


@router.delete("/{job_id}")
def delete_job(job_id: str, storage: Storage = Depends(get_storage)):
    return {"deleted": storage.jobs.delete(job_id)}
