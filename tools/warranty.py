"""Tools: Issue a warranty for a finished job, and process warranty claims."""

import logging
from datetime import datetime, timedelta

from schemas.entities import Job, utcnow
from schemas.workflow import StepResult
from storage import Storage

logger = logging.getLogger(__name__)

# Error codes reported in StepResult.data["error"] when a claim is rejected
REASON_REQUIRED = "reason_required"
NOT_FOUND = "not_found"
ALREADY_CLAIMED = "already_claimed"
UPDATE_FAILED = "update_failed"


def issue_warranty(storage: Storage, job: Job, now: datetime) -> StepResult:
    """
    Create a warranty starting now and lasting the job's warranty days.

    Only runs when the job carries a warranty.
    """
    if not job.has_warranty:
        return StepResult(
            step="issue_warranty",
            success=True,
            message="No warranty requested",
        )

    logger.info(f"Issuing {job.warranty_days}-day warranty for job {job.id}...")

    try:
        warranty = storage.warranties.add({
            "job_id": job.id,
            "client_name": job.client_name,
            "device_info": job.device_info,
            "work_done": job.diagnosis or job.problem,
            "warranty_days": job.warranty_days,
            "start_date": now,
            "end_date": now + timedelta(days=job.warranty_days),
            "is_active": True,
        })

        logger.info(f"Warranty issued: ID={warranty.id} until {warranty.end_date.date().isoformat()}")

        return StepResult(
            step="issue_warranty",
            success=True,
            message=f"Warranty issued until {warranty.end_date.date().isoformat()}",
            data={
                "warranty_id": warranty.id,
                "end_date": warranty.end_date.isoformat(),
            },
        )

    except Exception as e:
        logger.error(f"Failed to issue warranty: {str(e)}")
        return StepResult(
            step="issue_warranty",
            success=False,
            message=f"Failed to issue warranty: {str(e)}",
        )


def _rejected(error: str, message: str) -> StepResult:
    return StepResult(
        step="claim_warranty",
        success=False,
        message=message,
        data={"error": error},
    )


def claim_warranty(
    storage: Storage,
    warranty_id: str,
    reason: str,
    now: datetime | None = None,
) -> StepResult:
    """
    Record a claim against a warranty. A claimed warranty is deactivated
    for good, so a second claim is rejected. A rejected claim carries its
    error code (``NOT_FOUND``, ``ALREADY_CLAIMED``, ...) in ``data["error"]``.
    """
    reason = (reason or "").strip()
    if not reason:
        return _rejected(REASON_REQUIRED, "A claim reason is required")

    try:
        warranty = storage.warranties.get(warranty_id)
        if warranty is None:
            return _rejected(NOT_FOUND, f"Warranty {warranty_id} not found")
        if warranty.claim_date is not None:
            return _rejected(
                ALREADY_CLAIMED,
                f"Warranty {warranty_id} was already claimed on {warranty.claim_date.date().isoformat()}",
            )

        claimed = storage.warranties.claim(warranty_id, reason, now or utcnow())
        if claimed is None:
            return _rejected(UPDATE_FAILED, f"Warranty {warranty_id} could not be updated")

        logger.info(f"Warranty {warranty_id} claimed: {reason}")
        return StepResult(
            step="claim_warranty",
            success=True,
            message=f"Claim recorded for warranty {warranty_id}",
            data={"warranty_id": warranty_id, "claim_date": claimed.claim_date.isoformat()},
        )

    except Exception as e:
        logger.error(f"Failed to process warranty claim: {str(e)}")
        return _rejected(UPDATE_FAILED, f"Failed to process warranty claim: {str(e)}")
