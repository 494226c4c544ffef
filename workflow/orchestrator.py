"""Job workflow orchestrator.

Saving a job is one storage call; finishing a job fans out into stock,
sales and warranty updates. Each step is an independent storage call that
can fail on its own. Failures are logged and reported in the result, and
the remaining steps still run. Nothing is rolled back.
"""

import logging
from datetime import datetime

from schemas.entities import Job, JobCreate, JobUpdate, PaymentMethod, utcnow
from schemas.workflow import StepResult, WorkflowResult
from storage import Storage
from tools.job_record import save_job_record
from tools.inventory import decrement_stock
from tools.sales import record_job_sale
from tools.warranty import issue_warranty

logger = logging.getLogger(__name__)


def _entered_finished_stage(previous: Job | None, job: Job) -> bool:
    """
    Completion side effects run once: when a job reaches completed or
    delivered from an earlier stage, or is created already finished.
    """
    if not job.status.is_finished:
        return False
    return previous is None or not previous.status.is_finished


def _determine_steps(previous: Job | None, job: Job) -> list[str]:
    """
    Business rules:
    1. Completion steps only run when the job enters completed/delivered
    2. Parts used → decrement stock
    3. Something to charge → record a repair sale
    4. Warranty flag → issue a warranty
    """
    if not _entered_finished_stage(previous, job):
        return []

    steps = []
    if job.parts_used:
        steps.append("decrement_stock")
    if job.charge_amount > 0:
        steps.append("record_job_sale")
    if job.has_warranty:
        steps.append("issue_warranty")
    return steps


def save_job(
    storage: Storage,
    data: JobCreate | JobUpdate,
    job_id: str | None = None,
    now: datetime | None = None,
    payment_method: PaymentMethod | None = None,
) -> WorkflowResult:
    """
    Save a job and run its completion side effects:
    1. Add or update the job record
    2. Decide which completion steps apply
    3. Run each step, logging failures without stopping
    4. Return a per-step report
    """
    now = now or utcnow()
    steps: list[StepResult] = []

    logger.info("=" * 60)
    logger.info(f"JOB WORKFLOW — {'updating ' + job_id if job_id else 'new job'}")
    logger.info("=" * 60)

    previous = storage.jobs.get(job_id) if job_id else None

    result, job = save_job_record(storage, data, job_id, previous, now)
    steps.append(result)
    if job is None:
        logger.warning(f"  ✗ save_job_record: {result.message}")
        return WorkflowResult(steps=steps, success=False, summary=result.message)

    planned = _determine_steps(previous, job)
    logger.info(f"Planned {len(planned)} completion steps: {planned}")

    for step_name in planned:
        try:
            if step_name == "decrement_stock":
                result = decrement_stock(storage, job)
            elif step_name == "record_job_sale":
                result = record_job_sale(storage, job, now, payment_method)
            elif step_name == "issue_warranty":
                result = issue_warranty(storage, job, now)
        except Exception as e:
            logger.error(f"Step {step_name} crashed: {str(e)}")
            result = StepResult(
                step=step_name,
                success=False,
                message=f"Unexpected error: {str(e)}",
            )

        steps.append(result)
        if result.success:
            logger.info(f"  ✓ {step_name}: {result.message}")
        else:
            logger.warning(f"  ✗ {step_name}: {result.message}")

    success = all(s.success for s in steps)
    summary = " | ".join(s.message for s in steps)

    logger.info(f"JOB WORKFLOW {'COMPLETE' if success else 'PARTIAL'}: {summary}")

    return WorkflowResult(job=job, steps=steps, success=success, summary=summary)
