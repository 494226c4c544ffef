"""Tool: Record the sale for a finished repair job."""

import logging
from datetime import datetime

from config import settings
from schemas.entities import Job, PaymentMethod, SaleType
from schemas.workflow import StepResult
from storage import Storage

logger = logging.getLogger(__name__)


def record_job_sale(
    storage: Storage,
    job: Job,
    now: datetime,
    payment_method: PaymentMethod | None = None,
) -> StepResult:
    """
    Record a repair sale for the job's charge amount.

    Only runs when there is something to charge.
    """
    amount = job.charge_amount
    if amount <= 0:
        return StepResult(
            step="record_job_sale",
            success=True,
            message="No amount to record",
        )

    logger.info(f"Recording sale: ${amount:.2f} from job {job.id}...")

    try:
        sale = storage.sales.add({
            "date": now,
            "type": SaleType.REPAIR,
            "description": f"Repair {job.device_info} - {job.problem}".strip(" -"),
            "amount": amount,
            "payment_method": payment_method or PaymentMethod(settings.DEFAULT_PAYMENT_METHOD),
            "client_name": job.client_name,
            "job_id": job.id,
        })

        logger.info(f"Sale recorded: ${amount:.2f}")

        return StepResult(
            step="record_job_sale",
            success=True,
            message=f"Sale of ${amount:.2f} recorded",
            data={"sale_id": sale.id, "amount": amount},
        )

    except Exception as e:
        logger.error(f"Failed to record sale: {str(e)}")
        return StepResult(
            step="record_job_sale",
            success=False,
            message=f"Failed to record sale: {str(e)}",
        )
