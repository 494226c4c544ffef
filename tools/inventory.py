"""Tool: Decrement stock for the parts a job consumed."""

import logging

from schemas.entities import Job
from schemas.workflow import StepResult
from storage import Storage

logger = logging.getLogger(__name__)


def decrement_stock(storage: Storage, job: Job) -> StepResult:
    """
    Decrement inventory for each part used in the job.

    A part whose item no longer exists, or whose item has less stock than the
    part quantity, is left alone and reported as skipped.
    """
    if not job.parts_used:
        return StepResult(
            step="decrement_stock",
            success=True,
            message="No parts to update",
        )

    logger.info(f"Updating stock for {len(job.parts_used)} parts of job {job.id}...")
    updates = []
    skipped = []
    before_state = {}
    after_state = {}

    try:
        items = {item.id: item for item in storage.inventory.get_all()}

        for part in job.parts_used:
            item = items.get(part.item_id)
            if item is None:
                skipped.append(f"{part.item_name}: not in inventory")
                logger.warning(f"Stock: {part.item_name} ({part.item_id}) not found, skipping")
                continue
            if item.quantity < part.quantity:
                skipped.append(f"{part.item_name}: only {item.quantity} left, needed {part.quantity}")
                logger.warning(f"Stock: {part.item_name} has {item.quantity}, needed {part.quantity}, skipping")
                continue

            updated = storage.inventory.update(item.id, {"quantity": item.quantity - part.quantity})
            if updated is None:
                skipped.append(f"{part.item_name}: update failed")
                continue

            items[item.id] = updated
            before_state[part.item_name] = item.quantity
            after_state[part.item_name] = updated.quantity
            updates.append(f"{part.item_name}: {item.quantity} → {updated.quantity}")
            logger.info(f"Stock: {part.item_name} {item.quantity} → {updated.quantity}")

        low_stock = [i.name for i in items.values() if i.is_low_stock]

        return StepResult(
            step="decrement_stock",
            success=True,
            message=f"Updated {len(updates)} inventory items" + (f", skipped {len(skipped)}" if skipped else ""),
            data={
                "updates": updates,
                "skipped": skipped,
                "before": before_state,
                "after": after_state,
                "low_stock": low_stock,
            },
        )

    except Exception as e:
        logger.error(f"Failed to update stock: {str(e)}")
        return StepResult(
            step="decrement_stock",
            success=False,
            message=f"Failed to update stock: {str(e)}",
        )
