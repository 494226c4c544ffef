from tools.job_record import save_job_record
from tools.inventory import decrement_stock
from tools.sales import record_job_sale
from tools.warranty import issue_warranty, claim_warranty

__all__ = ["save_job_record", "decrement_stock", "record_job_sale", "issue_warranty", "claim_warranty"]
