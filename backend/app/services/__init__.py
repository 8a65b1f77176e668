# Services module

from app.services.job_order_service import JobOrderService, JobOrderNotFoundError
from app.services.job_order_store import JobOrderStore, scrub_oversized_strings
