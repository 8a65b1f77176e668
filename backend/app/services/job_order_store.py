"""Job order store: flat records keyed by an opaque id."""

import logging
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.job_order import JobOrderRecord
from app.schemas.job_order import JobOrder, generate_id

logger = logging.getLogger(__name__)

CORRUPT_SUFFIX = "...[TRUNCATED_CORRUPT_DATA]"
CORRUPT_KEEP_CHARS = 100


def scrub_oversized_strings(value: Any, max_length: int) -> Tuple[Any, bool]:
    """Replace strings longer than ``max_length`` anywhere in a JSON payload.

    Such strings come from pasted images or runaway input and make every
    later read slow. Returns the cleaned value and whether anything changed.
    """
    if isinstance(value, str):
        if len(value) > max_length:
            return value[:CORRUPT_KEEP_CHARS] + CORRUPT_SUFFIX, True
        return value, False
    if isinstance(value, dict):
        changed = False
        cleaned = {}
        for key, item in value.items():
            cleaned[key], item_changed = scrub_oversized_strings(item, max_length)
            changed = changed or item_changed
        return cleaned, changed
    if isinstance(value, list):
        changed = False
        cleaned_list = []
        for item in value:
            cleaned_item, item_changed = scrub_oversized_strings(item, max_length)
            cleaned_list.append(cleaned_item)
            changed = changed or item_changed
        return cleaned_list, changed
    return value, False


class JobOrderStore:
    """Create/read/update access to stored job orders."""

    def __init__(self, db: Session):
        self.db = db
        self.max_string_length = settings.store_max_string_length

    @staticmethod
    def generate_id() -> str:
        return generate_id()

    def create_order(self, order: JobOrder) -> JobOrder:
        record = JobOrderRecord(id=order.id, created_at=order.created_at)
        self._apply(record, order)
        self.db.add(record)
        self.db.commit()
        logger.info(f"Created job order {order.id} (PO {order.po_number})")
        return order

    def update_order(self, order: JobOrder) -> bool:
        """Replace a stored order. Returns False when the id is unknown."""
        record = self.db.get(JobOrderRecord, order.id)
        if record is None:
            logger.warning(f"Update skipped, job order {order.id} not found")
            return False
        self._apply(record, order)
        self.db.commit()
        logger.info(f"Updated job order {order.id} (status {order.status.value})")
        return True

    def get_order_by_id(self, order_id: str) -> Optional[JobOrder]:
        record = self.db.get(JobOrderRecord, order_id)
        if record is None:
            return None
        return self._load(record)

    def get_all_orders(self) -> List[JobOrder]:
        """All orders, oldest first."""
        records = (
            self.db.query(JobOrderRecord)
            .order_by(JobOrderRecord.created_at, JobOrderRecord.id)
            .all()
        )
        orders = []
        for record in records:
            order = self._load(record)
            if order is not None:
                orders.append(order)
        return orders

    # --- Helpers ---

    def _apply(self, record: JobOrderRecord, order: JobOrder) -> None:
        record.status = order.status
        record.po_number = order.po_number
        record.customer_name = order.customer_name
        record.payload = order.model_dump(mode="json")

    def _load(self, record: JobOrderRecord) -> Optional[JobOrder]:
        payload, changed = scrub_oversized_strings(record.payload, self.max_string_length)
        if changed:
            logger.warning(f"Cleaned oversized text in stored job order {record.id}")
            record.payload = payload
            self.db.commit()

        try:
            return JobOrder.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Stored job order {record.id} is unreadable: {e}")
            return None
