"""Job order workflow: sales intake, planner completion and PDF export."""

import logging
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.models.job_order import OrderStatus
from app.schemas.job_order import JobOrder, JobOrderCreate, JobOrderSummary, PlannerUpdate
from app.services.job_order_pdf import generate_job_order_pdf, pdf_filename
from app.services.job_order_store import JobOrderStore

logger = logging.getLogger(__name__)


class JobOrderNotFoundError(LookupError):
    """No job order exists with the requested id."""

    def __init__(self, order_id: str):
        super().__init__(f"Job order {order_id} not found")
        self.order_id = order_id


class JobOrderService:
    """Service for the sales and planner steps of a job order."""

    def __init__(self, db: Session):
        self.store = JobOrderStore(db)

    def create_order(self, request: JobOrderCreate, today: Optional[date] = None) -> JobOrder:
        """Create a job order from the sales form.

        The sales date defaults to today. The order waits for the planner.
        """
        today = today or date.today()
        data = request.model_dump(exclude={"has_product2"})
        if not data.get("sales_date"):
            data["sales_date"] = today.isoformat()

        order = JobOrder(
            id=self.store.generate_id(),
            created_at=datetime.now(timezone.utc),
            status=OrderStatus.PENDING_PLANNER,
            **data,
        )
        return self.store.create_order(order)

    def get_order(self, order_id: str) -> JobOrder:
        order = self.store.get_order_by_id(order_id)
        if order is None:
            raise JobOrderNotFoundError(order_id)
        return order

    def list_orders(self) -> List[JobOrderSummary]:
        """Summaries for the list view, newest first."""
        return [
            JobOrderSummary(
                id=order.id,
                po_number=order.po_number,
                customer_name=order.customer_name,
                product_name=order.product.product_name,
                est_delivery_date=order.est_delivery_date,
                status=order.status,
                created_at=order.created_at,
            )
            for order in reversed(self.store.get_all_orders())
        ]

    def save_planner_section(self, order_id: str, update: PlannerUpdate) -> JobOrder:
        """Apply the planner's section B data.

        The first save completes the order; later saves keep it completed.
        Sales data and the product specs are left untouched.
        """
        order = self.get_order(order_id)
        if order.status == OrderStatus.PENDING_PLANNER:
            logger.info(f"Job order {order_id} completed by planner")

        changes = update.model_dump(exclude={"materials"})
        changes["materials"] = list(update.materials)
        changes["status"] = OrderStatus.COMPLETED
        updated = order.model_copy(update=changes)

        if not self.store.update_order(updated):
            raise JobOrderNotFoundError(order_id)
        return updated

    def render_pdf(self, order_id: str) -> Tuple[str, bytes]:
        """Return the download filename and the PDF bytes for an order."""
        order = self.get_order(order_id)
        return pdf_filename(order), generate_job_order_pdf(order)
