"""Job order API routes.

Sales creates orders, the planner completes them, and either role can list
orders and download the printable PDF.
"""

import logging
from io import BytesIO
from typing import List

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import StreamingResponse

from app.core.rate_limit import limiter
from app.core.rbac import CurrentRole, RequirePlanner, RequireSales
from app.db.session import DbSession
from app.schemas.job_order import JobOrder, JobOrderCreate, JobOrderSummary, PlannerUpdate
from app.services.job_order_pdf import PdfGenerationError
from app.services.job_order_service import JobOrderNotFoundError, JobOrderService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[JobOrderSummary])
@limiter.limit("60/minute")
def list_job_orders(request: Request, db: DbSession, role: CurrentRole):
    """List job orders, newest first."""
    return JobOrderService(db).list_orders()


@router.post("", response_model=JobOrder, status_code=status.HTTP_201_CREATED)
@limiter.limit("30/minute")
def create_job_order(request: Request, body: JobOrderCreate, db: DbSession, role: RequireSales):
    """Submit a new job order from the sales form."""
    return JobOrderService(db).create_order(body)


@router.get("/{order_id}", response_model=JobOrder)
@limiter.limit("60/minute")
def get_job_order(request: Request, order_id: str, db: DbSession, role: CurrentRole):
    """Get one job order."""
    try:
        return JobOrderService(db).get_order(order_id)
    except JobOrderNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{order_id}/planner", response_model=JobOrder)
@limiter.limit("30/minute")
def save_planner_section(
    request: Request,
    order_id: str,
    body: PlannerUpdate,
    db: DbSession,
    role: RequirePlanner,
):
    """Save the planner section; the first save completes the order."""
    try:
        return JobOrderService(db).save_planner_section(order_id, body)
    except JobOrderNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{order_id}/pdf")
@limiter.limit("20/minute")
def download_job_order_pdf(request: Request, order_id: str, db: DbSession, role: CurrentRole):
    """Download the two-page job order PDF."""
    try:
        filename, pdf_bytes = JobOrderService(db).render_pdf(order_id)
    except JobOrderNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PdfGenerationError:
        logger.exception(f"PDF generation failed for job order {order_id}")
        raise HTTPException(status_code=500, detail="Failed to generate PDF")

    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
