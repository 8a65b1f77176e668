"""API routes."""

from fastapi import APIRouter

from app.api.routes import job_orders

api_router = APIRouter()

api_router.include_router(job_orders.router, prefix="/job-orders", tags=["job-orders"])
